#!/usr/bin/env python3
"""
QA Booking Confirmation Processor Startup Script

Launches the interactive processor with the project root on the Python path
and line-buffered output so progress shows up immediately when piped.
"""

import sys
import os

sys.stdout.reconfigure(line_buffering=True)
sys.stderr.reconfigure(line_buffering=True)

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from qabooking.processor import main

if __name__ == '__main__':
    main()
