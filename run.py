#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four core

Examples:
    # Play against the minimax AI
    python run.py play

    # Two human players
    python run.py play --ai none

    # Deeper search, AI moves first, no pause before its replies
    python run.py play --depth 5 --ai_first --delay 0

    # Analyze a position (42 values, top row first)
    python run.py analyze --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,2,0,0,0,0,0,0,2,1,1,1,0

    # Benchmark the search
    python run.py --debug_level debug benchmark --iterations 10 --depth 4
"""

import sys

from connect4_core.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
