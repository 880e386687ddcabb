#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--dimensions WxH | --width W --height H] --mines N
"""
import sys
from pathlib import Path

# Add src to path so the script runs from a source checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield.cli import main


if __name__ == "__main__":
    sys.exit(main())
