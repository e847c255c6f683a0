#!/usr/bin/env python3
"""
SpOnGiFy - Case Alternating Text Filter
=======================================
Rewrites text by alternating the case of its letters.

Usage:
    python main.py "your text here"
    echo "hello" | python main.py -
"""

import sys

from spongify.cli import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
