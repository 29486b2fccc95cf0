#!/usr/bin/env python3
"""PomoBlocks — entry point.

Run with:
    python main.py
    python -m pomoblocks
"""

from pomoblocks.__main__ import main


if __name__ == "__main__":
    main()
