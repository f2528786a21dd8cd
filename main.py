#!/usr/bin/env python3
"""BreakBank — entry point.

Run with:
    python main.py
    python -m breakbank
"""

from breakbank.__main__ import main


if __name__ == "__main__":
    main()
