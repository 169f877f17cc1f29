#!/usr/bin/env python3
"""EasyTap Timer entry point.

Run with:
    python main.py
    python -m easytap
"""

from easytap.__main__ import main


if __name__ == "__main__":
    main()
