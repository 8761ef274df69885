#!/usr/bin/env python3
"""AerialTimer — entry point.

Run with:
    python main.py
    python -m aerialtimer
"""

from aerialtimer.__main__ import main


if __name__ == "__main__":
    main()
