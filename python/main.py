#!/usr/bin/env python3
"""Amphipod burrow solver.

Usage::

    python main.py                # all variants of the built-in example
    python main.py -f rich        # Rich terminal tables
    python main.py --help         # every option
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from burrow.cli import app  # noqa: E402

if __name__ == "__main__":
    app()
