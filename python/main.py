#!/usr/bin/env python3
"""Tile Space Explorer.

Usage::

    python main.py play                         # interactive, random 3×3
    python main.py solve --start 1,2,3,4,5,6,7,0,8
    python main.py explore -a bfs               # whole reachability class
    python main.py step -a dfs --steps 30       # first 30 expansions
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tilespace_cli.cli import app  # noqa: E402

if __name__ == "__main__":
    app()
