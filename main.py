#!/usr/bin/env python3
# /tedit/main.py
"""
tedit launcher for a source checkout.

Makes the `src/` package importable without installation and hands over to
`tedit.main.start`. Installed copies use the `tedit` console script instead.
"""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from tedit.main import start  # noqa: E402


if __name__ == "__main__":
    start()
