"""Pytest bootstrap for local source imports.

Ensure ``import mavenindex`` resolves to ``src/`` when the package has not
been installed.
"""

from __future__ import annotations

import sys
from pathlib import Path


SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
SRC_ROOT_STR = str(SRC_ROOT)

if SRC_ROOT_STR not in sys.path:
    sys.path.insert(0, SRC_ROOT_STR)
