"""Pytest bootstrap for local source imports.

The modules live at the repository root rather than in a package. Ensure
``import scanner`` resolves to the local module when pytest runs from
elsewhere.
"""

import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)
