#!/usr/bin/env python3
"""Convert a FreeCAD "Flattened SVG" export into a single-path icon."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sketch_icon.cli import main


if __name__ == "__main__":
    sys.exit(main())
