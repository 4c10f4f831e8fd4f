"""
VALID8 CLI entry point.

Usage:
    python -m valid8 FILE
    python -m valid8 --example modus-ponens
    python -m valid8
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
