"""
Package entry point.

Allows running: python -m transit_regions closest 47.6097 -122.3331
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
