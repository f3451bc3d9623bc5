"""
CLI interface for reprfmt.

Usage:
    python -m reprfmt data.json
    python -m reprfmt --help
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
