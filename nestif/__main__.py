"""
Entry point for running nestif as a module.

Usage:
    python -m nestif ./...
    python -m nestif --help
"""

import sys
from nestif.cli import main

if __name__ == "__main__":
    sys.exit(main())
