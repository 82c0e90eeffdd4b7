"""
Module execution entry point.

Allows running with: python -m fleetproof_cli
"""

import sys
from fleetproof_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
