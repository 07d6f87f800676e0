#!/usr/bin/env python3
"""Script to refresh the merged-PR repository list inside a README section."""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from prlist.cli import main


if __name__ == "__main__":
    sys.exit(main())
