#!/usr/bin/python3

"""
Entry point script for synpad when run from a source checkout.
"""

import sys

from src.synpad.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
