"""
Entry point for running the launcher via `python -m launchguard`.
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
