"""Run the launcher."""

import sys

from launchguard.main import main

if __name__ == "__main__":
    sys.exit(main())
