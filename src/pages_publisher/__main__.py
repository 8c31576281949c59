"""Entry point for ``python -m pages_publisher``."""

import sys

from .app import main


if __name__ == "__main__":
    sys.exit(main())
