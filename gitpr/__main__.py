"""Allow ``python -m gitpr``."""

import sys

from gitpr.main import main

if __name__ == "__main__":
    sys.exit(main())
