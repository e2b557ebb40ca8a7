"""Allow ``python -m gemini_study``."""

import sys

from gemini_study.cli import main

if __name__ == "__main__":
    sys.exit(main())
