"""Allow ``python -m pinref``."""

import sys

from .cli import main

sys.exit(main())
