"""Allow running as ``python -m clover_fab``."""

import sys

from clover_fab.cli import main

sys.exit(main())
