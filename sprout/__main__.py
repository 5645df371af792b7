"""Allow running sprout with ``python -m sprout``."""

import sys

from sprout.cli.main import main

sys.exit(main())
