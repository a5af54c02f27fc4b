"""Entry point for ``python -m p5setup_tool``."""

import sys

from p5setup_tool.cli import main

sys.exit(main())
