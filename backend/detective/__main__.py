"""Entry point for `python -m detective`."""

import sys

from detective.cli import main

sys.exit(main())
