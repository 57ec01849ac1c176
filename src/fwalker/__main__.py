"""Allow ``python -m fwalker``."""

import sys

from .cli import main


sys.exit(main())
