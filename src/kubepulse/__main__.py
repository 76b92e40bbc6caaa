"""Allow ``python -m kubepulse``."""

import sys

from kubepulse.main import main

sys.exit(main())
