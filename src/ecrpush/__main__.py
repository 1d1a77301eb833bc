"""Allow ``python -m ecrpush``."""

import sys

from ecrpush.cli import main

sys.exit(main())
