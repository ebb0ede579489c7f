"""Allow ``python -m npcnames``."""

import sys

from npcnames.cli import main

sys.exit(main())
