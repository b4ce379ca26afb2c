"""Allow running as ``python -m reddit_browser``."""

import sys

from reddit_browser.app import main

sys.exit(main())
