"""Allow ``python -m trace_query``."""

import sys

from trace_query.cli import main

sys.exit(main())
