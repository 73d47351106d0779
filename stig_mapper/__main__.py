"""Allow ``python -m stig_mapper``."""

import sys

from stig_mapper.ui.cli import main

sys.exit(main())
