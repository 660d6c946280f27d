# =============================================================================
# Navim Entry Point for `python -m navim`
# =============================================================================

import sys

from navim.app import main

if __name__ == "__main__":
    sys.exit(main())
