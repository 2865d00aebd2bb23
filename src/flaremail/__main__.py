# =============================================================================
# FlareMail Entry Point for `python -m flaremail`
# =============================================================================
# Equivalent to running the 'flaremail' command after installation.
# =============================================================================

import sys

from flaremail.app import main

if __name__ == "__main__":
    sys.exit(main())
