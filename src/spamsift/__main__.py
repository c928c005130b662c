# =============================================================================
# SpamSift Entry Point for `python -m spamsift`
# =============================================================================
# This module allows SpamSift to be run as a Python module:
#
#   python -m spamsift evaluate
#
# This is equivalent to running the 'spamsift' command after installation.
# =============================================================================

import sys

from spamsift.app import main

if __name__ == "__main__":
    sys.exit(main())
