# =============================================================================
# SpamSift: A Naive Bayes Spam Classifier
# =============================================================================
#
# SpamSift learns to tell spam from ham (legitimate mail) using a labeled
# corpus, then classifies new messages.
#
# Features:
#   - Resilient loader for loosely-quoted, multi-line CSV corpora
#   - Multinomial Naive Bayes with Laplace smoothing, scored in log space
#   - Held-out accuracy evaluation
#   - HTTP endpoint for classifying one message per request
#   - XDG Base Directory compliant TOML configuration
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "spamsift"

# Main entry point - this is what gets called by the 'spamsift' command
from spamsift.app import main

__all__ = ["main", "__version__", "__app_name__"]
