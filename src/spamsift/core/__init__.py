# =============================================================================
# SpamSift Core Module
# =============================================================================
# This module contains the core domain values for SpamSift. These are pure
# Python types with no external dependencies, so they can be imported
# anywhere without causing circular dependency issues.
#
#   - Label: The two classes a message can belong to (spam / ham)
#   - LabeledExample: One training example (message text + label)
# =============================================================================

from spamsift.core.example import Label, LabeledExample

__all__ = [
    "Label",
    "LabeledExample",
]
