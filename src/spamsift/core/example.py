# =============================================================================
# Labeled Examples
# =============================================================================
# A labeled example is one message from the training corpus together with
# the class a human assigned to it. Examples are produced by the corpus
# loader and consumed exactly once by training.
# =============================================================================

from dataclasses import dataclass
from enum import Enum


class Label(str, Enum):
    """
    The two classes a message can be assigned to.

    The value is the wire string used by the corpus file and the HTTP
    response body, so ``Label.SPAM.value == "spam"``.
    """
    SPAM = "spam"
    HAM = "ham"

    @classmethod
    def parse(cls, value: str | None) -> "Label":
        """
        Convert a corpus label string to a Label.

        Matching is case-insensitive but exact: " spam" is not spam.
        Anything that isn't "spam" counts as ham, which is how the corpus
        has always been read.

        Examples:
            >>> Label.parse("Spam")
            <Label.SPAM: 'spam'>
            >>> Label.parse("ham")
            <Label.HAM: 'ham'>
        """
        if value is not None and value.lower() == cls.SPAM.value:
            return cls.SPAM
        return cls.HAM

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LabeledExample:
    """
    One message from the training corpus.

    Attributes:
        text: Raw message text (may contain newlines, quotes, anything).
        label: Class the message belongs to.
    """
    text: str
    label: Label

    @property
    def is_spam(self) -> bool:
        """Returns True if this example is labeled spam."""
        return self.label is Label.SPAM
