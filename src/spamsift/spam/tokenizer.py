# =============================================================================
# Message Tokenizer for Spam Classification
# =============================================================================
# Converts message text into tokens (features) for the spam classifier.
#
# Tokenization is deliberately plain:
#   1. Lowercase everything
#   2. Drop every character that isn't an ASCII letter, digit or whitespace
#      (punctuation, accents and apostrophes all go, so "don't" -> "dont")
#   3. Split on runs of whitespace
#   4. Drop common English stop words
#
# Order and duplicates are preserved: "buy buy buy" is three tokens, and
# the classifier counts every one of them.
# =============================================================================

import re
from collections.abc import Iterable


# Common English stop words (not useful for classification)
STOP_WORDS = frozenset([
    "a", "about", "above", "after", "again", "against", "all", "am", "an",
    "and", "any", "are", "as", "at", "be", "because", "been", "before",
    "being", "below", "between", "both", "but", "by", "can", "cannot",
    "could", "did", "do", "does", "doing", "down", "during", "each", "few",
    "for", "from", "further", "had", "has", "have", "having", "he", "her",
    "here", "hers", "herself", "him", "himself", "his", "how", "i", "if",
    "in", "into", "is", "it", "its", "itself", "me", "more", "most", "my",
    "myself", "no", "nor", "not", "of", "off", "on", "once", "only", "or",
    "other", "our", "ours", "ourselves", "out", "over", "own", "same",
    "she", "should", "so", "some", "such", "than", "that", "the", "their",
    "theirs", "them", "themselves", "then", "there", "these", "they",
    "this", "those", "through", "to", "too", "under", "until", "up",
    "very", "was", "we", "were", "what", "when", "where", "which", "while",
    "who", "whom", "why", "with", "would", "you", "your", "yours",
    "yourself", "yourselves",
])

# Anything that survives this filter is [a-z0-9] or ASCII whitespace
_STRIP_PATTERN = re.compile(r"[^a-z0-9\s]", re.ASCII)


class Tokenizer:
    """
    Converts message text into tokens for spam classification.

    Tokenizers are stateless once built, so a single instance can be shared
    between training and any number of concurrent predictions.

    Usage:
        >>> tokenizer = Tokenizer()
        >>> tokenizer.tokenize("WIN money now!!!")
        ['win', 'money']

    Attributes:
        stop_words: Words dropped from the output. Must be lowercase.
    """

    def __init__(self, stop_words: Iterable[str] | None = None) -> None:
        """
        Initialize the tokenizer.

        Args:
            stop_words: Custom stop-word set. Uses STOP_WORDS if None.
        """
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS

    def tokenize(self, text: str | None) -> list[str]:
        """
        Tokenize message text.

        Args:
            text: Raw message text. None and "" both give no tokens.

        Returns:
            Tokens in source order, duplicates retained.
        """
        if not text:
            return []

        cleaned = _STRIP_PATTERN.sub("", text.lower())

        # str.split() with no separator already discards empty strings
        return [word for word in cleaned.split() if word not in self.stop_words]


_default_tokenizer = Tokenizer()


def tokenize(text: str | None) -> list[str]:
    """Tokenize text with the default stop-word list."""
    return _default_tokenizer.tokenize(text)
