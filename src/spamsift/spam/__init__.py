# =============================================================================
# Spam Module
# =============================================================================
# Spam filtering using Naive Bayes classification.
#
# The classifier uses a bag-of-words model with Naive Bayes. It's simple,
# fast, and surprisingly effective for spam detection. The model is trained
# once from a labeled corpus and is read-only afterwards.
# =============================================================================

from spamsift.spam.classifier import (
    ClassStatistics,
    ModelNotTrainedError,
    ModelStats,
    NaiveBayesClassifier,
    TrainedModel,
    WordFrequencyTable,
    train,
)
from spamsift.spam.tokenizer import STOP_WORDS, Tokenizer, tokenize

__all__ = [
    "ClassStatistics",
    "ModelNotTrainedError",
    "ModelStats",
    "NaiveBayesClassifier",
    "STOP_WORDS",
    "TrainedModel",
    "Tokenizer",
    "WordFrequencyTable",
    "tokenize",
    "train",
]
