# =============================================================================
# Batch Evaluation
# =============================================================================
# Measures how well a trained model does on held-out examples.
# =============================================================================

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from spamsift.core import Label, LabeledExample
from spamsift.spam import TrainedModel

logger = logging.getLogger(__name__)


# Demo messages printed with their predictions after training
SAMPLE_MESSAGES = [
    "WINNER!! As a valued network customer you have been selected to receive "
    "a £900 prize reward!",
    "Hey, are we still on for the meeting tomorrow at 10am? Let me know.",
    "URGENT! You have won a 1 week FREE membership in our £100,000 Prize "
    "Jackpot! Txt the word: CLAIM to No: 81010",
]


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of evaluating a model on a test set.

    Attributes:
        total: Number of test examples.
        correct: Number of examples whose prediction matched the label.
    """
    total: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        """Accuracy as a percentage (0.0 when there were no examples)."""
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100

    def summary(self) -> str:
        """Human-readable report lines."""
        return (
            f"Total test emails: {self.total}\n"
            f"Correct predictions: {self.correct}\n"
            f"Accuracy: {self.accuracy:.2f}%"
        )


def evaluate(model: TrainedModel, examples: Iterable[LabeledExample]) -> EvaluationResult:
    """
    Predict every example and count how many match their label.

    Args:
        model: A trained model.
        examples: Held-out examples.

    Returns:
        EvaluationResult with the totals.
    """
    total = 0
    correct = 0
    for example in examples:
        total += 1
        if model.predict(example.text) is example.label:
            correct += 1

    result = EvaluationResult(total=total, correct=correct)
    logger.info(f"Evaluated {total} examples: {result.accuracy:.2f}% accuracy")
    return result


def classify_samples(
    model: TrainedModel,
    messages: Iterable[str] = SAMPLE_MESSAGES,
) -> list[tuple[str, Label]]:
    """Return (message, prediction) pairs for a few demo messages."""
    return [(message, model.predict(message)) for message in messages]
