# =============================================================================
# Naive Bayes Spam Classifier
# =============================================================================
# A multinomial Naive Bayes classifier over word counts.
#
# How it works:
#   1. During training, we count how often each token appears in spam vs ham
#      and how many messages of each class we saw
#   2. For classification, we calculate:
#      score(spam) = ln P(spam) + Σ ln P(token|spam)
#      score(ham)  = ln P(ham)  + Σ ln P(token|ham)
#   3. Spam wins only if its score is strictly higher; ties go to ham
#
# Token probabilities use Laplace (add-one) smoothing with the shared
# vocabulary size in the denominator:
#
#   P(token|class) = (count(token, class) + 1) / (words(class) + |vocabulary|)
#
# so unseen tokens never produce a zero probability.
#
# train() returns an immutable TrainedModel. Nothing mutates a model after
# it is built, so predict() can be called from any number of threads.
# =============================================================================

import logging
import math
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from spamsift.core import Label, LabeledExample
from spamsift.spam.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class ModelNotTrainedError(Exception):
    """Raised by a strict model asked to classify without usable training data."""
    pass


@dataclass(frozen=True)
class ClassStatistics:
    """
    Per-class training statistics.

    Attributes:
        email_count: Number of training messages in this class.
        prior: Share of training messages in this class (0.0-1.0).
    """
    email_count: int = 0
    prior: float = 0.0


@dataclass(frozen=True)
class ModelStats:
    """
    Statistics about a trained model.

    Attributes:
        spam_count: Number of spam messages trained on.
        ham_count: Number of ham (non-spam) messages trained on.
        vocabulary_size: Number of distinct tokens seen across both classes.
    """
    spam_count: int = 0
    ham_count: int = 0
    vocabulary_size: int = 0

    @property
    def total(self) -> int:
        return self.spam_count + self.ham_count


class WordFrequencyTable(Mapping[str, int]):
    """
    Read-only token -> occurrence count mapping for one class.

    The total number of words in the class is computed once, when the
    table is built.
    """

    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts = MappingProxyType(dict(counts or {}))
        self._total = sum(self._counts.values())

    @property
    def total(self) -> int:
        """Sum of all counts in the table."""
        return self._total

    def count(self, token: str) -> int:
        """Occurrences of `token`, 0 if never seen."""
        return self._counts.get(token, 0)

    def __getitem__(self, token: str) -> int:
        return self._counts[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"WordFrequencyTable({len(self)} tokens, {self._total} words)"


class TrainedModel:
    """
    An immutable, trained Naive Bayes model.

    Build one with train() (or TrainedModel.empty() for an untrained model).

    Usage:
        >>> model = train([
        ...     LabeledExample("WIN money now", Label.SPAM),
        ...     LabeledExample("see you at lunch", Label.HAM),
        ... ])
        >>> model.predict("win free money")
        <Label.SPAM: 'spam'>

    Degenerate models never fail by default:
        - No training data at all: predicts HAM
        - Only ham seen: predicts HAM
        - Only spam seen: predicts HAM, or SPAM with prefer_observed_class
    With strict=True those cases raise ModelNotTrainedError instead.
    """

    def __init__(
        self,
        spam_words: WordFrequencyTable,
        ham_words: WordFrequencyTable,
        vocabulary: frozenset[str],
        spam: ClassStatistics,
        ham: ClassStatistics,
        *,
        tokenizer: Tokenizer | None = None,
        strict: bool = False,
        prefer_observed_class: bool = False,
    ) -> None:
        """
        Initialize the model. Prefer train() over calling this directly.

        Args:
            spam_words: Token counts for spam.
            ham_words: Token counts for ham.
            vocabulary: Every token seen in either class.
            spam: Spam count and prior.
            ham: Ham count and prior.
            tokenizer: Must be the tokenizer the counts were built with.
            strict: Raise ModelNotTrainedError instead of falling back.
            prefer_observed_class: On a spam-only model, predict SPAM
                                   rather than HAM.
        """
        self.tokenizer = tokenizer or Tokenizer()
        self.strict = strict
        self.prefer_observed_class = prefer_observed_class

        self._spam_words = spam_words
        self._ham_words = ham_words
        self._vocabulary = vocabulary
        self._spam = spam
        self._ham = ham

    @classmethod
    def empty(cls, **options) -> "TrainedModel":
        """Create a model that has never seen any data (both priors 0)."""
        return cls(
            WordFrequencyTable(),
            WordFrequencyTable(),
            frozenset(),
            ClassStatistics(),
            ClassStatistics(),
            **options,
        )

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def spam_words(self) -> WordFrequencyTable:
        return self._spam_words

    @property
    def ham_words(self) -> WordFrequencyTable:
        return self._ham_words

    @property
    def vocabulary(self) -> frozenset[str]:
        return self._vocabulary

    @property
    def spam(self) -> ClassStatistics:
        return self._spam

    @property
    def ham(self) -> ClassStatistics:
        return self._ham

    @property
    def stats(self) -> ModelStats:
        """Get model statistics."""
        return ModelStats(
            spam_count=self._spam.email_count,
            ham_count=self._ham.email_count,
            vocabulary_size=len(self._vocabulary),
        )

    @property
    def is_trained(self) -> bool:
        """Returns True if the model has seen both spam and ham."""
        return self._spam.prior > 0 and self._ham.prior > 0

    # -------------------------------------------------------------------------
    # Prediction
    # -------------------------------------------------------------------------

    def predict(self, text: str | None) -> Label:
        """
        Classify a message.

        Args:
            text: Raw message text. Empty or None is fine; the priors
                  alone decide the result then.

        Returns:
            Label.SPAM if the spam score is strictly higher, else Label.HAM.

        Raises:
            ModelNotTrainedError: Only for a strict model without both classes.
        """
        if self.stats.total == 0 or (self._spam.prior == 0 and self._ham.prior == 0):
            return self._fallback("Model has not been trained", Label.HAM)
        if self._spam.prior == 0:
            return self._fallback("Model was trained without spam examples", Label.HAM)
        if self._ham.prior == 0:
            observed = Label.SPAM if self.prefer_observed_class else Label.HAM
            return self._fallback("Model was trained without ham examples", observed)

        spam_score, ham_score = self.scores(text)
        return Label.SPAM if spam_score > ham_score else Label.HAM

    def scores(self, text: str | None) -> tuple[float, float]:
        """
        Compute the (spam, ham) log scores for a message.

        A class with a zero prior scores -inf. If the vocabulary is empty,
        any token makes both scores +inf (a tie, so predict() says ham);
        with no tokens only the priors are compared.
        """
        tokens = self.tokenizer.tokenize(text)
        return (
            self._log_score(tokens, self._spam, self._spam_words),
            self._log_score(tokens, self._ham, self._ham_words),
        )

    def _log_score(
        self,
        tokens: list[str],
        stats: ClassStatistics,
        words: WordFrequencyTable,
    ) -> float:
        if stats.prior <= 0:
            return -math.inf

        log_prob = math.log(stats.prior)

        vocab_size = len(self._vocabulary)
        if vocab_size == 0:
            # (0 + 1) / 0 per token: +inf for both classes, which ties
            return math.inf if tokens else log_prob

        denominator = words.total + vocab_size
        for token in tokens:
            log_prob += math.log((words.count(token) + 1) / denominator)

        return log_prob

    def _fallback(self, reason: str, label: Label) -> Label:
        if self.strict:
            raise ModelNotTrainedError(reason)
        return label

    def __repr__(self) -> str:
        stats = self.stats
        return (
            f"TrainedModel(spam={stats.spam_count}, ham={stats.ham_count}, "
            f"vocabulary={stats.vocabulary_size})"
        )


# =============================================================================
# Training
# =============================================================================

def train(
    examples: Iterable[LabeledExample],
    tokenizer: Tokenizer | None = None,
    **options,
) -> TrainedModel:
    """
    Train a Naive Bayes model on labeled examples.

    Every token occurrence is counted (a word used twice counts twice).
    Priors are each class's share of the examples; with no examples at
    all both default to 0.5.

    Args:
        examples: Labeled training examples. Iterated once.
        tokenizer: Tokenizer to use. Creates default if None.
        **options: Passed through to TrainedModel (strict,
                   prefer_observed_class).

    Returns:
        A new, read-only TrainedModel.
    """
    tokenizer = tokenizer or Tokenizer()

    spam_counts: Counter[str] = Counter()
    ham_counts: Counter[str] = Counter()
    vocabulary: set[str] = set()
    spam_total = 0
    ham_total = 0

    for example in examples:
        if example.is_spam:
            spam_total += 1
            counts = spam_counts
        else:
            ham_total += 1
            counts = ham_counts

        for token in tokenizer.tokenize(example.text):
            vocabulary.add(token)
            counts[token] += 1

    total = spam_total + ham_total
    if total > 0:
        spam_prior = spam_total / total
        ham_prior = ham_total / total
    else:
        spam_prior = ham_prior = 0.5

    logger.info(
        f"Training complete: {total} emails ({spam_total} spam, {ham_total} ham), "
        f"vocabulary size {len(vocabulary)}"
    )
    if total > 0 and (spam_total == 0 or ham_total == 0):
        logger.warning("Model was trained on only one class of email; predictions will be poor")

    return TrainedModel(
        WordFrequencyTable(spam_counts),
        WordFrequencyTable(ham_counts),
        frozenset(vocabulary),
        ClassStatistics(email_count=spam_total, prior=spam_prior),
        ClassStatistics(email_count=ham_total, prior=ham_prior),
        tokenizer=tokenizer,
        **options,
    )


# =============================================================================
# Stateful Wrapper
# =============================================================================

class NaiveBayesClassifier:
    """
    Holds a model for its owner's lifetime: created empty, trained once.

    Usage:
        >>> classifier = NaiveBayesClassifier()
        >>> classifier.train(examples)
        >>> classifier.predict("Claim your prize now")
        <Label.SPAM: 'spam'>

    Training swaps in a new TrainedModel in one assignment; don't call
    train() while other threads are predicting.

    Attributes:
        tokenizer: Tokenizer shared by training and prediction.
        strict: Raise ModelNotTrainedError instead of falling back.
        prefer_observed_class: On a spam-only model, predict SPAM.
    """

    def __init__(
        self,
        tokenizer: Tokenizer | None = None,
        *,
        strict: bool = False,
        prefer_observed_class: bool = False,
    ) -> None:
        self.tokenizer = tokenizer or Tokenizer()
        self.strict = strict
        self.prefer_observed_class = prefer_observed_class
        self._model = TrainedModel.empty(**self._options())

    def _options(self) -> dict:
        return {
            "tokenizer": self.tokenizer,
            "strict": self.strict,
            "prefer_observed_class": self.prefer_observed_class,
        }

    @property
    def model(self) -> TrainedModel:
        """The current model (empty until train() is called)."""
        return self._model

    @property
    def stats(self) -> ModelStats:
        """Get classifier statistics."""
        return self._model.stats

    @property
    def is_trained(self) -> bool:
        """Returns True if the classifier has seen both spam and ham."""
        return self._model.is_trained

    def train(self, examples: Iterable[LabeledExample]) -> TrainedModel:
        """
        Train on a full set of examples, replacing any previous model.

        Args:
            examples: Labeled training examples.

        Returns:
            The new TrainedModel.
        """
        options = self._options()
        tokenizer = options.pop("tokenizer")
        self._model = train(examples, tokenizer, **options)
        return self._model

    def predict(self, text: str | None) -> Label:
        """Classify a message. See TrainedModel.predict()."""
        return self._model.predict(text)
