# =============================================================================
# Training Corpus Loader
# =============================================================================
# Turns a corpus file into labeled training examples:
#
#   file -> physical lines -> logical records -> (label, message) -> examples
#
# Loading is best-effort. If the file can't be opened, or reading fails
# halfway through, we log it and hand back whatever was assembled up to
# that point. Callers decide whether an empty result is fatal (for the
# CLI and the server it is).
# =============================================================================

import logging
import random
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from spamsift.core import Label, LabeledExample
from spamsift.corpus.records import assemble_records

logger = logging.getLogger(__name__)

# Column positions within a record (index, label, message, flag)
LABEL_FIELD = 1
MESSAGE_FIELD = 2


class CorpusError(Exception):
    """Raised when a corpus can't be used for training (e.g. it's empty)."""
    pass


def examples_from_records(records: Iterable[Sequence[str]]) -> Iterator[LabeledExample]:
    """
    Convert assembled records into labeled examples.

    Args:
        records: Field lists from assemble_records(). Each must have at
                 least 3 fields.

    Yields:
        One LabeledExample per record.
    """
    for fields in records:
        yield LabeledExample(
            text=fields[MESSAGE_FIELD],
            label=Label.parse(fields[LABEL_FIELD]),
        )


def read_examples(lines: Iterable[str]) -> list[LabeledExample]:
    """
    Build examples from an iterable of physical lines (header included).

    If iterating `lines` raises OSError, UnicodeDecodeError or LookupError
    (an unknown error handler name, hit at the first bad byte), the examples
    assembled so far are returned and the failure is logged.
    """
    examples: list[LabeledExample] = []
    try:
        for example in examples_from_records(assemble_records(lines)):
            examples.append(example)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.warning(f"Corpus read failed after {len(examples)} example(s): {e}")
    return examples


def load_corpus(
    path: Path | str,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> list[LabeledExample]:
    """
    Load labeled examples from a corpus file.

    Args:
        path: Corpus file (first line is a header).
        encoding: Text encoding of the file.
        errors: How undecodable bytes are handled ("strict", "replace", ...).

    Returns:
        All examples that could be read. Empty if the file is missing or
        unreadable; this function never raises for I/O problems.
    """
    path = Path(path)
    logger.info(f"Loading corpus from {path}")

    try:
        with open(path, encoding=encoding, errors=errors) as f:
            examples = read_examples(f)
    except (OSError, LookupError) as e:
        logger.error(f"Error reading dataset file {path}: {e}")
        return []

    spam = sum(1 for example in examples if example.is_spam)
    logger.info(f"Loaded {len(examples)} examples ({spam} spam, {len(examples) - spam} ham)")
    return examples


def split_dataset(
    examples: Sequence[LabeledExample],
    train_fraction: float = 0.8,
    seed: int | None = None,
) -> tuple[list[LabeledExample], list[LabeledExample]]:
    """
    Shuffle examples and split them into training and test sets.

    Args:
        examples: All available examples. Not modified.
        train_fraction: Share of examples used for training, in (0, 1).
        seed: Seed for the shuffle, for reproducible splits.

    Returns:
        (training, test) lists.

    Raises:
        ValueError: If train_fraction is outside (0, 1).
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be between 0 and 1, got {train_fraction}")

    shuffled = list(examples)
    random.Random(seed).shuffle(shuffled)

    split_index = int(len(shuffled) * train_fraction)
    return shuffled[:split_index], shuffled[split_index:]
