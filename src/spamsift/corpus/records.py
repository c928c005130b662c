# =============================================================================
# Resilient Delimited-Record Reader
# =============================================================================
# The training corpus is a comma-delimited file with the schema:
#
#   index,label,message,flag
#
# where `message` may contain commas, quotes and literal newlines, and the
# quoting is not always consistent. A physical line is therefore NOT a
# record. We rebuild logical records from physical lines with a heuristic:
#
#   - A record may only start on a line that begins with a digit (the index)
#   - A record is complete when the line just added ends in ",0" or ",1"
#     (the only legal flag values) AND the buffer holds an even number of
#     quote characters (nothing is left mid-quote)
#
# Known limitation: a quoted message whose own text ends a physical line in
# ",0" or ",1" closes the record early whenever the quotes happen to balance
# at that point, and a message with an odd number of literal quotes keeps
# the record open until a later line rebalances it.
# =============================================================================

import logging
import re
from collections.abc import Iterable, Iterator
from enum import Enum

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'

# Legal values of the trailing numeric field, as seen at end of line
RECORD_TERMINATORS = (",0", ",1")

_RECORD_START = re.compile(r"[0-9]")


# =============================================================================
# Boundary Predicates
# =============================================================================

def looks_like_record_start(line: str) -> bool:
    """Returns True if a physical line can begin a new record (leading digit)."""
    return _RECORD_START.match(line) is not None


def is_record_complete(buffered_text: str, last_line: str) -> bool:
    """
    Decide whether the buffered physical lines form a complete record.

    Args:
        buffered_text: Everything accumulated for the current record,
                       including `last_line`.
        last_line: The physical line that was just appended (no newline).

    Returns:
        True if `last_line` ends with a legal flag field and the quote
        count across the whole buffer is even.
    """
    if not last_line.endswith(RECORD_TERMINATORS):
        return False
    return buffered_text.count(QUOTE) % 2 == 0


# =============================================================================
# Field Splitting
# =============================================================================

def split_fields(record: str, delimiter: str = DELIMITER) -> list[str]:
    """
    Split one logical record into fields.

    Quoted fields may contain the delimiter and newlines; a doubled quote
    inside a quoted field stands for one literal quote. The last field is
    emitted even without a trailing delimiter, so "" gives [""].

    Examples:
        >>> split_fields('1,ham,"hi, there",0')
        ['1', 'ham', 'hi, there', '0']
        >>> split_fields('"say ""hi"" now"')
        ['say "hi" now']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    i = 0
    length = len(record)
    while i < length:
        char = record[i]

        if char == QUOTE:
            if in_quotes and i + 1 < length and record[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1  # Skip the second half of the escaped pair
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

        i += 1

    fields.append("".join(current))
    return fields


# =============================================================================
# Record Assembly State Machine
# =============================================================================

class AssemblerState(Enum):
    """States of the record assembler."""
    ACCUMULATING = "accumulating"   # Buffer empty or holding a partial record
    COMPLETE = "complete"           # Last fed line closed a record


class RecordAssembler:
    """
    Rebuilds logical records from physical lines.

    Feed lines one at a time (header already removed, line terminators
    stripped). Each call returns the parsed fields of a record the line
    completed, or None if the record is still open or the line was
    dropped.

    Usage:
        >>> assembler = RecordAssembler()
        >>> assembler.feed('1,spam,"first line')
        >>> assembler.feed('second line",1')
        ['1', 'spam', 'first line\\nsecond line', '1']

    Attributes:
        min_fields: Completed records with fewer fields are discarded.
    """

    def __init__(self, min_fields: int = 3) -> None:
        self.min_fields = min_fields
        self._lines: list[str] = []
        self._state = AssemblerState.ACCUMULATING

        # Counters for debug logging
        self.skipped_fragments = 0
        self.malformed_records = 0

    @property
    def state(self) -> AssemblerState:
        """State after the most recent feed()."""
        return self._state

    @property
    def pending(self) -> str:
        """Text buffered for the record currently being assembled."""
        return "".join(self._lines)

    @property
    def has_pending(self) -> bool:
        """Returns True if a partial record is buffered."""
        return bool(self._lines)

    def feed(self, line: str) -> list[str] | None:
        """
        Consume one physical line.

        Args:
            line: A physical line without its line terminator.

        Returns:
            Fields of the completed record, or None.
        """
        self._state = AssemblerState.ACCUMULATING

        if not self._lines and not looks_like_record_start(line):
            # Stray continuation of a record we already gave up on
            self.skipped_fragments += 1
            return None

        self._lines.append(line + "\n")
        buffered = self.pending

        if not is_record_complete(buffered, line):
            return None

        self._state = AssemblerState.COMPLETE
        record = buffered.strip()
        self._reset()

        fields = split_fields(record)
        if len(fields) < self.min_fields:
            self.malformed_records += 1
            logger.debug(f"Dropping malformed record with {len(fields)} field(s)")
            return None

        return fields

    def _reset(self) -> None:
        self._lines = []


def assemble_records(lines: Iterable[str]) -> Iterator[list[str]]:
    """
    Turn a stream of physical lines into logical records.

    The first line is a header and is discarded. Line terminators are
    stripped before assembly. A partial record left at end of input is
    dropped.

    Args:
        lines: Physical lines, e.g. an open text file.

    Yields:
        The fields of each complete record with at least 3 fields.
    """
    assembler = RecordAssembler()
    iterator = iter(lines)

    # Header
    if next(iterator, None) is None:
        return

    for raw_line in iterator:
        fields = assembler.feed(raw_line.rstrip("\r\n"))
        if fields is not None:
            yield fields

    if assembler.has_pending:
        logger.debug("Discarding incomplete record at end of input")
    if assembler.skipped_fragments or assembler.malformed_records:
        logger.debug(
            f"Skipped {assembler.skipped_fragments} stray line(s) and "
            f"{assembler.malformed_records} malformed record(s)"
        )
