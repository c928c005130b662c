# =============================================================================
# Corpus Module
# =============================================================================
# Reads the labeled training corpus. The file format is loosely-quoted
# comma-delimited text where a single message may span several lines, so
# records are rebuilt with a quote-balance heuristic before being turned
# into LabeledExamples.
# =============================================================================

from spamsift.corpus.loader import CorpusError, load_corpus, read_examples, split_dataset
from spamsift.corpus.records import RecordAssembler, assemble_records, split_fields

__all__ = [
    "CorpusError",
    "RecordAssembler",
    "assemble_records",
    "load_corpus",
    "read_examples",
    "split_dataset",
    "split_fields",
]
