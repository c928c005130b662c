# =============================================================================
# Record Assembler Tests
# =============================================================================
# Covers the field splitter, the record-boundary predicates, the assembler
# state machine, and the known limitations of the boundary heuristic.
# =============================================================================

from spamsift.corpus.records import (
    AssemblerState,
    RecordAssembler,
    assemble_records,
    is_record_complete,
    looks_like_record_start,
    split_fields,
)


# =============================================================================
# split_fields
# =============================================================================

class TestSplitFields:

    def test_plain_fields(self):
        assert split_fields("1,ham,hello,0") == ["1", "ham", "hello", "0"]

    def test_quoted_field_keeps_delimiter(self):
        assert split_fields('1,ham,"hi, there",0') == ["1", "ham", "hi, there", "0"]

    def test_doubled_quote_decodes_to_one_quote(self):
        fields = split_fields('1,spam,"say ""hi"" now",1')
        assert fields[2] == 'say "hi" now'

    def test_quoted_field_keeps_newline(self):
        assert split_fields('2,spam,"line one\nline two",1')[2] == "line one\nline two"

    def test_trailing_delimiter_gives_empty_last_field(self):
        assert split_fields("a,b,") == ["a", "b", ""]

    def test_empty_record_is_one_empty_field(self):
        assert split_fields("") == [""]

    def test_closing_quote_at_end_of_string(self):
        assert split_fields('"abc"') == ["abc"]

    def test_quote_in_middle_of_unquoted_field_toggles(self):
        # Quotes aren't required to wrap the whole field
        assert split_fields('a"b,c"d,e') == ["ab,cd", "e"]


# =============================================================================
# Boundary predicates
# =============================================================================

class TestBoundaryPredicates:

    def test_record_start_requires_leading_digit(self):
        assert looks_like_record_start("12,spam,hello,1")
        assert not looks_like_record_start("continued text,1")
        assert not looks_like_record_start(" 1,ham,x,0")
        assert not looks_like_record_start("")

    def test_complete_when_flag_and_quotes_balanced(self):
        assert is_record_complete("1,ham,hi,0\n", "1,ham,hi,0")
        assert is_record_complete('1,ham,"a\nb",1\n', 'b",1')

    def test_incomplete_with_odd_quotes(self):
        assert not is_record_complete('1,ham,"hi,0\n', '1,ham,"hi,0')

    def test_incomplete_without_flag_suffix(self):
        assert not is_record_complete("1,ham,hi,2\n", "1,ham,hi,2")
        assert not is_record_complete("1,ham,hi\n", "1,ham,hi")

    def test_only_last_line_suffix_counts(self):
        buffered = "1,ham,ends in,1\nmore text\n"
        assert not is_record_complete(buffered, "more text")


# =============================================================================
# RecordAssembler
# =============================================================================

class TestRecordAssembler:

    def test_single_line_record(self):
        assembler = RecordAssembler()
        assert assembler.feed("1,ham,hello there,0") == ["1", "ham", "hello there", "0"]
        assert assembler.state is AssemblerState.COMPLETE
        assert not assembler.has_pending

    def test_multi_line_record(self):
        assembler = RecordAssembler()

        assert assembler.feed('5,spam,"Buy now, cheap') is None
        assert assembler.state is AssemblerState.ACCUMULATING
        assert assembler.has_pending
        assert assembler.pending == '5,spam,"Buy now, cheap\n'

        fields = assembler.feed('pills",1')
        assert fields == ["5", "spam", "Buy now, cheap\npills", "1"]
        assert assembler.state is AssemblerState.COMPLETE
        assert assembler.pending == ""

    def test_stray_fragment_is_skipped(self):
        assembler = RecordAssembler()
        assert assembler.feed("leftover text,1") is None
        assert not assembler.has_pending
        assert assembler.skipped_fragments == 1

    def test_continuation_lines_need_no_leading_digit(self):
        assembler = RecordAssembler()
        assembler.feed('3,ham,"first')
        assert assembler.feed('second",0') == ["3", "ham", "first\nsecond", "0"]
        assert assembler.skipped_fragments == 0

    def test_short_record_is_dropped(self):
        assembler = RecordAssembler()
        assert assembler.feed("7,0") is None
        assert assembler.malformed_records == 1
        assert not assembler.has_pending

    def test_next_record_starts_clean(self):
        assembler = RecordAssembler()
        assembler.feed("1,ham,one,0")
        assert assembler.feed("2,spam,two,1") == ["2", "spam", "two", "1"]


# =============================================================================
# assemble_records
# =============================================================================

class TestAssembleRecords:

    def test_header_is_discarded(self):
        records = list(assemble_records(["1,ham,header looks like data,0", "2,spam,real,1"]))
        assert records == [["2", "spam", "real", "1"]]

    def test_empty_input(self):
        assert list(assemble_records([])) == []
        assert list(assemble_records(["index,label,text,label_num"])) == []

    def test_line_terminators_are_stripped(self):
        lines = ["header\r\n", "1,ham,hello,0\r\n", "2,spam,win,1\n"]
        assert [r[2] for r in assemble_records(lines)] == ["hello", "win"]

    def test_embedded_comma_and_newline(self):
        lines = [
            "index,label,text,label_num",
            '1,spam,"Dear friend, you won',
            'the prize",1',
        ]
        records = list(assemble_records(lines))
        assert len(records) == 1
        assert records[0][1] == "spam"
        assert records[0][2] == "Dear friend, you won\nthe prize"

    def test_trailing_partial_record_is_discarded(self):
        lines = ["header", "1,ham,ok,0", '2,spam,"never closed']
        assert list(assemble_records(lines)) == [["1", "ham", "ok", "0"]]

    def test_sample_corpus(self, corpus_text):
        records = list(assemble_records(corpus_text.splitlines(keepends=True)))
        assert [r[1] for r in records] == ["ham", "spam", "ham", "spam"]
        assert records[1][2] == 'Subject: WIN money now\nclaim your "free" prize money'


# =============================================================================
# Known limitations of the boundary heuristic
# =============================================================================

class TestHeuristicLimitations:

    def test_unbalanced_literal_quote_closes_record_early(self):
        # The stray quote inside the message balances the opening quote, so
        # the first line's trailing ",1" is taken as the end of the record.
        lines = [
            "header",
            '4,spam,"He said "hi,1',
            'and more",0',
        ]
        records = list(assemble_records(lines))
        assert records == [["4", "spam", "He said hi", "1"]]

    def test_odd_literal_quote_swallows_following_records(self):
        lines = [
            "header",
            '9,ham,He said "hi,0',
            "10,ham,hello,0",
        ]
        # Quote count never returns to even, so nothing is emitted
        assert list(assemble_records(lines)) == []
