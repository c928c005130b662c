# =============================================================================
# Corpus Loader Tests
# =============================================================================

import pytest

from spamsift.core import Label, LabeledExample
from spamsift.corpus import load_corpus, read_examples, split_dataset


class TestLabelParsing:

    def test_spam_is_case_insensitive(self):
        assert Label.parse("spam") is Label.SPAM
        assert Label.parse("SPAM") is Label.SPAM
        assert Label.parse("sPaM") is Label.SPAM

    def test_surrounding_whitespace_is_not_ignored(self):
        assert Label.parse(" spam") is Label.HAM
        assert Label.parse("spam ") is Label.HAM

    def test_everything_else_is_ham(self):
        assert Label.parse("ham") is Label.HAM
        assert Label.parse("junk") is Label.HAM
        assert Label.parse("") is Label.HAM
        assert Label.parse(None) is Label.HAM


class TestLoadCorpus:

    def test_loads_sample_corpus(self, corpus_file):
        examples = load_corpus(corpus_file)

        assert [e.label for e in examples] == [Label.HAM, Label.SPAM, Label.HAM, Label.SPAM]
        assert examples[0].text == "Subject: lunch tomorrow\nsee you at lunch, usual place"
        assert examples[2] == LabeledExample("Subject: meeting notes attached", Label.HAM)

    def test_missing_file_gives_empty_list(self, temp_dir):
        assert load_corpus(temp_dir / "nope.csv") == []

    def test_directory_gives_empty_list(self, temp_dir):
        assert load_corpus(temp_dir) == []

    def test_undecodable_bytes_are_replaced(self, temp_dir):
        path = temp_dir / "latin1.csv"
        path.write_bytes(b"index,label,text,label_num\n1,spam,caf\xe9 prize,1\n")

        examples = load_corpus(path)

        assert len(examples) == 1
        assert examples[0].text == "caf\ufffd prize"

    def test_strict_decoding_failure_keeps_what_was_read(self, temp_dir):
        path = temp_dir / "latin1.csv"
        path.write_bytes(b"index,label,text,label_num\n1,spam,caf\xe9 prize,1\n")

        examples = load_corpus(path, errors="strict")

        # The bad byte sits in the first decoded chunk, so nothing was read
        assert examples == []

    def test_unknown_encoding_gives_empty_list(self, corpus_file):
        assert load_corpus(corpus_file, encoding="no-such-codec") == []

    def test_unknown_error_handler_does_not_raise(self, temp_dir):
        path = temp_dir / "latin1.csv"
        path.write_bytes(b"index,label,text,label_num\n1,spam,caf\xe9 prize,1\n")

        assert load_corpus(path, errors="no-such-handler") == []

    def test_examples_are_immutable(self, corpus_file):
        example = load_corpus(corpus_file)[0]
        with pytest.raises(AttributeError):
            example.text = "changed"


class TestReadExamples:

    def test_read_failure_keeps_partial_results(self):
        def failing_lines():
            yield "index,label,text,label_num"
            yield "1,spam,buy now,1"
            yield "2,ham,hi there,0"
            raise OSError("device unplugged")

        examples = read_examples(failing_lines())

        assert [e.text for e in examples] == ["buy now", "hi there"]

    def test_failure_mid_record_drops_that_record(self):
        def failing_lines():
            yield "header"
            yield "1,ham,done,0"
            yield '2,spam,"half'
            raise OSError("read error")

        assert [e.text for e in read_examples(failing_lines())] == ["done"]


class TestSplitDataset:

    @pytest.fixture
    def examples(self):
        return [LabeledExample(f"message {i}", Label.SPAM if i % 2 else Label.HAM) for i in range(10)]

    def test_split_sizes(self, examples):
        training, test = split_dataset(examples, train_fraction=0.8, seed=1)
        assert len(training) == 8
        assert len(test) == 2

    def test_split_is_a_partition(self, examples):
        training, test = split_dataset(examples, seed=3)
        assert sorted(e.text for e in training + test) == sorted(e.text for e in examples)

    def test_same_seed_same_split(self, examples):
        assert split_dataset(examples, seed=42) == split_dataset(examples, seed=42)

    def test_input_is_not_modified(self, examples):
        original = list(examples)
        split_dataset(examples, seed=7)
        assert examples == original

    @pytest.mark.parametrize("fraction", [0.0, 1.0, -0.5, 2])
    def test_rejects_bad_fraction(self, examples, fraction):
        with pytest.raises(ValueError):
            split_dataset(examples, train_fraction=fraction)
