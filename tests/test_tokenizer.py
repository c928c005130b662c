# =============================================================================
# Tokenizer Tests
# =============================================================================

import pytest

from spamsift.spam import STOP_WORDS, Tokenizer, tokenize


def test_none_and_empty_give_no_tokens():
    assert tokenize(None) == []
    assert tokenize("") == []
    assert tokenize("   \n\t ") == []


def test_lowercases_and_strips_punctuation():
    assert tokenize("Hello, WORLD!!") == ["hello", "world"]


def test_removes_stop_words():
    assert tokenize("the cat sat") == ["cat", "sat"]


def test_apostrophes_are_removed_not_split():
    assert tokenize("Don't stop") == ["dont", "stop"]


def test_non_ascii_letters_are_dropped():
    assert tokenize("café naïve") == ["caf", "nave"]


def test_digits_are_kept():
    assert tokenize("Call 555-1234 now") == ["call", "5551234", "now"]


def test_preserves_order_and_duplicates():
    assert tokenize("buy buy now buy") == ["buy", "buy", "now", "buy"]


def test_splits_on_any_whitespace_run():
    assert tokenize("alpha\tbeta\n\n  gamma") == ["alpha", "beta", "gamma"]


def test_output_never_contains_stop_words():
    text = " ".join(sorted(STOP_WORDS)) + " prize"
    assert tokenize(text) == ["prize"]
    assert tokenize(text.upper()) == ["prize"]


@pytest.mark.parametrize(
    "text",
    [
        "WINNER!! You have been selected",
        "Meeting at 10am, let me know",
        "Subject: re: re: FWD: Hello There",
    ],
)
def test_case_insensitive(text):
    assert tokenize(text) == tokenize(text.upper()) == tokenize(text.lower())


def test_stop_word_list_size():
    assert len(STOP_WORDS) > 100
    assert all(word == word.lower() for word in STOP_WORDS)


def test_custom_stop_words():
    tokenizer = Tokenizer(stop_words={"cat"})
    assert tokenizer.tokenize("The cat sat") == ["the", "sat"]


def test_tokenizer_is_deterministic():
    tokenizer = Tokenizer()
    text = "Limited time offer: claim your FREE gift!"
    assert tokenizer.tokenize(text) == tokenizer.tokenize(text)
