# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the SpamSift test suite.
# =============================================================================

import pytest
import tempfile
from pathlib import Path

from spamsift.core import Label, LabeledExample
from spamsift.spam import train


# A small corpus in the same shape as the real dataset: quoted messages that
# span lines, embedded commas and doubled quotes.
SAMPLE_CORPUS = """\
index,label,text,label_num
0,ham,"Subject: lunch tomorrow
see you at lunch, usual place",0
1,spam,"Subject: WIN money now
claim your ""free"" prize money",1
2,ham,Subject: meeting notes attached,0
3,spam,Subject: cheap pills win big,1
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def corpus_text():
    """Raw text of the sample corpus."""
    return SAMPLE_CORPUS


@pytest.fixture
def corpus_file(temp_dir, corpus_text):
    """Write the sample corpus to disk and return its path."""
    path = temp_dir / "spam_ham_dataset.csv"
    path.write_text(corpus_text, encoding="utf-8")
    return path


@pytest.fixture
def missing_config(temp_dir):
    """Path to a config file that doesn't exist (so defaults are used)."""
    return temp_dir / "config" / "config.toml"


@pytest.fixture
def toy_examples():
    """One spam and one ham example."""
    return [
        LabeledExample("WIN money now", Label.SPAM),
        LabeledExample("see you at lunch", Label.HAM),
    ]


@pytest.fixture
def toy_model(toy_examples):
    """A model trained on toy_examples."""
    return train(toy_examples)
