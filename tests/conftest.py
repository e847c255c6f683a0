import io

import pyperclip
import pytest

from spongify.utils import setup_logging


class SequenceRandom:
    """Stand-in for random.Random that replays fixed values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # Keeps a stray spongify.yaml in the checkout from leaking into tests.
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def quiet_logging():
    # Handlers bound to an earlier test's captured stderr must not linger.
    setup_logging(quiet=True)


@pytest.fixture
def sequence_random():
    return SequenceRandom


@pytest.fixture
def stdin(monkeypatch):
    def feed(text):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return feed


@pytest.fixture
def clipboard(monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    return copied
