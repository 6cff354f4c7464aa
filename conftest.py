import pytest

from jilox.config import Settings
from jilox.interpreter import interpret
from jilox.lox import Lox
from jilox.parser import parse
from jilox.scanner import scan


@pytest.fixture
def evaluate():
    """Run source text through the whole pipeline and return the value."""
    def _evaluate(source):
        return interpret(parse(scan(source)))
    return _evaluate


@pytest.fixture
def lox(tmp_path):
    return Lox(Settings(history_file=str(tmp_path / "history")))
