"""Shared fixtures for gocheckstyle tests."""

from pathlib import Path

import pytest

from gocheckstyle.config import CheckstyleConfig
from gocheckstyle.engine import Checker
from gocheckstyle.errors import CanonicalFormatError
from gocheckstyle.syntax import GoSyntax

TESTDATA_DIR = Path(__file__).parent / "testdata"


class StubSyntax(GoSyntax):
    """Real tree-sitter parsing with a canned canonical formatter."""

    def __init__(self, canonical: bytes | None = None, fail: bool = False):
        super().__init__(gofmt_path="gofmt-not-used")
        self.canonical = canonical
        self.fail = fail
        self.format_calls = 0

    def canonical_format(self, src: bytes) -> bytes:
        self.format_calls += 1
        if self.fail:
            raise CanonicalFormatError("stub formatter failure")
        if self.canonical is None:
            return src
        return self.canonical


@pytest.fixture
def testdata_dir() -> Path:
    return TESTDATA_DIR


@pytest.fixture
def read_testdata():
    """Read a Go fixture from tests/testdata."""

    def _read(file_name: str) -> bytes:
        return (TESTDATA_DIR / file_name).read_bytes()

    return _read


@pytest.fixture
def stub_syntax():
    """The StubSyntax class, for tests that need a custom formatter."""
    return StubSyntax


@pytest.fixture
def make_checker():
    """Factory for checkers with keyword config options.

    The default syntax provider parses for real and treats every input
    as already formatted.
    """

    def _make(syntax: GoSyntax | None = None, **options) -> Checker:
        return Checker(CheckstyleConfig(**options), syntax=syntax or StubSyntax())

    return _make
