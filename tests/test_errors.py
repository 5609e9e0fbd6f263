"""Tests for error reporting and integer literal parsing."""

import pytest

from context_restore import ErrorKind, RestoreError
from context_restore.parser.lines import parse_int


class TestRestoreError:
    def test_repr_names_kind_and_source(self):
        error = RestoreError("bad pool", kind=ErrorKind.POOL_VALUE, source=ValueError("x"))

        assert repr(error) == "RestoreError('bad pool', kind=pool_value, source=ValueError)"

    def test_repr_without_source(self):
        assert repr(RestoreError("gone")) == "RestoreError('gone', kind=io)"

    def test_kind_defaults_to_io(self):
        error = RestoreError("gone")

        assert error.kind is ErrorKind.IO
        assert str(error) == "gone"


class TestParseInt:
    @pytest.mark.parametrize(("text", "expected"), [("6", 6), ("-1", -1), ("+12", 12), ("007", 7)])
    def test_plain_literals(self, text: str, expected: int):
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", " 6", "6 ", "1_0", "\uff16", "'6'", "6.0", "NULL"])
    def test_rejects_what_int_would_accept_or_misread(self, text: str):
        with pytest.raises(ValueError):
            _ = parse_int(text)
