"""Line and value reading on top of a character stream."""

import re
from typing import TextIO

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def read_line(reader: TextIO) -> str | None:
    """Read the rest of the current line without its terminator.

    Returns None at end of input.
    """
    line = reader.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def parse_int(text: str) -> int:
    """Convert an unquoted SQL integer literal.

    Unlike `int()`, surrounding whitespace, digit group underscores and
    non-ASCII digits are rejected.

    Raises:
        ValueError: If `text` is not a plain decimal integer.
    """
    if not INTEGER_PATTERN.fullmatch(text):
        msg = f"not an integer literal: {text!r}"
        raise ValueError(msg)
    return int(text)
