"""Column position resolver for CREATE TABLE statements."""

import logging
import re
from typing import TextIO

from context_restore.models.datatypes import ForeignKey
from context_restore.parser.lines import read_line

logger = logging.getLogger(__name__)

CID_COLUMN_PATTERN = re.compile(r"`cid`")
ENGINE_PATTERN = re.compile(r"\).*ENGINE=")
FOREIGN_KEY_PATTERN = re.compile(
    r"\s+CONSTRAINT.*FOREIGN KEY\s+\((`[^`]*`(?:,\s*`[^`]*`)*)\)\s+REFERENCES `([^`]*)`"
)
QUOTED_NAME_PATTERN = re.compile(r"`([^`]*)`")


def search_cid_position(reader: TextIO) -> tuple[int, list[ForeignKey]]:
    """Find the position of the `cid` column in a table definition.

    The reader must be positioned right after the `(` opening the column
    list. Positions count lines, starting with the remainder of the line
    holding the `(` as 0, which makes the result the 1-based column index.
    Returns -1 if the `ENGINE=` line is reached first. Either way the
    reader is left right behind the `ENGINE=` line.
    """
    position = 0
    while (line := read_line(reader)) is not None:
        if CID_COLUMN_PATTERN.search(line):
            foreign_keys = search_foreign_keys(reader)
            logger.info("Foreign keys: %s", foreign_keys)
            return position, foreign_keys
        if ENGINE_PATTERN.match(line):
            break
        position += 1
    return -1, []


def search_foreign_keys(reader: TextIO) -> list[ForeignKey]:
    """Collect foreign key constraints up to and including the `ENGINE=` line."""
    foreign_keys: list[ForeignKey] = []
    while (line := read_line(reader)) is not None:
        if match := FOREIGN_KEY_PATTERN.match(line):
            foreign_keys.append(
                ForeignKey(
                    columns=QUOTED_NAME_PATTERN.findall(match.group(1)),
                    referenced_table=match.group(2),
                )
            )
        elif ENGINE_PATTERN.match(line):
            break
    return foreign_keys
