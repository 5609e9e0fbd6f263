"""Harvesting of `updateTask` rows from a data dump section."""

import logging
import re
from typing import TextIO

from context_restore.errors import ErrorKind, RestoreError
from context_restore.models.datatypes import UpdateTaskEntry, UpdateTaskInformation
from context_restore.parser.lines import parse_int, read_line

logger = logging.getLogger(__name__)

UPDATE_TASK_INSERT_PREFIX = "INSERT INTO `updateTask` VALUES "

_VALUE = r"([^),]*)"
UPDATE_TASK_ROW_PATTERN = re.compile(rf"\({_VALUE},{_VALUE},{_VALUE},{_VALUE}(?:,.*?)?\)")


def search_update_tasks(reader: TextIO, context_id: int) -> UpdateTaskInformation:
    """Collect update task rows for the given context and system-wide tasks.

    The reader must be positioned right after the data dump announcement
    of the `updateTask` table. The line following it is skipped, then
    lines are read until the next comment line or end of input.
    Rows may carry four or more columns; the first four are used.
    """
    information = UpdateTaskInformation()
    _ = read_line(reader)
    while (line := read_line(reader)) is not None and not line.startswith("--"):
        if not line.startswith(UPDATE_TASK_INSERT_PREFIX):
            continue
        for match in UPDATE_TASK_ROW_PATTERN.finditer(line, len(UPDATE_TASK_INSERT_PREFIX)):
            try:
                row_context_id = parse_int(match.group(1))
                if row_context_id > 0 and row_context_id != context_id:
                    continue
                entry = UpdateTaskEntry(
                    context_id=row_context_id,
                    task_name=match.group(2).replace("'", ""),
                    successful=parse_int(match.group(3)) > 0,
                    last_modified=parse_int(match.group(4)),
                )
            except ValueError as e:
                msg = f"Malformed updateTask row {match.group(0)!r}: {e}"
                raise RestoreError(msg, kind=ErrorKind.INVALID_INPUT, source=e) from e
            information.add(entry)
    logger.info("Found %d update task entries", len(information))
    return information
