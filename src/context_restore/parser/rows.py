"""Tuple matcher for the VALUES part of an INSERT statement.

The tokenizer is driven purely by punctuation: column values are opaque
text runs delimited by `,` and `)` outside of single-quoted strings. Only
plain characters end up in the compared column value; quotes, backslashes
and delimiters inside strings are kept in the raw tuple text only.
"""

import logging
from typing import TextIO

from context_restore.protocols import DumpWriter

logger = logging.getLogger(__name__)


def match_and_copy_rows(
    reader: TextIO,
    writer: DumpWriter,
    match_column: int,
    match_value: str,
    table_name: str | None,
    collect_rest: bool = False,
    write_rows: bool = True,
) -> list[str]:
    """Copy the tuples whose column `match_column` equals `match_value`.

    The reader must be positioned right after the `(` opening the first
    tuple. Columns are counted from 1. Reading stops after the `;` that
    terminates the statement.

    Matching rows are written to `writer` as a single INSERT statement,
    prefixed lazily so a statement without matches writes nothing. With
    `collect_rest`, the values of the columns following the matched one
    are returned in order.
    """
    current_values: list[str] = ["("]
    column: list[str] = []
    captured: list[str] = []
    counter = 1
    in_string = False
    in_row = True
    found = False
    first_found = True
    escaped = False
    escape_consumed = False
    written = 0

    def close_column() -> None:
        nonlocal found
        value = "".join(column)
        if counter == match_column:
            if value == match_value:
                found = True
        elif collect_rest and found:
            captured.append(value)
        column.clear()

    while c := reader.read(1):
        # An escape applies to exactly one character
        if escape_consumed and escaped:
            escaped = False
            escape_consumed = False
        if escaped:
            escape_consumed = True

        match c:
            case "(":
                if not in_row:
                    in_row = True
                    current_values = ["("]
                else:
                    current_values.append(c)
            case ")":
                if in_row:
                    if not in_string:
                        close_column()
                        in_row = False
                        if found and write_rows:
                            if first_found:
                                writer.write(f"INSERT INTO `{table_name}` VALUES ")
                                first_found = False
                            else:
                                writer.write(",")
                            writer.write("".join(current_values))
                            writer.write(")")
                            writer.flush()
                            written += 1
                        # A tuple only counts as matched until it closes
                        found = False
                    current_values.append(c)
            case ",":
                if in_row:
                    if not in_string:
                        close_column()
                        counter += 1
                    current_values.append(c)
                else:
                    # Next tuple follows
                    counter = 1
            case "'":
                if in_row:
                    if not in_string:
                        in_string = True
                    elif not escaped:
                        in_string = False
                    current_values.append(c)
            case "\\":
                if in_row:
                    if in_string and not escaped:
                        escaped = True
                    current_values.append(c)
            case ";":
                if not in_row:
                    if not first_found and write_rows:
                        writer.write(";\n")
                    break
                current_values.append(c)
            case _:
                if in_row:
                    column.append(c)
                    current_values.append(c)

    logger.debug("Copied %d rows of table %s", written, table_name)
    return captured
