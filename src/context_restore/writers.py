"""Output sinks for filtered dump statements.

Each schema that is searched gets one temp file, created the first time
the schema is announced and registered in the caller's temp-file map.
A schema that already has an entry in the map was written by an earlier
pass and receives a `NullDumpWriter` instead.
"""

import logging
import os
import tempfile
from collections.abc import MutableMapping
from pathlib import Path
from typing import ClassVar, TextIO, TypeAlias

from context_restore.protocols import DumpWriter

logger = logging.getLogger(__name__)

FOREIGN_KEY_CHECKS_OFF = (
    "/*!40014 SET @OLD_FOREIGN_KEY_CHECKS=@@FOREIGN_KEY_CHECKS, FOREIGN_KEY_CHECKS=0 */;\n"
)
FOREIGN_KEY_CHECKS_RESTORE = "/*!40014 SET FOREIGN_KEY_CHECKS=@OLD_FOREIGN_KEY_CHECKS */;\n"

# Raw bytes of BINARY/BLOB columns pass through reading and writing unchanged
UNDECODABLE_BYTES = "surrogateescape"

TempFileMap: TypeAlias = MutableMapping[str, Path]


class FileDumpWriter:
    """Writes SQL text to a file."""

    __slots__: ClassVar[tuple[str, str]] = ("_path", "_stream")

    _path: Path
    _stream: TextIO

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self._path = path
        # newline="" keeps "\n" as written on every platform
        self._stream = path.open("w", encoding=encoding, errors=UNDECODABLE_BYTES, newline="")

    @property
    def path(self) -> Path:
        return self._path

    def write(self, text: str) -> None:
        _ = self._stream.write(text)

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        self._stream.close()


class NullDumpWriter:
    """Discards everything written to it."""

    __slots__: ClassVar[tuple[()]] = ()

    def write(self, text: str) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


def create_temp_file(schema_name: str, temp_dir: Path | None = None) -> Path:
    """Create an empty temp file whose name starts with the schema name."""
    fd, name = tempfile.mkstemp(prefix=schema_name, suffix=".tmp", dir=temp_dir)
    os.close(fd)
    return Path(name)


def open_schema_writer(
    schema_name: str,
    temp_file_map: TempFileMap,
    temp_dir: Path | None = None,
    encoding: str = "utf-8",
) -> DumpWriter:
    """Return the writer collecting rows of the given schema.

    On first encounter a temp file is created, registered in
    `temp_file_map` and started with the foreign key checks preamble.
    """
    if schema_name in temp_file_map:
        logger.debug("Schema %s already materialized at %s", schema_name, temp_file_map[schema_name])
        return NullDumpWriter()

    path = create_temp_file(schema_name, temp_dir)
    temp_file_map[schema_name] = path
    logger.info("Collecting rows of schema %s into %s", schema_name, path)
    writer = FileDumpWriter(path, encoding)
    writer.write(FOREIGN_KEY_CHECKS_OFF)
    return writer


def finish_schema_writer(writer: DumpWriter) -> None:
    """Restore foreign key checks and close the writer."""
    writer.write(FOREIGN_KEY_CHECKS_RESTORE)
    writer.flush()
    writer.close()
