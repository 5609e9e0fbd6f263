"""Top-level scanner for MySQL dump files.

The scanner reads the dump one character at a time and reacts to three
shapes: `-- ` comment lines announcing databases, table structures and
data dumps; the `CREATE` keyword following a table structure
announcement; and the `INSERT` keyword following a data dump
announcement. Everything else is skipped.

Rows of tables carrying a `cid` column are filtered by context id and
copied to one temp file per searched schema. The ConfigDB schema and the
schema of the context are searched, all others are skipped until the
next database announcement.
"""

import logging
import re
from pathlib import Path
from typing import ClassVar, TextIO

from context_restore.errors import ErrorKind, RestoreError
from context_restore.models.datatypes import PoolIdSchemaAndVersionInfo
from context_restore.models.params import ParserParams
from context_restore.parser.columns import search_cid_position
from context_restore.parser.lines import parse_int, read_line
from context_restore.parser.rows import match_and_copy_rows
from context_restore.parser.state import ParseContext, ScanState
from context_restore.parser.update_tasks import search_update_tasks
from context_restore.protocols import DumpWriter
from context_restore.writers import (
    UNDECODABLE_BYTES,
    TempFileMap,
    finish_schema_writer,
    open_schema_writer,
)

logger = logging.getLogger(__name__)

DATABASE_PATTERN = re.compile(r".*?(?:Current )?Database:\s+`?([^` ]*)`?")
TABLE_STRUCTURE_PATTERN = re.compile(r"Table\s+structure\s+for\s+table\s+`([^`]*)`")
DATA_DUMP_PATTERN = re.compile(r"Dumping\s+data\s+for\s+table\s+`([^`]*)`")

UPDATE_TASK_TABLE = "updateTask"
CONTEXT_TABLE = "context_server2db_pool"


class DumpParser:
    """Extracts the rows of one context from a MySQL dump."""

    __slots__: ClassVar[tuple[str]] = ("_params",)

    _params: ParserParams

    def __init__(self, params: ParserParams) -> None:
        self._params = params

    @property
    def params(self) -> ParserParams:
        return self._params

    def parse(self, file_name: str | Path, temp_file_map: TempFileMap) -> PoolIdSchemaAndVersionInfo:
        """Parse the named dump file.

        Temp files created for newly seen schemas are registered in
        `temp_file_map`. Files already registered there are not written
        again.
        """
        path = Path(file_name)
        try:
            reader = path.open(encoding=self._params.encoding, errors=UNDECODABLE_BYTES, newline="")
        except OSError as e:
            msg = f"Failed to open dump file {path}: {e}"
            raise RestoreError(msg, kind=ErrorKind.IO, source=e) from e

        try:
            return self.scan(reader, temp_file_map, path)
        finally:
            _close_quietly(reader)

    def scan(
        self,
        reader: TextIO,
        temp_file_map: TempFileMap,
        file_name: str | Path | None = None,
    ) -> PoolIdSchemaAndVersionInfo:
        """Scan an open dump stream. The stream is left open."""
        ctx = ParseContext(self._params.schema_name)
        try:
            self._run(reader, ctx, temp_file_map)
        except OSError as e:
            msg = f"Failed to parse dump {file_name or '<stream>'}: {e}"
            raise RestoreError(msg, kind=ErrorKind.IO, source=e) from e
        finally:
            if ctx.writer is not None:
                _flush_quietly(ctx.writer)
                _close_quietly(ctx.writer)

        return PoolIdSchemaAndVersionInfo(
            file_name=str(file_name or "<stream>"),
            context_id=self._params.context_id,
            pool_id=ctx.pool_id,
            schema_name=ctx.schema_name,
            update_task_information=ctx.update_task_information,
            foreign_keys=ctx.foreign_keys,
        )

    def _run(self, reader: TextIO, ctx: ParseContext, temp_file_map: TempFileMap) -> None:
        while c := reader.read(1):
            state = ctx.state
            if state is ScanState.START and c == "-":
                ctx.state = ScanState.STARTED_COMMENT_LINE
                continue
            if state is ScanState.STARTED_COMMENT_LINE:
                # A single dash returns to where the line started
                ctx.state = ScanState.READ_COMMENT_PREFIX if c == "-" else ctx.previous_state
                continue
            if state is ScanState.READ_COMMENT_PREFIX:
                if c == " ":
                    ctx.searching_context_table = False
                    line = read_line(reader)
                    if line is not None:
                        self._on_comment(line, reader, ctx, temp_file_map)
                    continue
                ctx.state = ctx.previous_state
            elif state is ScanState.TABLE_FOUND and c == "C":
                ctx.state = _match_keyword(reader, "REATE", ScanState.CREATE_FOUND, ScanState.TABLE_FOUND)
                continue
            elif state is ScanState.TABLE_FOUND and c == "-":
                ctx.previous_state = ScanState.TABLE_FOUND
                ctx.state = ScanState.STARTED_COMMENT_LINE
                continue
            elif state is ScanState.CREATE_FOUND and c == "(":
                self._on_create(reader, ctx)
                continue
            elif state is ScanState.TABLE_CONTENT_FOUND and c == "I":
                ctx.state = _match_keyword(
                    reader, "NSERT", ScanState.TABLE_INSERT_FOUND, ScanState.TABLE_CONTENT_FOUND
                )
                continue
            elif state is ScanState.TABLE_CONTENT_FOUND and c == "-":
                ctx.previous_state = ScanState.TABLE_CONTENT_FOUND
                ctx.state = ScanState.STARTED_COMMENT_LINE
            elif state is ScanState.TABLE_INSERT_FOUND and c == "(":
                self._on_insert(reader, ctx)

            # Reset at the end of an unfinished comment prefix
            if c == "\n" and ctx.state in (ScanState.STARTED_COMMENT_LINE, ScanState.READ_COMMENT_PREFIX):
                ctx.state = ScanState.START

    def _on_comment(
        self,
        line: str,
        reader: TextIO,
        ctx: ParseContext,
        temp_file_map: TempFileMap,
    ) -> None:
        if match := DATABASE_PATTERN.match(line):
            database = match.group(1)
            if not self._is_searched_schema(database, ctx):
                logger.debug("Skipping database %s", database)
                ctx.further_search = False
                return
            logger.info("Database: %s", database)
            ctx.further_search = True
            # Dumps of several databases announce the first one twice
            if ctx.writer is None or database != ctx.current_schema:
                if ctx.writer is not None:
                    finish_schema_writer(ctx.writer)
                ctx.writer = open_schema_writer(
                    database,
                    temp_file_map,
                    self._params.temp_dir,
                    self._params.encoding,
                )
                ctx.current_schema = database
            ctx.cid_position = -1
            ctx.reset()
        elif ctx.further_search and (match := TABLE_STRUCTURE_PATTERN.match(line)):
            ctx.table_name = match.group(1)
            logger.info("Table: %s", ctx.table_name)
            ctx.cid_position = -1
            ctx.reset(ScanState.TABLE_FOUND)
        elif ctx.further_search and DATA_DUMP_PATTERN.match(line):
            logger.info("Dump found for table %s", ctx.table_name)
            if ctx.table_name == UPDATE_TASK_TABLE:
                ctx.update_task_information = search_update_tasks(reader, self._params.context_id)
            if ctx.table_name == CONTEXT_TABLE:
                ctx.searching_context_table = True
            ctx.reset(ScanState.TABLE_CONTENT_FOUND)
        else:
            ctx.reset()

    def _on_create(self, reader: TextIO, ctx: ParseContext) -> None:
        ctx.cid_position, foreign_keys = search_cid_position(reader)
        logger.info("Cid pos: %d", ctx.cid_position)
        if foreign_keys and ctx.table_name is not None:
            ctx.foreign_keys[ctx.table_name] = foreign_keys
        ctx.state = ScanState.START

    def _on_insert(self, reader: TextIO, ctx: ParseContext) -> None:
        logger.info("Insert found and cid=%d", ctx.cid_position)
        writer = ctx.writer
        if writer is not None:
            context_id = str(self._params.context_id)
            if ctx.searching_context_table:
                values = match_and_copy_rows(
                    reader, writer, ctx.cid_position, context_id, ctx.table_name, collect_rest=True
                )
                if len(values) < 2:
                    # Keep searching the next INSERT of the context table
                    ctx.state = ScanState.TABLE_CONTENT_FOUND
                    return
                self._take_pool_and_schema(values, ctx)
            else:
                _ = match_and_copy_rows(reader, writer, ctx.cid_position, context_id, ctx.table_name)
        ctx.searching_context_table = False
        ctx.reset(ScanState.TABLE_CONTENT_FOUND)

    def _take_pool_and_schema(self, values: list[str], ctx: ParseContext) -> None:
        """Read pool id and schema from the columns following `cid`.

        These are read pool id, write pool id and schema name; the write
        pool id is taken.
        """
        try:
            ctx.pool_id = parse_int(values[1])
        except ValueError as e:
            msg = f"Could not convert pool value {values[1]!r} of context {self._params.context_id}"
            raise RestoreError(msg, kind=ErrorKind.POOL_VALUE, source=e) from e
        if len(values) > 2:
            ctx.schema_name = values[2]
        logger.info("Context %d resides in pool %d, schema %s", self._params.context_id, ctx.pool_id, ctx.schema_name)

    def _is_searched_schema(self, name: str, ctx: ParseContext) -> bool:
        return name == self._params.config_db_name or (
            ctx.schema_name is not None and name == ctx.schema_name
        )


def _match_keyword(reader: TextIO, rest: str, success: ScanState, failure: ScanState) -> ScanState:
    """Compare the next characters with the rest of a keyword."""
    chunk = reader.read(len(rest))
    if len(chunk) != len(rest):
        return ScanState.UNDEFINED
    return success if chunk == rest else failure


def _flush_quietly(writer: DumpWriter) -> None:
    try:
        writer.flush()
    except Exception as e:  # noqa: BLE001
        logger.debug("Ignoring failure while flushing writer: %s", e)


def _close_quietly(closeable: DumpWriter | TextIO) -> None:
    try:
        closeable.close()
    except Exception as e:  # noqa: BLE001
        logger.debug("Ignoring failure while closing %r: %s", closeable, e)


def start(
    context_id: int,
    file_name: str | Path,
    config_db_name: str | None,
    schema_name: str | None,
    temp_file_map: TempFileMap,
    temp_dir: Path | None = None,
) -> PoolIdSchemaAndVersionInfo:
    """Parse the named dump file for the given context.

    Raises:
        RestoreError: With kind `IO` if reading or writing fails, with kind
            `POOL_VALUE` if the pool id of the context is not a number.
    """
    params = ParserParams(
        context_id=context_id,
        config_db_name=config_db_name,
        schema_name=schema_name,
        temp_dir=temp_dir,
    )
    return DumpParser(params).parse(file_name, temp_file_map)


def scan(
    reader: TextIO,
    context_id: int,
    config_db_name: str | None,
    schema_name: str | None,
    temp_file_map: TempFileMap,
    temp_dir: Path | None = None,
) -> PoolIdSchemaAndVersionInfo:
    """Like `start`, reading from an already open text stream."""
    params = ParserParams(
        context_id=context_id,
        config_db_name=config_db_name,
        schema_name=schema_name,
        temp_dir=temp_dir,
    )
    return DumpParser(params).scan(reader, temp_file_map)
