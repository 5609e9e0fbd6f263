"""Scanner states and the mutable state of a parse pass."""

from enum import Enum, auto

from context_restore.models.datatypes import ForeignKey, UpdateTaskInformation
from context_restore.protocols import DumpWriter


class ScanState(Enum):
    """States of the top-level dump scanner."""

    UNDEFINED = auto()
    """Premature end of input while matching a fixed string."""

    START = auto()
    """Neutral top-level state."""

    STARTED_COMMENT_LINE = auto()
    """Read a single dash, possibly starting a comment line."""

    READ_COMMENT_PREFIX = auto()
    """Read the comment prefix `--`."""

    TABLE_FOUND = auto()
    """Read a `Table structure for table` announcement."""

    CREATE_FOUND = auto()
    """Read the `CREATE` keyword of the announced table."""

    TABLE_CONTENT_FOUND = auto()
    """Read a `Dumping data for table` announcement."""

    TABLE_INSERT_FOUND = auto()
    """Read the `INSERT` keyword of the announced data dump."""


class ParseContext:
    """Mutable bookkeeping owned by a single scan loop."""

    __slots__ = (
        "cid_position",
        "current_schema",
        "foreign_keys",
        "further_search",
        "pool_id",
        "previous_state",
        "schema_name",
        "searching_context_table",
        "state",
        "table_name",
        "update_task_information",
        "writer",
    )

    def __init__(self, schema_name: str | None = None) -> None:
        self.state = ScanState.START
        self.previous_state = ScanState.START
        self.table_name: str | None = None
        self.cid_position = -1
        self.writer: DumpWriter | None = None
        self.current_schema: str | None = None
        self.searching_context_table = False
        self.further_search = True
        self.pool_id = -1
        self.schema_name = schema_name
        self.update_task_information = UpdateTaskInformation()
        self.foreign_keys: dict[str, list[ForeignKey]] = {}

    def reset(self, state: ScanState = ScanState.START) -> None:
        """Move to `state` and forget the state to return to after a comment."""
        self.state = state
        self.previous_state = ScanState.START
