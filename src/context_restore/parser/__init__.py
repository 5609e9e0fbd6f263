"""MySQL dump parser extracting the rows of a single context.

Modules, leaves first:
- rows: tuple matcher copying matching INSERT rows
- columns: `cid` column position and foreign key resolver
- update_tasks: `updateTask` row harvesting
- scanner: top-level state machine and entry points
"""

from context_restore.parser.columns import search_cid_position, search_foreign_keys
from context_restore.parser.rows import match_and_copy_rows
from context_restore.parser.scanner import DumpParser, scan, start
from context_restore.parser.state import ParseContext, ScanState
from context_restore.parser.update_tasks import search_update_tasks

__all__ = [
    "DumpParser",
    "ParseContext",
    "ScanState",
    "match_and_copy_rows",
    "scan",
    "search_cid_position",
    "search_foreign_keys",
    "search_update_tasks",
    "start",
]
