"""Context restore: extract the rows of one context from a MySQL dump."""

from context_restore.errors import ErrorKind, RestoreError
from context_restore.models import (
    ParserParams,
    PoolIdSchemaAndVersionInfo,
    UpdateTaskEntry,
    UpdateTaskInformation,
)
from context_restore.parser import DumpParser, scan, start
from context_restore.protocols import DumpWriter
from context_restore.writers import FileDumpWriter, NullDumpWriter

__all__ = [
    "DumpParser",
    "DumpWriter",
    "ErrorKind",
    "FileDumpWriter",
    "NullDumpWriter",
    "ParserParams",
    "PoolIdSchemaAndVersionInfo",
    "RestoreError",
    "UpdateTaskEntry",
    "UpdateTaskInformation",
    "scan",
    "start",
]
