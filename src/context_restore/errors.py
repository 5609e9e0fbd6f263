"""Failures raised while extracting a context from a MySQL dump.

Every failure is a `RestoreError`. Its `kind` tells the caller whether the
dump could not be read or a temp file could not be written (`IO`), whether
the pool of the context is unknown (`POOL_VALUE`), or whether the dump
holds values the parser cannot interpret (`INVALID_INPUT`). Temp files
written before the failure stay registered in the caller's map.
"""

from enum import StrEnum
from typing import final


class ErrorKind(StrEnum):
    """Why a dump pass stopped."""

    IO = "io"
    """Opening or reading the dump, or writing a schema temp file, failed."""

    POOL_VALUE = "pool_value"
    """The write pool id in `context_server2db_pool` is not an integer."""

    INVALID_INPUT = "invalid_input"
    """An `updateTask` row carries a non-integer cid, flag or timestamp."""


@final
class RestoreError(Exception):
    """A dump pass for one context could not be completed."""

    __slots__ = ("kind", "message", "source")

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.IO,
        source: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.source = source

    def __repr__(self) -> str:
        cause = f", source={type(self.source).__name__}" if self.source is not None else ""
        return f"RestoreError({self.message!r}, kind={self.kind.value}{cause})"
