"""Core protocols for dump output sinks."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class DumpWriter(Protocol):
    """Protocol for sinks receiving filtered SQL text."""

    def write(self, text: str) -> None:
        """Append text to the sink."""
        ...

    def flush(self) -> None:
        """Push buffered text to the underlying storage."""
        ...

    def close(self) -> None:
        """Release the sink. Further writes are not allowed."""
        ...
