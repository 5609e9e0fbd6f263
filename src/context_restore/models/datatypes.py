"""Data types produced by the dump parser.

- `UpdateTaskEntry` for a single row of the `updateTask` table
- `UpdateTaskInformation` for the ordered collection of those rows
- `ForeignKey` for a foreign key declared on a tenant table
- `PoolIdSchemaAndVersionInfo` for the outcome of a parse pass
"""

from collections.abc import Iterator

from pydantic import BaseModel, Field, RootModel


class UpdateTaskEntry(BaseModel, frozen=True):
    """Completion record of an update task for one context."""

    context_id: int
    """Context the task ran for; zero or less marks a system-wide task."""

    task_name: str
    """Fully qualified task name, quotes stripped."""

    successful: bool
    """Whether the task completed successfully."""

    last_modified: int
    """Last modification as epoch milliseconds."""


class UpdateTaskInformation(RootModel[list[UpdateTaskEntry]]):
    """Append-only, insertion-ordered list of update task entries."""

    root: list[UpdateTaskEntry] = Field(default_factory=list)

    def add(self, entry: UpdateTaskEntry) -> None:
        self.root.append(entry)

    def __iter__(self) -> Iterator[UpdateTaskEntry]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> UpdateTaskEntry:
        return self.root[index]


class ForeignKey(BaseModel, frozen=True):
    """A foreign key constraint found in a table definition."""

    columns: list[str]
    """Local columns, in declaration order."""

    referenced_table: str
    """Table the constraint points to."""


class PoolIdSchemaAndVersionInfo(BaseModel, frozen=True):
    """Outcome of parsing a dump file for one context."""

    file_name: str
    """The parsed dump file."""

    context_id: int
    """The context that was searched for."""

    pool_id: int = -1
    """Database pool of the context, -1 if the dump did not reveal it."""

    schema_name: str | None = None
    """Schema of the context, as found in the dump or passed in."""

    update_task_information: UpdateTaskInformation = Field(
        default_factory=UpdateTaskInformation
    )
    """Update task rows relevant to the context."""

    foreign_keys: dict[str, list[ForeignKey]] = Field(default_factory=dict)
    """Foreign keys of tables carrying a `cid` column, keyed by table name."""
