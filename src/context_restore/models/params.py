"""Parameter types for parser configuration.

Params define what a parse pass searches for and where its output goes,
while the temp-file map passed alongside carries state across passes.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_DB_NAME = "configdb"
"""Well-known name of the ConfigDB schema."""


def resolve_config_db_name(name: str | None) -> str:
    """Return the ConfigDB schema name, falling back to the default."""
    if name is None or not name.strip():
        return DEFAULT_CONFIG_DB_NAME
    return name.strip()


class ParserParams(BaseModel, frozen=True):
    """Parameters for a single dump parse pass."""

    context_id: int
    """Identifier of the context to restore."""

    config_db_name: str = Field(default=DEFAULT_CONFIG_DB_NAME)
    """Name of the ConfigDB schema in the dump."""

    schema_name: str | None = None
    """Name of the schema in which the context resides, if known."""

    temp_dir: Path | None = None
    """Directory for per-schema temp files. Defaults to the system temp dir."""

    encoding: str = "utf-8"
    """Encoding of the dump file and of the written temp files."""

    @field_validator("config_db_name", mode="before")
    @classmethod
    def _default_config_db_name(cls, value: str | None) -> str:
        return resolve_config_db_name(value)
