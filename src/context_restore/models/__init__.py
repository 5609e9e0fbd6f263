"""Pydantic models for parser configuration and results."""

from context_restore.models.datatypes import (
    ForeignKey,
    PoolIdSchemaAndVersionInfo,
    UpdateTaskEntry,
    UpdateTaskInformation,
)
from context_restore.models.params import (
    DEFAULT_CONFIG_DB_NAME,
    ParserParams,
    resolve_config_db_name,
)

__all__ = [
    # Params (configuration)
    "DEFAULT_CONFIG_DB_NAME",
    "ParserParams",
    "resolve_config_db_name",
    # Data types
    "ForeignKey",
    "PoolIdSchemaAndVersionInfo",
    "UpdateTaskEntry",
    "UpdateTaskInformation",
]
