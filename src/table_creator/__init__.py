"""table-creator: build MySQL/MariaDB CREATE TABLE and ALTER TABLE statements.

Describe columns with ``DatabaseField`` factories, assemble a new table with
``TableCreator`` or change an existing one with ``TableEditor``.  Statements
run through any object implementing the ``DatabaseClient`` protocol, such
as ``MySQLAdapter``.

Usage:
    from table_creator import DatabaseField, TableCreator, TableEditor
    from table_creator import MySQLAdapter, get_adapter
    from table_creator import QueryExecutionError, UnknownFieldError
"""

__version__ = "0.1.0"

# Adapters
from table_creator.adapters.base import DatabaseClient
from table_creator.adapters.mysql import MySQLAdapter

# Config
from table_creator.config.loader import load_db_config
from table_creator.config.models import DatabaseConfig, DatabaseProfile

# Errors
from table_creator.errors import (
    ConfigurationError,
    InvalidCharacterSetError,
    InvalidEngineError,
    PrimaryKeyFieldError,
    QueryExecutionError,
    TableCreatorError,
    UnknownFieldError,
)

# Factory
from table_creator.factory import ProfileNotFoundError, get_adapter, resolve_url

# Schema
from table_creator.schema.creator import TableCreator
from table_creator.schema.editor import TableEditor
from table_creator.schema.field import DatabaseField, FieldType
from table_creator.schema.models import CHARACTER_SETS, Engine, QueryResult

__all__ = [
    # Adapters
    "DatabaseClient",
    "MySQLAdapter",
    # Config
    "load_db_config",
    "DatabaseProfile",
    "DatabaseConfig",
    # Errors
    "TableCreatorError",
    "ConfigurationError",
    "InvalidEngineError",
    "InvalidCharacterSetError",
    "UnknownFieldError",
    "PrimaryKeyFieldError",
    "QueryExecutionError",
    # Factory
    "get_adapter",
    "resolve_url",
    "ProfileNotFoundError",
    # Schema
    "DatabaseField",
    "FieldType",
    "TableCreator",
    "TableEditor",
    "Engine",
    "CHARACTER_SETS",
    "QueryResult",
]
