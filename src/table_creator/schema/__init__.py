"""Column models and DDL statement builders.

Provides the column model (``DatabaseField``), the CREATE TABLE builder
(``TableCreator``) and the ALTER TABLE editor (``TableEditor``).

Usage:
    from table_creator.schema import DatabaseField, TableCreator, TableEditor
    from table_creator.schema import Engine, CHARACTER_SETS
"""

from table_creator.schema.creator import TableCreator
from table_creator.schema.editor import TableEditor
from table_creator.schema.field import (
    DatabaseField,
    DefaultKind,
    FieldDefault,
    FieldType,
)
from table_creator.schema.models import (
    CHARACTER_SETS,
    ColumnSchema,
    Engine,
    ForeignKey,
    QueryResult,
    parse_engine,
)

__all__ = [
    "DatabaseField",
    "FieldType",
    "FieldDefault",
    "DefaultKind",
    "TableCreator",
    "TableEditor",
    "Engine",
    "CHARACTER_SETS",
    "ForeignKey",
    "QueryResult",
    "ColumnSchema",
    "parse_engine",
]
