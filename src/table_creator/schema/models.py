"""Pydantic models and constants shared by table builders and editors.

This module contains:
- Table options: Engine, CHARACTER_SETS
- Table-level constraints: ForeignKey
- Execution results: QueryResult
- Introspection rows: ColumnSchema

Field definitions live in table_creator.schema.field.
"""

from enum import Enum

from pydantic import BaseModel

from table_creator.errors import InvalidEngineError


# ============================================================================
# Table Options
# ============================================================================


class Engine(str, Enum):
    """Storage engines a table may be created with."""

    INNODB = "INNODB"
    MYISAM = "MYISAM"


def parse_engine(engine: "Engine | str", table: str | None = None) -> Engine:
    """Return *engine* as an ``Engine``, raising if it is not supported.

    Matching is exact: ``"innodb"`` is rejected.

    Raises:
        InvalidEngineError: If *engine* is not INNODB or MYISAM.
    """
    try:
        return Engine(engine)
    except ValueError:
        raise InvalidEngineError(str(engine), table) from None


# Short names accepted by ``DEFAULT CHARSET=``
CHARACTER_SETS: frozenset[str] = frozenset(
    {
        "big5",
        "dec8",
        "cp850",
        "hp8",
        "koi8r",
        "latin1",
        "latin2",
        "swe7",
        "ascii",
        "ujis",
        "sjis",
        "hebrew",
        "tis620",
        "euckr",
        "koi8u",
        "gb2312",
        "greek",
        "cp1250",
        "gbk",
        "latin5",
        "armscii8",
        "utf8",
        "ucs2",
        "cp866",
        "keybcs2",
        "macce",
        "macroman",
        "cp852",
        "latin7",
        "utf8mb4",
        "cp1251",
        "utf16",
        "cp1256",
        "cp1257",
        "utf32",
        "binary",
        "geostd8",
        "cp932",
        "eucjpms",
    }
)


# ============================================================================
# Constraint Models
# ============================================================================


class ForeignKey(BaseModel):
    """A FOREIGN KEY clause of a CREATE TABLE statement.

    Example:
        >>> fk = ForeignKey(table_column="user_id", reference_table="users",
        ...                 reference_column="id", delete_cascade=True)
        >>> fk.update_cascade
        False
    """

    table_column: str          # column in the table being created
    reference_table: str
    reference_column: str
    delete_cascade: bool = False
    update_cascade: bool = False


# ============================================================================
# Execution Result
# ============================================================================


class QueryResult(BaseModel):
    """Outcome of executing one statement.

    Example:
        >>> result = QueryResult(success=True, query="ALTER TABLE `t` ENGINE=INNODB")
        >>> result.error is None
        True
    """

    success: bool
    query: str = ""
    error: str | None = None


# ============================================================================
# Introspection Models
# ============================================================================


class ColumnSchema(BaseModel):
    """One row of ``SHOW COLUMNS`` output.

    Example:
        >>> col = ColumnSchema(name="id", data_type="int(11)")
        >>> col.is_nullable
        True
    """

    name: str
    data_type: str
    is_nullable: bool = True
    default: str | None = None
    key: str = ""              # PRI, UNI, MUL or empty
    extra: str = ""            # e.g. auto_increment
