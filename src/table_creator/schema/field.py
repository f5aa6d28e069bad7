"""Column definitions and their DDL fragments.

A ``DatabaseField`` describes one column of a MySQL/MariaDB table.  Fields
are created through the typed factory classmethods so that every column
type carries the constraint shape it needs (a size for ``VARCHAR``, a
precision pair for ``DECIMAL``, nothing for ``TEXT``).

Usage:
    from table_creator.schema.field import DatabaseField

    id_field = DatabaseField.create_int("id", 11, auto_increment=True)
    name = DatabaseField.create_varchar("name", 255)
    name.set_default("'unknown'")

    id_field.get_field_string()
    # '`id` INT(11) AUTO_INCREMENT NOT NULL'
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class FieldType(str, Enum):
    """Column types understood by the field factories."""

    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    TINYTEXT = "TINYTEXT"
    TEXT = "TEXT"
    LONGTEXT = "LONGTEXT"
    INT = "INT"
    DECIMAL = "DECIMAL"
    TINY_INT = "tinyint"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"

    # Spatial types
    POINT = "POINT"
    LINESTRING = "LINESTRING"
    POLYGON = "POLYGON"
    MULTI_POINT = "MULTIPOINT"
    MULTI_LINE_STRING = "MULTILINESTRING"
    MULTI_POLYGON = "MULTIPOLYGON"
    GEOMETRY_COLLECTION = "GEOMETRYCOLLECTION"
    GEOMETRY = "GEOMETRY"


_SIZED_TYPES = frozenset({FieldType.CHAR, FieldType.VARCHAR, FieldType.INT})
_DECIMAL_CONSTRAINT = re.compile(r"\d+,\d+")


# ============================================================================
# Default values
# ============================================================================


class DefaultKind(str, Enum):
    """What kind of value a column default holds."""

    NULL = "null"
    LITERAL = "literal"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class FieldDefault:
    """A column default.

    "No default" is represented by the absence of a ``FieldDefault``;
    ``DEFAULT NULL`` is a ``FieldDefault`` of kind ``NULL``.

    Example:
        >>> FieldDefault.from_value("null").to_sql()
        'NULL'
        >>> FieldDefault.from_value(3).to_sql()
        '3'
        >>> FieldDefault.from_value("'abc'").kind
        <DefaultKind.LITERAL: 'literal'>
    """

    kind: DefaultKind
    text: str = "NULL"

    @classmethod
    def null(cls) -> "FieldDefault":
        return cls(kind=DefaultKind.NULL)

    @classmethod
    def from_value(cls, value: Any) -> "FieldDefault":
        """Classify a caller-supplied default.

        Strings matching ``NULL`` case-insensitively become the null
        sentinel.  Booleans render as ``1``/``0``.  Everything else is
        rendered with ``str()`` and emitted verbatim.
        """
        if isinstance(value, bool):
            return cls(kind=DefaultKind.NUMERIC, text="1" if value else "0")
        if isinstance(value, int | float | Decimal):
            return cls(kind=DefaultKind.NUMERIC, text=str(value))
        text = str(value)
        if text.upper() == "NULL":
            return cls.null()
        return cls(kind=DefaultKind.LITERAL, text=text)

    @property
    def is_null(self) -> bool:
        return self.kind is DefaultKind.NULL

    def to_sql(self) -> str:
        return self.text


# ============================================================================
# Field model
# ============================================================================


class DatabaseField(BaseModel):
    """One column of a table.

    Build instances with the ``create_*`` classmethods rather than the
    constructor; the type and its constraint are fixed at creation.  Direct
    construction is validated so the constraint matches the type (a size
    for CHAR, VARCHAR and INT, ``"before,after"`` for DECIMAL, ``1`` for
    tinyint, nothing otherwise).

    Attributes:
        name: Column name, unique within a table.
        field_type: Column type tag.
        constraint: Parenthesized type qualifier (``255``, ``"10,2"``) or None.
        auto_increment: Render ``AUTO_INCREMENT``.
        default: Column default, None when there is none.
        allow_null: When False the column renders ``NOT NULL``.
        is_key: The column is indexed on its own.
        is_unique: The single-column index is unique (only meaningful with ``is_key``).
        is_primary: The column is flagged as a primary key (informational).
    """

    name: str = Field(frozen=True)
    field_type: FieldType = Field(frozen=True)
    constraint: int | str | None = Field(default=None, frozen=True)
    auto_increment: bool = Field(default=False, frozen=True)
    default: FieldDefault | None = None
    allow_null: bool = False
    is_key: bool = False
    is_unique: bool = False
    is_primary: bool = False

    @model_validator(mode="after")
    def _check_constraint(self) -> "DatabaseField":
        """Reject constraint shapes the factories never produce."""
        constraint = self.constraint
        field_type = self.field_type

        if field_type in _SIZED_TYPES:
            ok = type(constraint) is int and constraint > 0
            expected = "a positive int size"
        elif field_type is FieldType.DECIMAL:
            ok = isinstance(constraint, str) and _DECIMAL_CONSTRAINT.fullmatch(constraint) is not None
            expected = "a \"before,after\" precision string"
        elif field_type is FieldType.TINY_INT:
            ok = type(constraint) is int and constraint == 1
            expected = "1"
        else:
            ok = constraint is None
            expected = "no constraint"

        if not ok:
            raise ValueError(
                f"{field_type.value} column [{self.name}] needs {expected}, got: {constraint!r}"
            )
        return self

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def _create(
        cls,
        name: str,
        field_type: FieldType,
        constraint: int | str | None = None,
        auto_increment: bool = False,
    ) -> "DatabaseField":
        return cls(
            name=name,
            field_type=field_type,
            constraint=constraint,
            auto_increment=auto_increment,
        )

    @classmethod
    def create_char(cls, name: str, size: int) -> "DatabaseField":
        """Create a fixed-length ``CHAR(size)`` column."""
        return cls._create(name, FieldType.CHAR, size)

    @classmethod
    def create_varchar(cls, name: str, size: int) -> "DatabaseField":
        """Create a ``VARCHAR(size)`` column holding up to *size* characters."""
        return cls._create(name, FieldType.VARCHAR, size)

    @classmethod
    def create_bool(cls, name: str) -> "DatabaseField":
        """Create a boolean column, stored as ``tinyint(1)``."""
        return cls._create(name, FieldType.TINY_INT, 1)

    @classmethod
    def create_date(cls, name: str) -> "DatabaseField":
        """Create a ``DATE`` column (yyyy-mm-dd)."""
        return cls._create(name, FieldType.DATE)

    @classmethod
    def create_tiny_text(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.TINYTEXT)

    @classmethod
    def create_text(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.TEXT)

    @classmethod
    def create_long_text(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.LONGTEXT)

    @classmethod
    def create_int(cls, name: str, size: int, auto_increment: bool = False) -> "DatabaseField":
        """Create an ``INT(size)`` column.

        Args:
            name: Column name.
            size: Display width, e.g. ``2`` for values up to 99.
            auto_increment: Render ``AUTO_INCREMENT``.  The column still has
                to be made a primary or unique key by the caller.
        """
        return cls._create(name, FieldType.INT, size, auto_increment)

    @classmethod
    def create_timestamp(cls, name: str, default: str | None = None) -> "DatabaseField":
        """Create a ``TIMESTAMP`` column.

        Args:
            name: Column name.
            default: Optional default, e.g. ``"CURRENT_TIMESTAMP"``.  Setting
                one stops the column from updating whenever another
                column in the row changes.
        """
        field = cls._create(name, FieldType.TIMESTAMP)
        if default is not None:
            field.set_default(default)
        return field

    @classmethod
    def create_decimal(
        cls,
        name: str,
        precision_before: int,
        precision_after: int,
    ) -> "DatabaseField":
        """Create a ``DECIMAL`` column.

        Args:
            name: Column name.
            precision_before: Digits before the decimal point (2 reaches 99).
            precision_after: Digits after the decimal point (2 is accurate to 0.01).
        """
        return cls._create(name, FieldType.DECIMAL, f"{precision_before},{precision_after}")

    @classmethod
    def create_point(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.POINT)

    @classmethod
    def create_line_string(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.LINESTRING)

    @classmethod
    def create_polygon(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.POLYGON)

    @classmethod
    def create_multi_point(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.MULTI_POINT)

    @classmethod
    def create_multi_line_string(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.MULTI_LINE_STRING)

    @classmethod
    def create_multi_polygon(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.MULTI_POLYGON)

    @classmethod
    def create_geometry_collection(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.GEOMETRY_COLLECTION)

    @classmethod
    def create_geometry(cls, name: str) -> "DatabaseField":
        return cls._create(name, FieldType.GEOMETRY)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_allow_null(self) -> None:
        """Allow NULL values in this column."""
        self.allow_null = True

    def disable_null(self) -> None:
        """Forbid NULL values, dropping a ``DEFAULT NULL`` if one was set."""
        self.allow_null = False
        if self.default is not None and self.default.is_null:
            self.default = None

    def set_key(self, unique: bool = False) -> None:
        """Index this column on its own (not as a primary key)."""
        self.is_key = True
        self.is_unique = unique

    def set_primary(self) -> None:
        self.is_primary = True

    def set_default(self, default: Any) -> None:
        """Set the column default.

        ``"NULL"`` (any case) stores ``DEFAULT NULL`` and allows NULL
        values.  ``None`` removes the default.  Other values are emitted
        verbatim, so string literals must carry their own quotes.
        """
        if default is None:
            self.default = None
            return

        self.default = FieldDefault.from_value(default)
        if self.default.is_null:
            self.allow_null = True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def get_field_string(self) -> str:
        """Return this column's definition inside a CREATE/ALTER TABLE body."""
        field_string = f"`{self.name}` {self.field_type.value}"

        if self.constraint is not None:
            field_string += f"({self.constraint})"

        if self.auto_increment:
            field_string += " AUTO_INCREMENT"

        if self.default is not None:
            field_string += f" DEFAULT {self.default.to_sql()}"

        if not self.allow_null:
            field_string += " NOT NULL"

        return field_string
