"""Table builder -- assemble and execute one CREATE TABLE statement.

Most methods only record configuration.  Nothing is sent to the database
until ``run()`` is called.  To change an existing table use
``TableEditor`` instead.

A ``TableCreator`` is meant to be driven from a single flow of control;
it holds no locks.

Usage:
    from table_creator.schema.creator import TableCreator
    from table_creator.schema.field import DatabaseField

    creator = TableCreator(adapter, "users")
    creator.add_fields([
        DatabaseField.create_int("id", 11, auto_increment=True),
        DatabaseField.create_varchar("email", 255),
        DatabaseField.create_int("group_id", 11),
    ])
    creator.set_primary_key("id")
    creator.add_key("email", unique=True)
    creator.add_foreign_key("group_id", "groups", "id", delete_cascade=True)
    creator.set_character_set("utf8mb4")
    creator.run()
"""

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from table_creator.errors import (
    ConfigurationError,
    InvalidCharacterSetError,
    QueryExecutionError,
    UnknownFieldError,
)
from table_creator.schema.field import DatabaseField
from table_creator.schema.models import (
    CHARACTER_SETS,
    Engine,
    ForeignKey,
    QueryResult,
    parse_engine,
)

if TYPE_CHECKING:
    from table_creator.adapters.base import DatabaseClient

logger = logging.getLogger(__name__)


class TableCreator:
    """Builds a new table from ``DatabaseField`` objects and table-level keys.

    Args:
        client: Database client used to escape identifiers and execute
            the statement.  The caller keeps ownership of it.
        name: Name of the table to create.
        engine: Storage engine, ``Engine.INNODB`` (default) or ``Engine.MYISAM``.
        fields: Optional initial fields; more can be added later.

    Raises:
        InvalidEngineError: If *engine* is not a supported engine.
    """

    def __init__(
        self,
        client: "DatabaseClient",
        name: str,
        engine: Engine | str = Engine.INNODB,
        fields: Iterable[DatabaseField] | None = None,
    ) -> None:
        self._client = client
        self._engine = parse_engine(engine, table=name)
        self._name = name
        self._escaped_name = client.escape(name)

        # Keyed by name so re-adding a field replaces it in place
        self._fields: dict[str, DatabaseField] = {}
        self._combined_keys: list[list[str]] = []
        self._combined_unique_keys: list[list[str]] = []
        self._primary_key: list[str] | None = None
        self._foreign_keys: list[ForeignKey] = []
        self._character_set: str | None = None  # None uses the database default

        self.add_fields(fields or [])

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def add_field(self, field: DatabaseField) -> None:
        self._fields[field.name] = field

    def add_fields(self, fields: Iterable[DatabaseField]) -> None:
        for field in fields:
            self.add_field(field)

    def get_field(self, field_name: str) -> DatabaseField:
        """Return the field called *field_name*.

        Raises:
            UnknownFieldError: If the table has no such field.
        """
        self._require_fields([field_name], "fetching a field")
        return self._fields[field_name]

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def add_key(self, key: str | Sequence[str], unique: bool = False) -> None:
        """Add a (non-primary) key.

        Args:
            key: A field name for a single-column key, or a sequence of
                field names for one combined key.
            unique: Make the key a ``UNIQUE KEY``.

        Raises:
            UnknownFieldError: If any named field is not in the table.
        """
        if isinstance(key, str):
            self._require_fields([key], "adding a key")
            self._fields[key].set_key(unique)
            return

        names = list(key)
        self._require_fields(names, f"adding combined key ({', '.join(names)})")
        if unique:
            self._combined_unique_keys.append(names)
        else:
            self._combined_keys.append(names)

    def add_keys(self, keys: Iterable[str | Sequence[str]], unique: bool = False) -> None:
        """Add each entry of *keys* with ``add_key``."""
        for key in keys:
            self.add_key(key, unique)

    def add_foreign_key(
        self,
        table_column: str,
        reference_table: str,
        reference_column: str,
        delete_cascade: bool = False,
        update_cascade: bool = False,
    ) -> None:
        """Reference *reference_table*.*reference_column* from *table_column*.

        Args:
            table_column: Column of this table holding the reference.
            reference_table: Table being referenced.
            reference_column: Column in *reference_table* whose value
                *table_column* holds.
            delete_cascade: Add ``ON DELETE CASCADE``.
            update_cascade: Add ``ON UPDATE CASCADE``.

        Raises:
            UnknownFieldError: If *table_column* is not in this table.
        """
        self._require_fields([table_column], "adding a foreign key")
        self._foreign_keys.append(
            ForeignKey(
                table_column=table_column,
                reference_table=reference_table,
                reference_column=reference_column,
                delete_cascade=delete_cascade,
                update_cascade=update_cascade,
            )
        )

    def set_primary_key(self, primary_key: str | Sequence[str]) -> None:
        """Set the primary key, replacing any previous one.

        Args:
            primary_key: A field name, or an ordered sequence of field names
                for a composite key.

        Raises:
            UnknownFieldError: If any named field is not in the table.
        """
        names = [primary_key] if isinstance(primary_key, str) else list(primary_key)
        self._require_fields(names, "setting the primary key")
        self._primary_key = names

    # ------------------------------------------------------------------
    # Bulk field settings
    # ------------------------------------------------------------------

    def set_default(self, field_names: str | Iterable[str], default: Any) -> None:
        """Set *default* on each named field.

        Raises:
            UnknownFieldError: If any named field is not in the table.
                No field is changed in that case.
        """
        for field in self._lookup(field_names, "setting default fields"):
            field.set_default(default)

    def set_default_null(self, field_names: str | Iterable[str]) -> None:
        """Give each named field ``DEFAULT NULL`` (which also allows NULL)."""
        for field in self._lookup(field_names, "setting null fields"):
            field.set_default("NULL")

    def set_allow_null(self, field_names: str | Iterable[str]) -> None:
        """Allow NULL in each named field without changing its default.

        Use ``set_default_null`` to also default the fields to NULL.
        """
        for field in self._lookup(field_names, "setting allow_null"):
            field.set_allow_null()

    def set_character_set(self, charset: str) -> None:
        """Set the table's default character set, e.g. ``"utf8mb4"``.

        Raises:
            InvalidCharacterSetError: If *charset* is not a recognized name.
        """
        if charset not in CHARACTER_SETS:
            raise InvalidCharacterSetError(charset)
        self._character_set = charset

    # ------------------------------------------------------------------
    # Statement assembly
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Build the CREATE TABLE statement for the current configuration.

        Body order: field definitions, primary key, single-column keys,
        combined keys, foreign keys, combined unique keys.

        Raises:
            ConfigurationError: If the table has no fields.
        """
        if not self._fields:
            raise ConfigurationError(f"table [{self._name}] has no fields to create")

        field_strings: list[str] = []
        key_strings: list[str] = []

        for field_name, field in self._fields.items():
            field_strings.append(field.get_field_string())
            if field.is_key:
                unique = "UNIQUE " if field.is_unique else ""
                key_strings.append(f"{unique}KEY (`{self._client.escape(field_name)}`)")

        for key in self._combined_keys:
            key_strings.append(f"KEY ({self._join_escaped(key)})")

        for fk in self._foreign_keys:
            clause = (
                f"FOREIGN KEY (`{self._client.escape(fk.table_column)}`) "
                f"REFERENCES `{self._client.escape(fk.reference_table)}` "
                f"(`{self._client.escape(fk.reference_column)}`)"
            )
            if fk.delete_cascade:
                clause += " ON DELETE CASCADE"
            if fk.update_cascade:
                clause += " ON UPDATE CASCADE"
            key_strings.append(clause)

        for key in self._combined_unique_keys:
            key_strings.append(f"UNIQUE KEY ({self._join_escaped(key)})")

        body = field_strings
        if self._primary_key is not None:
            body.append(f"PRIMARY KEY ({self._join_escaped(self._primary_key)})")
        body.extend(key_strings)

        query = f"CREATE TABLE `{self._escaped_name}` ({', '.join(body)}) ENGINE={self._engine.value}"
        if self._character_set is not None:
            query += f" DEFAULT CHARSET={self._character_set}"
        return query

    def run(self) -> QueryResult:
        """Render the statement and create the table.

        Returns:
            The successful ``QueryResult``.

        Raises:
            ConfigurationError: If the table has no fields.
            QueryExecutionError: If the database rejected the statement.
        """
        query = self.render()
        logger.debug(f"Creating table {self._name}: {query}")

        result = self._client.execute(query)
        if not result.success:
            raise QueryExecutionError(
                context=type(self).__name__,
                message="Error creating table",
                query=query,
                error=result.error,
            )

        logger.info(f"Created table {self._name}")
        return result

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def character_set(self) -> str | None:
        return self._character_set

    @property
    def primary_key(self) -> list[str] | None:
        return list(self._primary_key) if self._primary_key is not None else None

    @property
    def fields(self) -> dict[str, DatabaseField]:
        """Fields in insertion order (a copy of the mapping)."""
        return dict(self._fields)

    @property
    def foreign_keys(self) -> list[ForeignKey]:
        return list(self._foreign_keys)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_fields(self, field_names: Iterable[str], operation: str) -> None:
        missing = [name for name in field_names if name not in self._fields]
        if missing:
            raise UnknownFieldError(
                table=self._name,
                missing=missing,
                fields=list(self._fields),
                operation=operation,
            )

    def _lookup(self, field_names: str | Iterable[str], operation: str) -> list[DatabaseField]:
        names = [field_names] if isinstance(field_names, str) else list(field_names)
        self._require_fields(names, operation)
        return [self._fields[name] for name in names]

    def _join_escaped(self, names: Iterable[str]) -> str:
        return ",".join(self._client.escape(name) for name in names)
