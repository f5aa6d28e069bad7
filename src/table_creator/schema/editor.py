"""Table editor -- one ALTER TABLE statement per call.

Unlike ``TableCreator`` the editor keeps no record of the table's columns:
every method renders its statement and executes it straight away.  This
makes it handy for migrations.

Database failures are not raised.  Each operation returns the
``QueryResult`` of its statement so the caller can decide what to do.
Invalid input (an unknown engine, a primary-key field in ``add_fields``)
is rejected before anything is sent.

Usage:
    from table_creator.schema.editor import TableEditor

    editor = TableEditor(adapter, "users")
    editor.add_fields([DatabaseField.create_date("birthday")])
    editor.add_key(["last_name", "first_name"])
    editor.change_primary_key("id")
    editor.change_engine("MYISAM")
"""

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from table_creator.errors import ConfigurationError, PrimaryKeyFieldError
from table_creator.schema.field import DatabaseField
from table_creator.schema.models import Engine, QueryResult, parse_engine

if TYPE_CHECKING:
    from table_creator.adapters.base import DatabaseClient

logger = logging.getLogger(__name__)


class TableEditor:
    """Alters an existing table.

    Args:
        client: Database client used to escape identifiers and execute
            statements.  The caller keeps ownership of it.
        name: Name of the table being edited.
    """

    def __init__(self, client: "DatabaseClient", name: str) -> None:
        self._client = client
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Statement rendering
    # ------------------------------------------------------------------

    def render_add_fields(self, fields: Iterable[DatabaseField]) -> str:
        """Build ``ALTER TABLE ... ADD (...)`` for *fields*.

        Fields are keyed by name, so a repeated name keeps only the last
        definition.  Fields flagged as keys get an inline KEY clause.

        Raises:
            ConfigurationError: If *fields* is empty.
            PrimaryKeyFieldError: If any field is flagged as primary.
        """
        add_fields: dict[str, DatabaseField] = {}
        for field in fields:
            add_fields[field.name] = field
        if not add_fields:
            raise ConfigurationError(f"no fields given to add to table [{self._name}]")

        field_strings: list[str] = []
        key_strings: list[str] = []

        for field_name, field in add_fields.items():
            if field.is_primary:
                raise PrimaryKeyFieldError(field_name)

            field_strings.append(field.get_field_string())
            if field.is_key:
                unique = "UNIQUE " if field.is_unique else ""
                key_strings.append(f"{unique}KEY (`{self._client.escape(field_name)}`)")

        return f"ALTER TABLE {self._table()} ADD ({', '.join(field_strings + key_strings)})"

    def render_remove_field(self, field_name: str) -> str:
        return f"ALTER TABLE {self._table()} DROP COLUMN `{self._client.escape(field_name)}`"

    def render_remove_key(self, key: str | Sequence[str]) -> str:
        if isinstance(key, str):
            key_string = f"`{self._client.escape(key)}`"
        else:
            key_string = f"({self._join_escaped(key)})"
        return f"ALTER TABLE {self._table()} DROP INDEX {key_string}"

    def render_add_key(self, key: str | Sequence[str], unique: bool = False) -> str:
        if isinstance(key, str):
            key_string = f"`{self._client.escape(key)}`"
        else:
            key_string = self._join_escaped(key)
        unique_string = "UNIQUE " if unique else ""
        return f"ALTER TABLE {self._table()} ADD {unique_string}KEY({key_string})"

    def render_change_primary_key(self, primary_key: str | Sequence[str]) -> str:
        if isinstance(primary_key, str):
            key_string = f"(`{self._client.escape(primary_key)}`)"
        else:
            key_string = f"({self._join_escaped(primary_key)})"
        return f"ALTER TABLE {self._table()} DROP PRIMARY KEY, ADD PRIMARY KEY {key_string}"

    def render_change_engine(self, engine: Engine | str) -> str:
        """Raises InvalidEngineError if *engine* is not supported."""
        engine = parse_engine(engine)
        return f"ALTER TABLE {self._table()} ENGINE={engine.value}"

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add_fields(self, fields: Iterable[DatabaseField]) -> QueryResult:
        """Add *fields* (and their single-column keys) to the table.

        Primary keys cannot be added this way; use ``change_primary_key``.

        Raises:
            ConfigurationError: If *fields* is empty.
            PrimaryKeyFieldError: If any field is flagged as primary.
        """
        return self._execute(self.render_add_fields(fields))

    def remove_field(self, field_name: str) -> QueryResult:
        return self._execute(self.render_remove_field(field_name))

    def remove_fields(self, field_names: Iterable[str]) -> list[QueryResult]:
        """Drop each named column with its own statement, in order."""
        return [self.remove_field(field_name) for field_name in field_names]

    def remove_key(self, key: str | Sequence[str]) -> QueryResult:
        """Drop an index.  The indexed columns themselves are kept.

        Args:
            key: Index name, or the sequence of field names of a combined key.
        """
        return self._execute(self.render_remove_key(key))

    def add_key(self, key: str | Sequence[str], unique: bool = False) -> QueryResult:
        """Add a (non-primary) key on one field or a combination of fields."""
        return self._execute(self.render_add_key(key, unique))

    def add_keys(
        self,
        keys: Iterable[str | Sequence[str]],
        unique: bool = False,
    ) -> list[QueryResult]:
        return [self.add_key(key, unique) for key in keys]

    def change_primary_key(self, primary_key: str | Sequence[str]) -> QueryResult:
        """Replace the primary key.

        The table must already have a primary key, otherwise the database
        rejects the ``DROP PRIMARY KEY`` part of the statement.
        """
        return self._execute(self.render_change_primary_key(primary_key))

    def change_engine(self, engine: Engine | str) -> QueryResult:
        """Switch the table to another storage engine.

        Raises:
            InvalidEngineError: If *engine* is not INNODB or MYISAM.
        """
        return self._execute(self.render_change_engine(engine))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _execute(self, query: str) -> QueryResult:
        logger.debug(f"Altering table {self._name}: {query}")
        result = self._client.execute(query)
        if not result.success:
            logger.warning(f"ALTER TABLE on {self._name} failed: {result.error}")
        return result

    def _table(self) -> str:
        return f"`{self._client.escape(self._name)}`"

    def _join_escaped(self, names: Iterable[str]) -> str:
        return ",".join(self._client.escape(name) for name in names)
