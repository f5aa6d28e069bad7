"""Exception types raised by table builders and editors.

Configuration errors are raised before any statement reaches the database.
Execution errors carry the statement text and the driver's error message.

Usage:
    from table_creator.errors import QueryExecutionError, UnknownFieldError

    try:
        creator.run()
    except QueryExecutionError as e:
        print(e.query)
        print(e.error)
"""

import json


class TableCreatorError(Exception):
    """Base class for all table-creator errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(TableCreatorError, ValueError):
    """Raised when a builder or editor is configured with invalid input."""

    pass


class InvalidEngineError(ConfigurationError):
    """Raised when an engine outside the supported set is requested."""

    def __init__(self, engine: str, table: str | None = None):
        self.engine = engine
        self.table = table
        if table:
            message = f"table [{table}] engine must be one of the allowed types, got: {engine}"
        else:
            message = f"Unrecognized engine: {engine}"
        super().__init__(message)


class InvalidCharacterSetError(ConfigurationError):
    """Raised when a character set is not in the supported allow-list."""

    def __init__(self, charset: str):
        self.charset = charset
        super().__init__(f"Unrecognized character set: {charset}")


class UnknownFieldError(ConfigurationError):
    """Raised when an operation references fields the table does not have.

    Attributes:
        table: Name of the table being built.
        missing: Field names that were referenced but not found.
        fields: Field names currently present in the table.
        operation: Short description of the failing operation.
    """

    def __init__(
        self,
        table: str,
        missing: list[str],
        fields: list[str],
        operation: str,
    ):
        self.table = table
        self.missing = list(missing)
        self.fields = list(fields)
        self.operation = operation
        super().__init__(
            f"[{', '.join(self.missing)}] not found in table [{table}] "
            f"when {operation}. Fields: [{', '.join(self.fields)}]"
        )


class PrimaryKeyFieldError(ConfigurationError):
    """Raised when a primary-key field is passed to ``TableEditor.add_fields``."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Do not set field [{field_name}] to be primary key when adding fields. "
            "Instead, use the change_primary_key method"
        )


# ============================================================================
# Execution Errors
# ============================================================================


class QueryExecutionError(TableCreatorError, RuntimeError):
    """Raised when the database rejects a rendered statement.

    ``str(error)`` is a JSON document so the failing query can be copied
    straight out of a log.

    Example:
        >>> err = QueryExecutionError("TableCreator", "Error creating table",
        ...                           "CREATE TABLE `t` ()", "syntax error")
        >>> err.query
        'CREATE TABLE `t` ()'
    """

    def __init__(self, context: str, message: str, query: str, error: str | None):
        self.context = context
        self.message = message
        self.query = query
        self.error = error
        super().__init__(self.to_json())

    def to_json(self) -> str:
        """Serialize the error payload as indented JSON."""
        payload = {
            "Class": self.context,
            "Message": self.message,
            "Query": self.query,
            "Error": self.error,
        }
        return json.dumps(payload, indent=4)
