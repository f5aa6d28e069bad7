"""Database client protocol definition.

Defines the ``DatabaseClient`` Protocol that table builders and editors
execute their statements through.  All methods are synchronous: each call
sends one statement and blocks until the database answers.

Usage:
    from table_creator.adapters.base import DatabaseClient

    def do_work(client: DatabaseClient) -> None:
        name = client.escape("users")
        result = client.execute(f"ALTER TABLE `{name}` ENGINE=INNODB")
        if not result.success:
            print(result.error)
"""

from typing import Protocol

from table_creator.schema.models import QueryResult


class DatabaseClient(Protocol):
    """Database client interface that all adapters must implement.

    The client is owned by the caller.  Builders and editors hold a
    reference to it but never close it.
    """

    def execute(self, sql: str) -> QueryResult:
        """Execute a raw SQL statement.

        Database errors are reported through the returned result rather
        than raised.

        Args:
            sql: Statement to execute.

        Returns:
            ``QueryResult`` with ``success`` and, on failure, the driver's
            error text.

        Example:
            result = client.execute("ALTER TABLE `users` DROP COLUMN `age`")
        """
        ...

    def escape(self, value: str) -> str:
        """Escape *value* for interpolation into a statement.

        Example:
            client.escape("it's")
            # "it\\'s"
        """
        ...

    def close(self) -> None:
        """Close the connection and release pooled resources."""
        ...
