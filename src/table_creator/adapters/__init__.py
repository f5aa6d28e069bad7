"""Database adapters package.

Provides the ``DatabaseClient`` Protocol and the ``MySQLAdapter``
implementation used to execute rendered statements.

Usage:
    from table_creator.adapters import DatabaseClient, MySQLAdapter
"""

from table_creator.adapters.base import DatabaseClient
from table_creator.adapters.mysql import MySQLAdapter

__all__ = [
    "DatabaseClient",
    "MySQLAdapter",
]
