"""Shared fixtures: a stand-in for the database client."""

from unittest.mock import MagicMock

import pytest

from table_creator.schema.models import QueryResult


@pytest.fixture
def client() -> MagicMock:
    """DatabaseClient double that accepts every statement.

    ``escape`` returns its input unchanged; ``execute`` records the
    statement and reports success.
    """
    client = MagicMock()
    client.escape.side_effect = lambda value: value
    client.execute.side_effect = lambda sql: QueryResult(success=True, query=sql)
    return client


@pytest.fixture
def failing_client(client: MagicMock) -> MagicMock:
    """DatabaseClient double whose every statement is rejected."""
    client.execute.side_effect = lambda sql: QueryResult(
        success=False,
        query=sql,
        error="You have an error in your SQL syntax",
    )
    return client
