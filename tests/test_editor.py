"""Tests for TableEditor: one ALTER TABLE statement per operation."""

import logging
from unittest.mock import MagicMock

import pytest

from table_creator.errors import (
    ConfigurationError,
    InvalidEngineError,
    PrimaryKeyFieldError,
)
from table_creator.schema.editor import TableEditor
from table_creator.schema.field import DatabaseField
from table_creator.schema.models import Engine


def _statements(client: MagicMock) -> list[str]:
    return [call.args[0] for call in client.execute.call_args_list]


@pytest.fixture
def editor(client: MagicMock) -> TableEditor:
    return TableEditor(client, "users")


# ============================================================================
# Adding and removing fields
# ============================================================================


class TestAddFields:
    def test_add_single_field(self, editor: TableEditor, client: MagicMock) -> None:
        editor.add_fields([DatabaseField.create_date("birthday")])
        client.execute.assert_called_once_with(
            "ALTER TABLE `users` ADD (`birthday` DATE NOT NULL)"
        )

    def test_add_fields_with_keys(self, editor: TableEditor, client: MagicMock) -> None:
        """Key clauses follow all field definitions, comma separated."""
        nickname = DatabaseField.create_varchar("nickname", 50)
        nickname.set_key(unique=True)
        age = DatabaseField.create_int("age", 3)
        age.set_key()
        birthday = DatabaseField.create_date("birthday")

        editor.add_fields([nickname, age, birthday])

        client.execute.assert_called_once_with(
            "ALTER TABLE `users` ADD ("
            "`nickname` VARCHAR(50) NOT NULL, "
            "`age` INT(3) NOT NULL, "
            "`birthday` DATE NOT NULL, "
            "UNIQUE KEY (`nickname`), "
            "KEY (`age`))"
        )

    def test_duplicate_names_keep_last(self, editor: TableEditor, client: MagicMock) -> None:
        editor.add_fields([
            DatabaseField.create_varchar("code", 3),
            DatabaseField.create_char("code", 2),
        ])
        client.execute.assert_called_once_with("ALTER TABLE `users` ADD (`code` CHAR(2) NOT NULL)")

    def test_primary_field_rejected(self, editor: TableEditor, client: MagicMock) -> None:
        """Nothing is sent when a primary-key field is in the batch."""
        uuid = DatabaseField.create_char("uuid", 36)
        uuid.set_primary()

        with pytest.raises(PrimaryKeyFieldError) as exc_info:
            editor.add_fields([DatabaseField.create_date("birthday"), uuid])

        assert exc_info.value.field_name == "uuid"
        assert "change_primary_key" in str(exc_info.value)
        client.execute.assert_not_called()

    def test_empty_batch_sends_nothing(self, editor: TableEditor, client: MagicMock) -> None:
        with pytest.raises(ConfigurationError, match=r"table \[users\]"):
            editor.add_fields([])
        client.execute.assert_not_called()

    def test_returns_result(self, editor: TableEditor) -> None:
        result = editor.add_fields([DatabaseField.create_date("birthday")])
        assert result.success is True


class TestRemoveFields:
    def test_remove_field(self, editor: TableEditor, client: MagicMock) -> None:
        editor.remove_field("age")
        client.execute.assert_called_once_with("ALTER TABLE `users` DROP COLUMN `age`")

    def test_remove_fields_one_statement_each(self, editor: TableEditor, client: MagicMock) -> None:
        results = editor.remove_fields(["age", "nickname"])
        assert _statements(client) == [
            "ALTER TABLE `users` DROP COLUMN `age`",
            "ALTER TABLE `users` DROP COLUMN `nickname`",
        ]
        assert len(results) == 2


# ============================================================================
# Keys
# ============================================================================


class TestKeys:
    def test_remove_single_key(self, editor: TableEditor, client: MagicMock) -> None:
        editor.remove_key("email")
        client.execute.assert_called_once_with("ALTER TABLE `users` DROP INDEX `email`")

    def test_remove_combined_key(self, editor: TableEditor, client: MagicMock) -> None:
        editor.remove_key(["last_name", "first_name"])
        client.execute.assert_called_once_with(
            "ALTER TABLE `users` DROP INDEX (last_name,first_name)"
        )

    def test_add_key(self, editor: TableEditor, client: MagicMock) -> None:
        editor.add_key("email")
        client.execute.assert_called_once_with("ALTER TABLE `users` ADD KEY(`email`)")

    def test_add_unique_key(self, editor: TableEditor, client: MagicMock) -> None:
        editor.add_key("email", unique=True)
        client.execute.assert_called_once_with("ALTER TABLE `users` ADD UNIQUE KEY(`email`)")

    def test_add_combined_key(self, editor: TableEditor, client: MagicMock) -> None:
        editor.add_key(["last_name", "first_name"], unique=True)
        client.execute.assert_called_once_with(
            "ALTER TABLE `users` ADD UNIQUE KEY(last_name,first_name)"
        )

    def test_add_keys(self, editor: TableEditor, client: MagicMock) -> None:
        editor.add_keys(["email", ["last_name", "first_name"]])
        assert _statements(client) == [
            "ALTER TABLE `users` ADD KEY(`email`)",
            "ALTER TABLE `users` ADD KEY(last_name,first_name)",
        ]


class TestChangePrimaryKey:
    def test_single_field(self, editor: TableEditor, client: MagicMock) -> None:
        editor.change_primary_key("id")
        client.execute.assert_called_once_with(
            "ALTER TABLE `users` DROP PRIMARY KEY, ADD PRIMARY KEY (`id`)"
        )

    def test_composite(self, editor: TableEditor, client: MagicMock) -> None:
        """Composite keys are comma-joined without back-ticks."""
        editor.change_primary_key(["group_id", "id"])
        client.execute.assert_called_once_with(
            "ALTER TABLE `users` DROP PRIMARY KEY, ADD PRIMARY KEY (group_id,id)"
        )


# ============================================================================
# Engine
# ============================================================================


class TestChangeEngine:
    @pytest.mark.parametrize("engine", ["MYISAM", Engine.MYISAM])
    def test_change_engine(self, editor: TableEditor, client: MagicMock, engine) -> None:
        editor.change_engine(engine)
        client.execute.assert_called_once_with("ALTER TABLE `users` ENGINE=MYISAM")

    @pytest.mark.parametrize("engine", ["ARIA", "myisam", "MEMORY"])
    def test_unknown_engine_sends_nothing(
        self, editor: TableEditor, client: MagicMock, engine: str
    ) -> None:
        with pytest.raises(InvalidEngineError):
            editor.change_engine(engine)
        client.execute.assert_not_called()


# ============================================================================
# Escaping and failures
# ============================================================================


class TestEscaping:
    def test_identifiers_are_escaped(self, client: MagicMock) -> None:
        client.escape.side_effect = lambda value: value.replace("'", "\\'")
        editor = TableEditor(client, "o'brien")
        editor.remove_field("it's")
        client.execute.assert_called_once_with("ALTER TABLE `o\\'brien` DROP COLUMN `it\\'s`")


class TestFailures:
    def test_failure_is_returned_not_raised(self, failing_client: MagicMock) -> None:
        editor = TableEditor(failing_client, "users")
        result = editor.change_primary_key("id")
        assert result.success is False
        assert result.error == "You have an error in your SQL syntax"
        assert result.query.startswith("ALTER TABLE `users` DROP PRIMARY KEY")

    def test_failure_is_logged(
        self, failing_client: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        editor = TableEditor(failing_client, "users")
        with caplog.at_level(logging.WARNING, logger="table_creator.schema.editor"):
            editor.remove_field("age")
        assert "users" in caplog.text
        assert "You have an error in your SQL syntax" in caplog.text

    def test_later_operations_still_run(self, failing_client: MagicMock) -> None:
        """Each statement is independent of the outcome of the previous one."""
        editor = TableEditor(failing_client, "users")
        results = editor.remove_fields(["a", "b", "c"])
        assert [r.success for r in results] == [False, False, False]
        assert failing_client.execute.call_count == 3
