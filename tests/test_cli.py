"""Tests for the table-creator CLI."""

import textwrap
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from table_creator.cli import build_parser, main
from table_creator.factory import ProfileNotFoundError
from table_creator.schema.models import ColumnSchema


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "db.toml"
    path.write_text(textwrap.dedent("""\
        [profiles.local]
        url = "mysql://root@localhost:3306/test"
        description = "Local MariaDB"
    """))
    return path


@pytest.fixture
def adapter() -> MagicMock:
    return MagicMock()


# ============================================================================
# Parser
# ============================================================================


class TestParser:
    def test_global_options(self) -> None:
        args = build_parser().parse_args(
            ["--config", "x.toml", "--profile", "local", "--env-prefix", "APP_", "check"]
        )
        assert args.config == "x.toml"
        assert args.profile == "local"
        assert args.env_prefix == "APP_"
        assert args.command == "check"

    def test_describe_requires_table(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["describe"])

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ============================================================================
# Commands
# ============================================================================


class TestProfiles:
    def test_lists_profiles(self, config_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["--config", str(config_path), "profiles"]) == 0
        out = capsys.readouterr().out
        assert "local" in out
        assert "Local MariaDB" in out

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["--config", str(tmp_path / "none.toml"), "profiles"]) == 1
        assert "Error" in capsys.readouterr().out


class TestCheck:
    def test_connection_ok(self, adapter: MagicMock, capsys: pytest.CaptureFixture) -> None:
        adapter.test_connection.return_value = True
        with patch("table_creator.cli.get_adapter", return_value=adapter) as mock_get:
            assert main(["--profile", "local", "check"]) == 0

        mock_get.assert_called_once_with("local", "", None)
        adapter.close.assert_called_once()
        assert "Connection OK" in capsys.readouterr().out

    def test_connection_failed(self, adapter: MagicMock, capsys: pytest.CaptureFixture) -> None:
        adapter.test_connection.side_effect = OperationalError("SELECT 1", None, Exception("refused"))
        with patch("table_creator.cli.get_adapter", return_value=adapter):
            assert main(["check"]) == 1

        adapter.close.assert_called_once()
        assert "Connection failed" in capsys.readouterr().out

    def test_no_profile(self, capsys: pytest.CaptureFixture) -> None:
        with patch(
            "table_creator.cli.get_adapter",
            side_effect=ProfileNotFoundError("No database profile configured."),
        ):
            assert main(["check"]) == 1
        assert "No database profile configured" in capsys.readouterr().out


class TestDescribe:
    def test_prints_columns(self, adapter: MagicMock, capsys: pytest.CaptureFixture) -> None:
        adapter.describe.return_value = [
            ColumnSchema(name="id", data_type="int(11)", is_nullable=False,
                         key="PRI", extra="auto_increment"),
            ColumnSchema(name="nickname", data_type="varchar(50)"),
        ]
        with patch("table_creator.cli.get_adapter", return_value=adapter):
            assert main(["describe", "users"]) == 0

        adapter.describe.assert_called_once_with("users")
        adapter.close.assert_called_once()
        out = capsys.readouterr().out
        assert "users" in out
        assert "nickname" in out
        assert "auto_increment" in out

    def test_describe_error(self, adapter: MagicMock, capsys: pytest.CaptureFixture) -> None:
        adapter.describe.side_effect = OperationalError(
            "SHOW COLUMNS", None, Exception("Table 'test.ghost' doesn't exist")
        )
        with patch("table_creator.cli.get_adapter", return_value=adapter):
            assert main(["describe", "ghost"]) == 1

        adapter.close.assert_called_once()
        assert "Could not describe ghost" in capsys.readouterr().out
