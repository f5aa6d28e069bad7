"""TOML loader for database connection profiles."""

import tomllib
from pathlib import Path

from table_creator.config.models import DatabaseConfig, DatabaseProfile

DEFAULT_CONFIG_NAME = "db.toml"


def load_db_config(config_path: Path | str | None = None) -> DatabaseConfig:
    """Load database configuration from TOML file.

    Args:
        config_path: Path to db.toml (default: ./db.toml in the current
            working directory)

    Returns:
        DatabaseConfig with all profiles

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If a profile is missing required keys

    Example:
        >>> config = load_db_config("db.toml")  # doctest: +SKIP
        >>> config.profiles["local"].url  # doctest: +SKIP
        'mysql://root@localhost:3306/test'
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(
            f"Database config not found: {config_path}\n"
            f"Create a {DEFAULT_CONFIG_NAME} with a [profiles.<name>] table."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    profiles = {}
    for name, profile_data in data.get("profiles", {}).items():
        profiles[name] = DatabaseProfile(**profile_data)

    return DatabaseConfig(profiles=profiles)
