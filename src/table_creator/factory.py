"""Database client factory.

Resolves a connection profile from db.toml (or a bare URL from the
environment) and builds a ``MySQLAdapter`` for it.

Resolution order for ``get_adapter()``:
1. Explicit ``profile_name`` argument
2. ``{env_prefix}DB_PROFILE`` environment variable
3. ``{env_prefix}DATABASE_URL`` environment variable (no db.toml needed)

Usage:
    from table_creator.factory import get_adapter

    adapter = get_adapter("local")
    try:
        TableCreator(adapter, "users", fields=[...]).run()
    finally:
        adapter.close()
"""

import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import quote

from table_creator.adapters.mysql import MySQLAdapter
from table_creator.config.loader import load_db_config
from table_creator.config.models import DatabaseProfile

logger = logging.getLogger(__name__)


class ProfileNotFoundError(Exception):
    """Raised when no database profile is configured."""

    pass


def get_active_profile_name(env_prefix: str = "") -> str:
    """Get active profile name from the environment.

    Args:
        env_prefix: Prefix for the variable name (``APP_`` reads ``APP_DB_PROFILE``).

    Returns:
        Profile name

    Raises:
        ProfileNotFoundError: If the variable is unset or empty
    """
    env_var = f"{env_prefix}DB_PROFILE"
    profile_name = os.environ.get(env_var)
    if profile_name:
        return profile_name

    raise ProfileNotFoundError(
        "No database profile configured.\n"
        f"Set {env_var}=<name> or pass --profile <name>."
    )


def get_profile(
    profile_name: str,
    config_path: Path | str | None = None,
) -> DatabaseProfile:
    """Look up *profile_name* in db.toml.

    Raises:
        FileNotFoundError: If db.toml does not exist
        ProfileNotFoundError: If the profile is not defined
    """
    config = load_db_config(config_path)

    if profile_name not in config.profiles:
        available = ", ".join(config.profiles.keys()) or "(none)"
        raise ProfileNotFoundError(
            f"Profile '{profile_name}' not found in db.toml.\n"
            f"Available profiles: {available}"
        )

    return config.profiles[profile_name]


def resolve_url(profile: DatabaseProfile) -> str:
    """Resolve profile URL with password substitution.

    Example:
        >>> p = DatabaseProfile(url="mysql://root:[YOUR-PASSWORD]@db/app", db_password="p@ss")
        >>> resolve_url(p)
        'mysql://root:p%40ss@db/app'
    """
    url = profile.url
    if profile.db_password and "[YOUR-PASSWORD]" in url:
        url = url.replace("[YOUR-PASSWORD]", quote(profile.db_password, safe=""))
    return url


def get_adapter(
    profile_name: str | None = None,
    env_prefix: str = "",
    config_path: Path | str | None = None,
    **engine_kwargs: Any,
) -> MySQLAdapter:
    """Build a ``MySQLAdapter`` for the resolved profile.

    The caller owns the adapter and must ``close()`` it.

    Args:
        profile_name: Profile in db.toml.  Defaults to the environment.
        env_prefix: Prefix for ``DB_PROFILE`` / ``DATABASE_URL`` lookups.
        config_path: Path to db.toml (default: ./db.toml).
        **engine_kwargs: Forwarded to the SQLAlchemy engine.

    Raises:
        ProfileNotFoundError: If no profile or URL can be resolved.
        FileNotFoundError: If a profile is named but db.toml is missing.
    """
    if profile_name is None:
        try:
            profile_name = get_active_profile_name(env_prefix)
        except ProfileNotFoundError:
            database_url = os.environ.get(f"{env_prefix}DATABASE_URL")
            if database_url:
                logger.debug(f"Using {env_prefix}DATABASE_URL")
                return MySQLAdapter(database_url, **engine_kwargs)
            raise

    profile = get_profile(profile_name, config_path)
    logger.debug(f"Using database profile {profile_name}")
    return MySQLAdapter(resolve_url(profile), **engine_kwargs)
