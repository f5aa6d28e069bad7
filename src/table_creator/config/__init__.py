"""Configuration management: profiles, TOML loading, and config models.

Usage:
    >>> from table_creator.config import load_db_config, DatabaseProfile, DatabaseConfig
"""

from table_creator.config.loader import load_db_config
from table_creator.config.models import DatabaseConfig, DatabaseProfile

__all__ = ["load_db_config", "DatabaseConfig", "DatabaseProfile"]
