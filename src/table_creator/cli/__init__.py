"""CLI module for inspecting connection profiles and tables.

Usage:
    table-creator profiles
    DB_PROFILE=local table-creator check
    table-creator --profile local describe users

Commands:
    profiles  - List profiles defined in db.toml
    check     - Connect with the active profile and run SELECT 1
    describe  - Show the columns of a table
"""

import argparse
import sys

from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from table_creator.config.loader import load_db_config
from table_creator.factory import ProfileNotFoundError, get_adapter

console = Console()


# ============================================================================
# Command implementations
# ============================================================================


def cmd_profiles(args: argparse.Namespace) -> int:
    """List available profiles.

    Returns:
        0 on success, 1 if db.toml cannot be read.
    """
    try:
        config = load_db_config(args.config)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if not config.profiles:
        console.print("[yellow]No profiles defined.[/yellow]")
        return 0

    table = Table(title="Database Profiles", show_header=True, header_style="bold")
    table.add_column("Profile", style="cyan")
    table.add_column("Provider")
    table.add_column("Description", style="dim")

    for name, profile in config.profiles.items():
        table.add_row(name, profile.provider, profile.description)

    console.print(table)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Connect to the database and run ``SELECT 1``.

    Returns:
        0 if the connection works, 1 otherwise.
    """
    try:
        adapter = get_adapter(args.profile, args.env_prefix, args.config)
    except (ProfileNotFoundError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        adapter.test_connection()
    except SQLAlchemyError as e:
        console.print(f"[bold red]x[/bold red] Connection failed: {e}")
        return 1
    finally:
        adapter.close()

    console.print("[bold green]v[/bold green] Connection OK")
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    """Print the columns of ``args.table``.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        adapter = get_adapter(args.profile, args.env_prefix, args.config)
    except (ProfileNotFoundError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        columns = adapter.describe(args.table)
    except SQLAlchemyError as e:
        console.print(f"[bold red]x[/bold red] Could not describe {args.table}: {e}")
        return 1
    finally:
        adapter.close()

    table = Table(title=f"Table: {args.table}", show_header=True, header_style="bold")
    table.add_column("Column", style="cyan")
    table.add_column("Type")
    table.add_column("Null")
    table.add_column("Key")
    table.add_column("Default")
    table.add_column("Extra", style="dim")

    for col in columns:
        table.add_row(
            col.name,
            col.data_type,
            "YES" if col.is_nullable else "NO",
            col.key,
            "NULL" if col.default is None else col.default,
            col.extra,
        )

    console.print(table)
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="table-creator",
        description="Inspect database profiles and tables",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to db.toml (default: ./db.toml)",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="Profile name in db.toml (default: $DB_PROFILE)",
    )
    parser.add_argument(
        "--env-prefix",
        default="",
        help=(
            "Prefix for environment variable lookup "
            "(e.g., --env-prefix APP_ reads APP_DB_PROFILE)"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_profiles = subparsers.add_parser("profiles", help="List available profiles")
    p_profiles.set_defaults(func=cmd_profiles)

    p_check = subparsers.add_parser("check", help="Test the database connection")
    p_check.set_defaults(func=cmd_check)

    p_describe = subparsers.add_parser("describe", help="Show the columns of a table")
    p_describe.add_argument("table", help="Table name")
    p_describe.set_defaults(func=cmd_describe)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
