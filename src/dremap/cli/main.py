"""Main CLI entry point."""

import logging

import click
from dremap.database.factories import create_sqlite_database
from dremap.logging_setup import configure_logging

# Import and register all commands at module level
from dremap.cli.commands import (
    category,
    mapping,
    movement,
    unmapped,
    reconcile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DREMAP_DB_PATH environment variable)",
    envvar="DREMAP_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log engine activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """dremap - DRE account mapping.

    Map a client's chart-of-accounts codes to report categories, find the
    accounts a period's movements use without a mapping, and close the gaps
    one by one or in bulk.
    """
    ctx.ensure_object(dict)
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
category.register_commands(cli)
mapping.register_commands(cli)
movement.register_commands(cli)
unmapped.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
