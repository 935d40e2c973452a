"""Main CLI entry point."""

import logging

import click
from bikeflip.database.factories import create_sqlite_database

# Import and register all commands at module level
from bikeflip.cli.commands import (
    bike,
    expense,
    capital,
    partner,
    dashboard,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BIKEFLIP_DB_PATH environment variable)",
    envvar="BIKEFLIP_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Bikeflip - Bookkeeping for a used-bike flipping business.

    Track bikes, expenses and partner capital, and see what the business
    is actually making.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
bike.register_commands(cli)
expense.register_commands(cli)
capital.register_commands(cli)
partner.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
