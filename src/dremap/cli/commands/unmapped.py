"""Unmapped account detection command."""

import click
from dremap.cli.error_handling import handle_domain_error
from dremap.cli.commands.movement import STATEMENT_TYPES
from dremap.domain.csv_import import CSVImportService
from dremap.domain.errors import DomainError
from dremap.domain.unmapped import UnmappedService


@click.command("unmapped")
@click.argument("client_id", metavar="CLIENT")
@click.option("--year", required=True, type=int, help="Fiscal year")
@click.option("--type", "statement_type", type=STATEMENT_TYPES, default="dre", show_default=True, help="Statement type")
@click.option("--level", type=int, help="Only check accounts of this level (e.g., 15 for analytic accounts)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the accounts to a CSV file to fill in and pass to 'reconcile'",
)
@click.pass_context
def show_unmapped(ctx, client_id: str, year: int, statement_type: str, level: int | None, output: str | None):
    """List accounts used by a period's movements that have no category.

    Examples:
        dremap unmapped c1 --year 2025
        dremap unmapped c1 --year 2025 --type patrimonial --output pendentes.csv
    """
    db = ctx.obj["db"]
    service = UnmappedService(db)

    try:
        accounts = service.find_unmapped(client_id, year, statement_type, level=level)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if output is not None:
        try:
            written = CSVImportService(db).write_unmapped(output, accounts)
        except OSError as e:
            handle_domain_error(ctx, e)
            return
        click.echo(f"Wrote {written} unmapped accounts to {output}")
        return

    if not accounts:
        click.echo("All accounts are mapped.")
        return

    click.echo(f"\n{len(accounts)} unmapped account{'s' if len(accounts) != 1 else ''}:")
    click.echo("-" * 80)
    for account in accounts:
        current = f" | current: {account.category}" if account.category else ""
        click.echo(f"{account.code:20s} | L{account.level:<3d} | {account.name}{current}")


def register_commands(cli):
    """Register unmapped command with main CLI."""
    cli.add_command(show_unmapped)
