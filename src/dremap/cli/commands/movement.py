"""Movement ledger commands."""

import click
from dremap.cli.error_handling import handle_domain_error
from dremap.domain.csv_import import CSVImportService
from dremap.domain.errors import DomainError
from dremap.domain.movement import MovementService

STATEMENT_TYPES = click.Choice(["dre", "patrimonial"], case_sensitive=False)


@click.group()
def movement_group():
    """Manage monthly movements."""
    pass


@movement_group.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--client", "client_id", required=True, help="Client ID")
@click.option("--year", required=True, type=int, help="Fiscal year")
@click.option("--type", "statement_type", type=STATEMENT_TYPES, default="dre", show_default=True, help="Statement type")
@click.pass_context
def import_movements(ctx, csv_file: str, client_id: str, year: int, statement_type: str):
    """Import movements from a CSV file.

    Replaces every movement the client already has for YEAR and the
    statement type. The file needs code and name columns plus one column per
    month (jan..dez, m01..m12 or 1..12); level and category are optional.

    Examples:
        dremap movement import dre_2025.csv --client c1 --year 2025
        dremap movement import balanco.csv --client c1 --year 2025 --type patrimonial
    """
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        count = service.import_movements(
            csv_file_path=csv_file,
            client_id=client_id,
            year=year,
            statement_type=statement_type,
        )
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Imported {count} {statement_type.lower()} movements for client '{client_id}' ({year})")


@movement_group.command("list")
@click.option("--client", "client_id", required=True, help="Client ID")
@click.option("--year", required=True, type=int, help="Fiscal year")
@click.option("--type", "statement_type", type=STATEMENT_TYPES, help="Statement type (default: all)")
@click.pass_context
def list_movements(ctx, client_id: str, year: int, statement_type: str | None):
    """List movements of a client's year."""
    db = ctx.obj["db"]
    service = MovementService(db)

    try:
        movements = service.list_movements(client_id, year, statement_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not movements:
        click.echo("No movements found.")
        return

    click.echo(f"\nMovements for client '{client_id}' ({year}):")
    click.echo("-" * 90)
    for m in movements:
        total = sum(m.values)
        click.echo(
            f"{m.statement_type.value:11s} | {m.code:20s} | L{m.level:<3d} | {m.name:30s} | {total:>14,.2f}"
        )


@movement_group.command("remove")
@click.option("--client", "client_id", required=True, help="Client ID")
@click.option("--year", required=True, type=int, help="Fiscal year")
@click.option("--type", "statement_type", type=STATEMENT_TYPES, help="Statement type (default: all)")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_movements(ctx, client_id: str, year: int, statement_type: str | None, yes: bool):
    """Remove movements of a client's year."""
    db = ctx.obj["db"]
    service = MovementService(db)

    scope = f"{statement_type.lower()} movements" if statement_type else "all movements"
    if not yes and not click.confirm(f"Remove {scope} of client '{client_id}' for {year}?"):
        click.echo("Removal cancelled.")
        return

    try:
        removed = service.remove_movements(client_id, year, statement_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Removed {removed} movement{'s' if removed != 1 else ''}")


def register_commands(cli):
    """Register movement commands with main CLI."""
    cli.add_command(movement_group, name="movement")
