"""Bulk reconciliation command."""

import click
from dremap.cli.error_handling import handle_domain_error
from dremap.domain.csv_import import CSVImportService
from dremap.domain.errors import DomainError


@click.command("reconcile")
@click.argument("client_id", metavar="CLIENT")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--normalize", is_flag=True, help="Resolve categories through category aliases (e.g., 'cmv')")
@click.pass_context
def reconcile(ctx, client_id: str, csv_file: str, normalize: bool):
    """Apply a CSV of mappings to a client in one batch.

    The file needs account_code, account_name and category columns; the
    output of 'unmapped --output' works once categories are filled in. Rows
    without a category are skipped. If any other row is invalid nothing is
    applied.

    Examples:
        dremap reconcile c1 pendentes.csv
    """
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        result, skipped = service.reconcile_csv(csv_file, client_id, normalize=normalize)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Applied {result.applied} mapping{'s' if result.applied != 1 else ''}")
    if skipped:
        click.echo(f"Skipped {len(skipped)} rows without a category: {', '.join(skipped)}")


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile)
