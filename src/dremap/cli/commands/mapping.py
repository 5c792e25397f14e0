"""Account mapping commands."""

import click
from dremap.cli.error_handling import handle_domain_error
from dremap.domain.errors import DomainError
from dremap.domain.mapping import MappingService
from dremap.domain.taxonomy import normalize_category


@click.group()
def mapping_group():
    """Manage account to category mappings."""
    pass


@mapping_group.command("set")
@click.argument("client_id", metavar="CLIENT")
@click.argument("account_code", metavar="CODE")
@click.argument("account_name", metavar="NAME")
@click.argument("category", metavar="CATEGORY")
@click.option("--normalize", is_flag=True, help="Resolve CATEGORY through category aliases (e.g., 'cmv')")
@click.pass_context
def set_mapping(ctx, client_id: str, account_code: str, account_name: str, category: str, normalize: bool):
    """Create or update the mapping of an account.

    Examples:
        dremap mapping set c1 03.1.01.01.0001 "RECEITA DE VENDAS" "Receita Bruta"
        dremap mapping set c1 04.1 "CUSTO X" cmv --normalize
    """
    db = ctx.obj["db"]
    service = MappingService(db)

    if normalize:
        resolved = normalize_category(category)
        if resolved is not None:
            category = resolved.value

    try:
        mapping = service.upsert_mapping(
            client_id=client_id,
            account_code=account_code,
            account_name=account_name,
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Mapped {mapping.account_code} ({mapping.account_name}) to '{mapping.category}'")


@mapping_group.command("get")
@click.argument("client_id", metavar="CLIENT")
@click.argument("account_code", metavar="CODE")
@click.pass_context
def get_mapping(ctx, client_id: str, account_code: str):
    """Show the mapping of an account."""
    db = ctx.obj["db"]
    service = MappingService(db)

    try:
        mapping = service.get_mapping(client_id, account_code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if mapping is None:
        click.echo(f"Account {account_code.strip()} is not mapped for client '{client_id}'.")
        ctx.exit(1)

    click.echo(f"Code:     {mapping.account_code}")
    click.echo(f"Name:     {mapping.account_name}")
    click.echo(f"Category: {mapping.category}")
    click.echo(f"Created:  {mapping.created_at:%Y-%m-%d %H:%M:%S}")
    click.echo(f"Updated:  {mapping.updated_at:%Y-%m-%d %H:%M:%S}")


@mapping_group.command("list")
@click.argument("client_id", metavar="CLIENT")
@click.pass_context
def list_mappings(ctx, client_id: str):
    """List all mappings of a client."""
    db = ctx.obj["db"]
    service = MappingService(db)

    try:
        mappings = service.list_mappings(client_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not mappings:
        click.echo("No mappings found.")
        return

    click.echo(f"\nMappings for client '{client_id}':")
    click.echo("-" * 80)
    for m in mappings:
        click.echo(f"{m.account_code:20s} | {m.account_name:30s} | {m.category}")


@mapping_group.command("delete")
@click.argument("client_id", metavar="CLIENT")
@click.argument("account_code", metavar="CODE")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_mapping(ctx, client_id: str, account_code: str, yes: bool):
    """Delete the mapping of an account.

    Deleting an account that is not mapped is not an error.
    """
    db = ctx.obj["db"]
    service = MappingService(db)

    if not yes and not click.confirm(f"Delete mapping of {account_code} for client '{client_id}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        removed = service.delete_mapping(client_id, account_code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if removed:
        click.echo(f"Deleted mapping of {account_code.strip()}")
    else:
        click.echo(f"Account {account_code.strip()} was not mapped; nothing to delete")


def register_commands(cli):
    """Register mapping commands with main CLI."""
    cli.add_command(mapping_group, name="mapping")
