"""Category taxonomy commands."""

import click
from dremap.domain.taxonomy import list_categories, normalize_category


@click.command("categories")
@click.option("--resolve", metavar="LABEL", help="Show which category a free-text label resolves to")
@click.pass_context
def show_categories(ctx, resolve: str | None):
    """List the categories accounts can be mapped to."""
    if resolve is not None:
        category = normalize_category(resolve)
        if category is None:
            click.echo(f"Error: No category matches '{resolve}'", err=True)
            ctx.exit(1)
        click.echo(f"'{resolve}' -> '{category.value}'")
        return

    categories = list_categories()
    click.echo(f"\nCategories ({len(categories)}):")
    for category in categories:
        click.echo(f"  {category.value}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(show_categories)
