"""Commands: portal-access catalog / roles - Inspect static permission data."""

import typer
from rich.console import Console
from rich.table import Table


console = Console()


def show_catalog(
    category: str | None = typer.Option(
        None, "--category", "-c", help="Show only one category (e.g. 'files')"
    ),
) -> None:
    """List permission categories and their keys."""
    from portal_access.permissions.catalog import CATALOG

    categories = CATALOG.list_categories()
    if category is not None:
        found = CATALOG.get_category(category)
        if found is None:
            console.print(f"[red]Error:[/red] Category '{category}' not found.")
            console.print("\nAvailable categories:")
            for c in categories:
                console.print(f"  - {c.key}")
            raise typer.Exit(1)
        categories = (found,)

    table = Table(title="Permission Catalog", show_header=True)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Permission", style="green", no_wrap=True)
    table.add_column("Description")

    for c in categories:
        for i, permission in enumerate(c.permissions):
            table.add_row(c.name if i == 0 else "", permission.key, permission.description)

    console.print()
    console.print(table)
    console.print()


def show_default_roles() -> None:
    """List the default roles installed on a fresh portal."""
    from portal_access.permissions.seeds import DEFAULT_ROLES

    table = Table(title="Default Roles", show_header=True)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Permissions", style="green")

    for role in DEFAULT_ROLES:
        table.add_row(role["name"], role["description"], str(len(role["permissions"])))

    console.print()
    console.print(table)
    console.print()
