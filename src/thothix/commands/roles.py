"""Command: thothix roles - Show the role/permission matrix."""

import typer
from rich.table import Table

from thothix.commands._catalog import console, load_catalog
from thothix.core.permissions import Permission


def roles(
    external_file_upload: bool | None = typer.Option(
        None,
        "--external-file-upload/--no-external-file-upload",
        help="Override the configured external upload policy.",
    ),
) -> None:
    """Show which permissions each role carries.

    Roles are listed highest rank first.
    """
    catalog = load_catalog(external_file_upload)

    table = Table(title="Role Catalog", show_header=True)
    table.add_column("Permission", style="cyan", no_wrap=True)
    for role in catalog.roles:
        table.add_column(
            f"{role.value} ({catalog.rank_of(role)})", justify="center", no_wrap=True
        )

    for permission in Permission:
        row = [permission.value]
        for role in catalog.roles:
            row.append("[green]yes[/green]" if catalog.has_permission(role, permission) else "-")
        table.add_row(*row)

    console.print()
    console.print(table)
    console.print()
