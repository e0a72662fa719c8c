"""Command: thothix check - Ask the catalog whether a role has a permission."""

import typer

from thothix.commands._catalog import console, load_catalog, parse_permission, parse_role


def check(
    role: str = typer.Argument(..., help="Role name (admin, manager, user, external)"),
    permission: str = typer.Argument(..., help="Permission, e.g. channel:read"),
    external_file_upload: bool | None = typer.Option(
        None,
        "--external-file-upload/--no-external-file-upload",
        help="Override the configured external upload policy.",
    ),
) -> None:
    """Check a role-level permission.

    Exits with status 0 when granted and 2 when not. Resource rules
    (membership, channel visibility) are not part of this answer.
    """
    parsed_role = parse_role(role)
    parsed_permission = parse_permission(permission)
    catalog = load_catalog(external_file_upload)

    if catalog.has_permission(parsed_role, parsed_permission):
        console.print(f"[green]granted[/green] {parsed_role.value} -> {parsed_permission.value}")
        return

    console.print(f"[red]denied[/red] {parsed_role.value} -> {parsed_permission.value}")
    raise typer.Exit(2)
