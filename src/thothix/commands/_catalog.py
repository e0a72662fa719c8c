"""Helpers shared by the catalog commands."""

import typer
from rich.console import Console

from thothix.config import settings
from thothix.core.permissions import Permission, Role, RoleCatalog


console = Console()


def load_catalog(external_file_upload: bool | None) -> RoleCatalog:
    """Catalog for the given policy, defaulting to the configured one."""
    if external_file_upload is None:
        external_file_upload = settings.external_file_upload
    return RoleCatalog.default(external_file_upload=external_file_upload)


def parse_role(value: str) -> Role:
    """Parse a role name or exit with a readable error."""
    try:
        return Role(value.strip().lower())
    except ValueError:
        allowed = ", ".join(role.value for role in Role)
        console.print(f"[red]Error:[/red] Unknown role '{value}'. Choose from: {allowed}")
        raise typer.Exit(1) from None


def parse_permission(value: str) -> Permission:
    """Parse a ``resource:action`` permission or exit with a readable error."""
    try:
        return Permission(value.strip().lower())
    except ValueError:
        console.print(
            f"[red]Error:[/red] Unknown permission '{value}'. "
            "Run 'thothix roles' to see every permission."
        )
        raise typer.Exit(1) from None
