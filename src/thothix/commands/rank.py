"""Command: thothix rank - Compare two roles in the hierarchy."""

import typer

from thothix.commands._catalog import console, load_catalog, parse_role


def rank(
    actual: str = typer.Argument(..., help="The role a caller holds"),
    required: str = typer.Argument(..., help="The minimum role a gate requires"),
) -> None:
    """Check whether ACTUAL meets the minimum role REQUIRED.

    Exits with status 0 when it does and 2 when it does not.
    """
    actual_role = parse_role(actual)
    required_role = parse_role(required)
    catalog = load_catalog(None)

    if catalog.meets_minimum_role(actual_role, required_role):
        console.print(
            f"[green]meets[/green] {actual_role.value} >= {required_role.value}"
        )
        return

    console.print(f"[red]below[/red] {actual_role.value} < {required_role.value}")
    raise typer.Exit(2)
