"""Main thothix CLI application."""

import typer
from rich.console import Console

from thothix import __version__
from thothix.commands import check, rank, roles


console = Console()

app = typer.Typer(
    name="thothix",
    help="Inspect the thothix role catalog.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="roles")(roles.roles)
app.command(name="check")(check.check)
app.command(name="rank")(rank.rank)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Thothix CLI - Inspect roles and permissions."""
    if version:
        console.print(f"[bold cyan]thothix[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
