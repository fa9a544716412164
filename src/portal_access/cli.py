"""Operator CLI for inspecting permissions and access decisions."""

import typer
from rich.console import Console

from portal_access import __version__
from portal_access.commands import catalog_cmd, policy_cmd


console = Console()

app = typer.Typer(
    name="portal-access",
    help="Inspect the permission catalog and explain access decisions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="catalog")(catalog_cmd.show_catalog)
app.command(name="roles")(catalog_cmd.show_default_roles)
app.command(name="effective")(policy_cmd.effective)
app.command(name="check")(policy_cmd.check)
app.command(name="visible")(policy_cmd.visible)


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Log decision details to stdout."
    ),
) -> None:
    """portal-access - permission catalog and access decision tooling."""
    from portal_access.config import get_settings
    from portal_access.core.logging import configure_logging

    if version:
        console.print(f"[bold cyan]portal-access[/bold cyan] version {__version__}")
        raise typer.Exit()

    settings = get_settings()
    configure_logging(
        settings.model_copy(update={"log_level": "DEBUG" if verbose else "WARNING"}),
        cache_loggers=False,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
