"""Main Typer application instance."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from c2rust_clean.commands import clean
from c2rust_clean.core.config import Settings

app = typer.Typer(
    name="c2rust-clean",
    help="C project build artifact cleaning tool for c2rust",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
            )
        ],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
):
    """C project build artifact cleaning tool for c2rust."""
    try:
        settings = Settings.load()
    except (ValueError, RuntimeError) as e:
        clean.err_console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


# Register commands
app.command(name="clean")(clean.command)


def main():
    """Entry point for pip-installed command."""
    app()


if __name__ == "__main__":
    main()
