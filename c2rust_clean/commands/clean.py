"""Clean command implementation."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from c2rust_clean.core.config import Settings
from c2rust_clean.core.context import ProjectContext
from c2rust_clean.core.errors import BuildDirectoryError, C2RustCleanError
from c2rust_clean.core.executor import execute_command
from c2rust_clean.store.backends import ToolConfigBackend
from c2rust_clean.store.change_tracker import ChangeTracker
from c2rust_clean.store.config_store import DEFAULT_FEATURE, CleanConfig, ConfigStore
from c2rust_clean.store.git_operations import GitError

console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


class MissingCleanCommand(C2RustCleanError):
    """Raised when no command is given and none was saved for the feature."""

    def __init__(self, feature: str):
        super().__init__(
            "No clean command given (CLEAN_CMD) and no saved configuration "
            f"for feature '{feature}'.\n"
            "Usage: c2rust-clean clean [--feature NAME] -- <command> [args...]"
        )


def _replay_target(context: ProjectContext, saved: CleanConfig) -> Path:
    directory = context.resolve_dir(saved.dir)
    if not directory.exists():
        raise BuildDirectoryError(directory, "Clean directory does not exist")
    if not directory.is_dir():
        raise BuildDirectoryError(directory, "Clean path is not a directory")
    return directory


def _auto_commit(context: ProjectContext) -> None:
    """Snapshot .c2rust changes; failures only produce a warning."""
    try:
        ChangeTracker(context.project_root).auto_commit_if_modified()
    except (GitError, OSError) as e:
        err_console.print(f"[yellow]Warning: Auto-commit failed:[/yellow] {escape(str(e))}")
        err_console.print("[yellow]Continuing without auto-commit.[/yellow]")


def run_clean(settings: Settings, clean_cmd: List[str], feature: str, cwd: Optional[Path] = None) -> None:
    """Resolve the project, run the clean command and persist where it ran.

    With no clean_cmd, the command and directory saved for feature are replayed.

    Raises:
        C2RustCleanError: On any fatal failure
    """
    context = ProjectContext(settings, cwd=cwd)
    err_console.print(f"[dim]Project root: {escape(str(context.project_root))}[/dim]")

    store = ConfigStore(ToolConfigBackend(settings.config_tool, context.project_root))
    store.check_tool_exists()

    if clean_cmd:
        directory = context.cwd
        config = CleanConfig(dir=context.relative_dir, command=tuple(clean_cmd), feature=feature)
    else:
        config = store.load(feature)
        if config is None:
            raise MissingCleanCommand(feature)
        directory = _replay_target(context, config)
        console.print(f"[dim]Replaying saved configuration for feature '{escape(feature)}'[/dim]")

    err_console.print(f"[dim]Relative clean directory: {escape(config.dir)}[/dim]")

    execute_command(directory, config.command, console=console)

    store.save(config)
    console.print(f"[green]✓ Configuration saved[/green] (feature: {escape(feature)})")

    if settings.auto_commit:
        _auto_commit(context)

    console.print("[green]✓ Clean command executed successfully.[/green]")


def command(
    ctx: typer.Context,
    clean_cmd: Optional[List[str]] = typer.Argument(
        None,
        metavar="CLEAN_CMD...",
        help="Clean command to execute. Use -- to separate it from c2rust-clean "
        "options (e.g. c2rust-clean clean -- make clean). Omit to replay the saved command.",
        show_default=False,
    ),
    feature: str = typer.Option(
        DEFAULT_FEATURE, "--feature", help="Feature namespace for the saved configuration"
    ),
):
    """Execute clean command."""
    settings: Settings = ctx.obj
    try:
        run_clean(settings, clean_cmd or [], feature)
    except C2RustCleanError as e:
        err_console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code) from e
