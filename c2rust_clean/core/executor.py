"""Run the user's clean command in the resolved directory."""

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from c2rust_clean.core.errors import CommandExecutionFailed

# Child output and paths are relayed as-is: no markup, emoji codes or highlighting
_VERBATIM = {"markup": False, "emoji": False, "highlight": False}


def execute_command(
    directory: Path, command: Sequence[str], console: Optional[Console] = None
) -> int:
    """Execute command in directory, relaying its captured output.

    Args:
        directory: Working directory for the child process
        command: Program followed by its arguments
        console: Console for progress and relayed output (default: stdout)

    Returns:
        The child's exit code (always 0; failures raise)

    Raises:
        CommandExecutionFailed: If command is empty, cannot be spawned, or
            exits non-zero
    """
    if not command:
        raise CommandExecutionFailed("No command provided")

    console = console or Console(soft_wrap=True)
    command_str = " ".join(command)

    console.print(f"Executing command: {command_str}", **_VERBATIM)
    console.print(f"In directory: {directory}", **_VERBATIM)
    console.print()

    try:
        result = subprocess.run(
            list(command),
            cwd=directory,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise CommandExecutionFailed(
            f"Failed to execute command '{command_str}': {e}"
        ) from e

    if result.stdout:
        console.print("stdout:")
        console.print(result.stdout, **_VERBATIM)

    if result.stderr:
        console.print("stderr:")
        console.print(result.stderr, **_VERBATIM)

    if result.returncode >= 0:
        console.print(f"Exit code: {result.returncode}")
    else:
        console.print("Process terminated by signal")
    console.print()

    if result.returncode != 0:
        raise CommandExecutionFailed(
            f"Command '{command_str}' failed with exit code {result.returncode}",
            exit_code=result.returncode,
        )

    return result.returncode
