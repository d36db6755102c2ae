"""Exception types raised by the clean workflow."""

from pathlib import Path
from typing import Optional


class C2RustCleanError(Exception):
    """Base class for errors surfaced to the user."""

    exit_code = 1


class ConfigToolNotFound(C2RustCleanError):
    """Raised when the c2rust-config tool cannot be located or executed."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(
            "c2rust-config not found. Please install c2rust-config first. "
            f"(tried: {tool})"
        )


class InvalidEnvironmentRoot(C2RustCleanError):
    """Raised when C2RUST_PROJECT_ROOT does not name an existing directory."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Invalid C2RUST_PROJECT_ROOT '{path}': {reason}")


class ConfigSaveFailed(C2RustCleanError):
    """Raised when a field could not be written through the config tool."""

    def __init__(self, field: str, detail: str):
        self.field = field
        self.detail = detail
        super().__init__(f"Failed to save configuration ({field}): {detail}")


class ConfigReadFailed(C2RustCleanError):
    """Raised when the config tool could not be queried."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to read configuration: {detail}")


class CommandExecutionFailed(C2RustCleanError):
    """Raised when the user command fails to spawn or exits non-zero.

    When the child ran and exited non-zero, ``exit_code`` carries its status so
    the CLI can propagate it.
    """

    def __init__(self, detail: str, exit_code: Optional[int] = None):
        self.detail = detail
        # Signal terminations report a negative returncode; those map to 1.
        if exit_code is not None and exit_code > 0:
            self.exit_code = exit_code
        super().__init__(f"Command execution failed: {detail}")


class BuildDirectoryError(C2RustCleanError):
    """Raised when a saved clean directory is missing or not a directory."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"{reason}: {path}")


class IoError(C2RustCleanError):
    """Raised when probing the filesystem fails (deleted cwd, permissions)."""

    def __init__(self, path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Filesystem error at {path}: {error.strerror or error}")
