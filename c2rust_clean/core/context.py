"""Project root detection and relative path resolution."""

import logging
from pathlib import Path
from typing import Optional

from c2rust_clean.core.config import Settings
from c2rust_clean.core.errors import InvalidEnvironmentRoot, IoError

logger = logging.getLogger(__name__)


def resolve_root(start_dir: Path, settings: Settings) -> Path:
    """Resolve the project root for an invocation started in ``start_dir``.

    The explicit override wins when set; otherwise the closest ancestor of
    ``start_dir`` (inclusive) holding any marker from ``settings.markers`` is
    used. With no marker anywhere up to the filesystem root, ``start_dir``
    itself is the root.

    Args:
        start_dir: Absolute directory to start the search from
        settings: Invocation settings carrying the override and marker set

    Returns:
        Absolute path to the project root

    Raises:
        InvalidEnvironmentRoot: If the override is not an existing directory
        IoError: If a filesystem probe fails
    """
    override = settings.project_root_override
    try:
        if override is not None:
            if not override.exists():
                raise InvalidEnvironmentRoot(override, "path does not exist")
            if not override.is_dir():
                raise InvalidEnvironmentRoot(override, "path is not a directory")
            root = override.resolve()
            logger.debug(f"Using C2RUST_PROJECT_ROOT: {root}")
            return root

        found = find_marker_root(start_dir, settings.markers)
    except OSError as e:
        raise IoError(e.filename or override or start_dir, e) from e

    if found is None:
        logger.debug(f"No project marker found, using start directory: {start_dir}")
        return start_dir
    return found


def find_marker_root(start_dir: Path, markers) -> Optional[Path]:
    """Walk up from start_dir to the closest directory containing any marker.

    Returns:
        Matching directory, or None if no ancestor has a marker
    """
    for current in (start_dir, *start_dir.parents):
        for marker in markers:
            if (current / marker).exists():
                logger.debug(f"Found marker {marker} at: {current}")
                return current
    return None


def relative_to_root(root: Path, current_dir: Path) -> str:
    """Express current_dir relative to root with forward slashes.

    Returns "." at the root itself, and also when current_dir lies outside
    root (a warning is logged in that case).
    """
    try:
        relative = current_dir.relative_to(root)
    except ValueError:
        logger.warning(
            f"Current directory {current_dir} is not under project root {root}; "
            "using '.' as the clean directory"
        )
        return "."

    if not relative.parts:
        return "."
    return "/".join(relative.parts)


class ProjectContext:
    """Resolved locations for one invocation.

    Attributes:
        cwd: Current working directory (invocation location)
        project_root: Resolved project root
        relative_dir: cwd relative to project_root ("." at the root)
        store_dir: Persisted configuration area (<root>/.c2rust)
    """

    STORE_DIR_NAME = ".c2rust"

    def __init__(self, settings: Settings, cwd: Optional[Path] = None):
        """Resolve the project root and relative directory from cwd.

        Args:
            settings: Invocation settings
            cwd: Working directory to start detection from (default: Path.cwd())

        Raises:
            InvalidEnvironmentRoot: If the root override is invalid
            IoError: If the working directory cannot be determined
        """
        try:
            self.cwd = (cwd or Path.cwd()).resolve()
        except OSError as e:
            raise IoError(cwd or "current working directory", e) from e
        self.project_root = resolve_root(self.cwd, settings)
        self.relative_dir = relative_to_root(self.project_root, self.cwd)
        self.store_dir = self.project_root / self.STORE_DIR_NAME

    def resolve_dir(self, relative_dir: str) -> Path:
        """Convert a saved relative clean directory to an absolute path."""
        if relative_dir == ".":
            return self.project_root
        return self.project_root / Path(*relative_dir.split("/"))
