"""Auto-commit of the .c2rust configuration area.

The store directory keeps its own git history. After a successful save the
tracker snapshots any pending changes as a new commit; it never creates the
repository itself.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from c2rust_clean.store.git_operations import GitOperations

logger = logging.getLogger(__name__)

STORE_DIR_NAME = ".c2rust"
AUTO_COMMIT_PREFIX = "Auto-commit: configuration changes"
FALLBACK_IDENTITY = ("c2rust-clean", "c2rust-clean@auto")


class StoreState(str, Enum):
    """Where the configuration area stands before an auto-commit."""

    NO_STORE = "NO_STORE"
    STORE_NO_REPO = "STORE_NO_REPO"
    REPO_CLEAN = "REPO_CLEAN"
    REPO_DIRTY = "REPO_DIRTY"


class ChangeTracker:
    """Detects and commits changes in <project_root>/.c2rust."""

    def __init__(self, project_root: Path, git: Optional[GitOperations] = None):
        self.project_root = project_root
        self.store_dir = project_root / STORE_DIR_NAME
        self.git = git or GitOperations(repo_path=str(self.store_dir))

    def _is_own_repo(self) -> bool:
        # An enclosing project repository must not be mistaken for the store.
        top_level = self.git.top_level()
        if top_level is None:
            logger.debug(f"No git repository in {self.store_dir}")
            return False
        if top_level != self.store_dir.resolve():
            logger.debug(f"{self.store_dir} belongs to enclosing repository {top_level}")
            return False
        return True

    def detect_state(self) -> StoreState:
        """Classify the configuration area.

        Raises:
            GitError: If the status scan of an existing store fails
        """
        if not self.store_dir.is_dir():
            return StoreState.NO_STORE
        if not self._is_own_repo():
            return StoreState.STORE_NO_REPO
        if self.git.status_porcelain():
            return StoreState.REPO_DIRTY
        return StoreState.REPO_CLEAN

    def has_uncommitted_changes(self) -> bool:
        """True when the store is a repository with pending changes."""
        return self.detect_state() == StoreState.REPO_DIRTY

    def _identity(self):
        if self.git.config_value("user.name") and self.git.config_value("user.email"):
            return None
        logger.debug(f"No git identity configured, committing as {FALLBACK_IDENTITY[0]}")
        return FALLBACK_IDENTITY

    def auto_commit_if_modified(self) -> Optional[str]:
        """Commit pending changes in the store, if any.

        Returns:
            SHA of the new commit, or None when nothing was committed

        Raises:
            GitError: If staging or committing fails
        """
        state = self.detect_state()
        logger.debug(f"Configuration store state: {state.value}")
        if state != StoreState.REPO_DIRTY:
            return None

        logger.info(f"Auto-committing changes in {self.store_dir}")
        self.git.add_all()

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        message = f"{AUTO_COMMIT_PREFIX} - {timestamp}"
        sha = self.git.commit(message, identity=self._identity())

        logger.info(f"Committed {sha[:12]} with message: {message}")
        return sha
