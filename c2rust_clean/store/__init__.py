"""Configuration persistence and history."""

from c2rust_clean.store.backends import ConfigBackend, ToolConfigBackend
from c2rust_clean.store.change_tracker import ChangeTracker, StoreState
from c2rust_clean.store.config_store import CleanConfig, ConfigStore
from c2rust_clean.store.git_operations import GitError, GitOperations

__all__ = [
    "ChangeTracker",
    "CleanConfig",
    "ConfigBackend",
    "ConfigStore",
    "GitError",
    "GitOperations",
    "StoreState",
    "ToolConfigBackend",
]
