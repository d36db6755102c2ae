"""Core business logic modules."""

from c2rust_clean.core.config import Settings, UserConfig
from c2rust_clean.core.context import ProjectContext, relative_to_root, resolve_root
from c2rust_clean.core.executor import execute_command

__all__ = [
    "ProjectContext",
    "Settings",
    "UserConfig",
    "execute_command",
    "relative_to_root",
    "resolve_root",
]
