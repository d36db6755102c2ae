"""Persist and load the clean directory and command for a feature."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from typing import Optional, Tuple

from c2rust_clean.core.errors import ConfigReadFailed
from c2rust_clean.store.backends import ConfigBackend
from c2rust_clean.utils.inline_map import parse_inline_map

logger = logging.getLogger(__name__)

DEFAULT_FEATURE = "default"

CLEAN_KEY = "clean"
CLEAN_DIR_KEY = "clean.dir"
CLEAN_CMD_KEY = "clean.cmd"


@dataclass(frozen=True)
class CleanConfig:
    """Where and how the clean command runs."""

    dir: str
    command: Tuple[str, ...]
    feature: str = DEFAULT_FEATURE

    @property
    def command_line(self) -> str:
        """Command tokens as a single shell-quoted string (the persisted form)."""
        return shlex.join(self.command)

    @classmethod
    def from_command_line(
        cls, dir: str, command_line: str, feature: str = DEFAULT_FEATURE
    ) -> "CleanConfig":
        return cls(dir=dir, command=tuple(shlex.split(command_line)), feature=feature)


class ConfigStore:
    """Reads and writes CleanConfig records through a ConfigBackend."""

    def __init__(self, backend: ConfigBackend):
        self.backend = backend

    def check_tool_exists(self) -> None:
        """Preflight the backend; run once before any save or load.

        Raises:
            ConfigToolNotFound: If the backend tool is unavailable
        """
        self.backend.check_available()

    def save(self, config: CleanConfig) -> None:
        """Write clean.dir then clean.cmd under config.feature.

        The first failing field aborts the remaining writes.

        Raises:
            ConfigSaveFailed: Naming the field that could not be written
        """
        for key, value in ((CLEAN_DIR_KEY, config.dir), (CLEAN_CMD_KEY, config.command_line)):
            self.backend.set(key, value, config.feature)
            logger.debug(f"Saved {key}={value!r} for feature {config.feature}")

    def load(self, feature: str = DEFAULT_FEATURE) -> Optional[CleanConfig]:
        """Read back the saved record for feature.

        Returns:
            The saved CleanConfig, or None if nothing usable is stored

        Raises:
            ConfigReadFailed: If the backend cannot be queried or the record
                cannot be parsed
        """
        raw = self.backend.get(CLEAN_KEY, feature)
        if raw is None:
            return None

        try:
            fields = parse_inline_map(raw)
            command = fields.get("cmd")
            if not command:
                logger.debug(f"No clean.cmd stored for feature {feature}")
                return None
            return CleanConfig.from_command_line(
                dir=fields.get("dir") or ".", command_line=command, feature=feature
            )
        except ValueError as e:
            raise ConfigReadFailed(f"Unparseable '{CLEAN_KEY}' record {raw!r}: {e}") from e
