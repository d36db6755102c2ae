"""Key/value backends for the clean configuration.

The production backend shells out to the ``c2rust-config`` tool; tests use an
in-memory implementation of the same protocol.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol

from c2rust_clean.core.errors import ConfigReadFailed, ConfigSaveFailed, ConfigToolNotFound

logger = logging.getLogger(__name__)


class ConfigBackend(Protocol):
    """Narrow interface the ConfigStore needs from a configuration backend."""

    def check_available(self) -> None:
        """Raise ConfigToolNotFound if the backend cannot be used."""

    def set(self, key: str, value: str, feature: str) -> None:
        """Persist one field under the feature scope."""

    def get(self, key: str, feature: str) -> Optional[str]:
        """Return the raw value for key, or None when absent."""


class ToolConfigBackend:
    """ConfigBackend that drives the external c2rust-config tool."""

    def __init__(self, tool: str, project_root: Path):
        """Initialize the backend.

        Args:
            tool: c2rust-config executable (bare name resolved via PATH, or a path)
            project_root: Directory the tool is run from
        """
        self.tool = tool
        self.project_root = project_root

    def _config_args(self, feature: str) -> List[str]:
        return [self.tool, "config", "--make", "--feature", feature]

    def check_available(self) -> None:
        """Probe the tool with ``--help``.

        Raises:
            ConfigToolNotFound: If the tool cannot be spawned or exits non-zero
        """
        try:
            result = subprocess.run(
                [self.tool, "--help"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"Failed to spawn {self.tool}: {e}")
            raise ConfigToolNotFound(self.tool) from e

        if result.returncode != 0:
            logger.debug(f"{self.tool} --help exited with {result.returncode}")
            raise ConfigToolNotFound(self.tool)

    def set(self, key: str, value: str, feature: str) -> None:
        """Run ``config --make --feature F --set KEY VALUE``.

        Raises:
            ConfigSaveFailed: If the tool cannot be spawned or exits non-zero
        """
        args = self._config_args(feature) + ["--set", key, value]
        logger.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                cwd=self.project_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ConfigSaveFailed(key, f"Failed to execute {self.tool}: {e}") from e

        if result.returncode != 0:
            raise ConfigSaveFailed(key, result.stderr.strip() or f"exit code {result.returncode}")

    def get(self, key: str, feature: str) -> Optional[str]:
        """Run ``config --make --feature F --list KEY``.

        A non-zero exit means the key is absent, not an error.

        Raises:
            ConfigReadFailed: If the tool cannot be spawned
        """
        args = self._config_args(feature) + ["--list", key]
        logger.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                cwd=self.project_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ConfigReadFailed(f"Failed to execute {self.tool}: {e}") from e

        if result.returncode != 0:
            logger.debug(f"{key} not set for feature {feature}: {result.stderr.strip()}")
            return None

        value = result.stdout.strip()
        return value or None
