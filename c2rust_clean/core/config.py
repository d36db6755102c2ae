"""Runtime settings for c2rust-clean.

Settings are assembled once by the CLI layer from the process environment and
an optional XDG-compliant user config file, then passed explicitly into the
resolver, store and tracker so core logic never reads ``os.environ``.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

ENV_PROJECT_ROOT = "C2RUST_PROJECT_ROOT"
ENV_CONFIG_TOOL = "C2RUST_CONFIG"
ENV_NO_AUTO_COMMIT = "C2RUST_CLEAN_NO_AUTO_COMMIT"
ENV_LOG_LEVEL = "C2RUST_CLEAN_LOG_LEVEL"

DEFAULT_CONFIG_TOOL = "c2rust-config"
DEFAULT_MARKERS = (".c2rust", ".git", "Cargo.toml")
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class UserConfig:
    """Optional user configuration following the XDG Base Directory spec.

    Attributes:
        config_dir: Path to ~/.config/c2rust-clean/
        config_file: Path to ~/.config/c2rust-clean/config.toml
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """Initialize config paths using XDG Base Directory specification.

        Args:
            environ: Environment mapping to read XDG_CONFIG_HOME from
                (default: os.environ)
        """
        environ = os.environ if environ is None else environ
        xdg_config = environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
        self.config_dir = Path(xdg_config) / "c2rust-clean"
        self.config_file = self.config_dir / "config.toml"

        self._config = self._load() if self.config_file.exists() else {}

    def _load(self) -> dict:
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise RuntimeError(f"Failed to load config {self.config_file}: {e}") from e

    def get(self, key: str, default=None):
        """Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'tool.config_command')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_checked(self, key: str, default, expected: type, description: str):
        """Get a value by key and require it to be an instance of ``expected``.

        Raises:
            ValueError: If the configured value has another type
        """
        value = self.get(key, default)
        if not isinstance(value, expected):
            raise ValueError(
                f"Invalid '{key}' in {self.config_file}: expected {description}, got {value!r}"
            )
        return value


def env_flag_disables(value: Optional[str]) -> bool:
    """Return True when a boolean-like env value means "disabled".

    Any non-empty value other than "0" or "false" (case-insensitive) counts.
    """
    if value is None:
        return False
    value = value.strip()
    if not value:
        return False
    return value.lower() not in ("0", "false")


@dataclass(frozen=True)
class Settings:
    """Immutable per-invocation settings."""

    project_root_override: Optional[Path] = None
    config_tool: str = DEFAULT_CONFIG_TOOL
    auto_commit: bool = True
    markers: tuple = DEFAULT_MARKERS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def load(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        user_config: Optional[UserConfig] = None,
    ) -> "Settings":
        """Build settings from the environment, falling back to the user config file.

        Args:
            environ: Environment mapping (default: os.environ)
            user_config: Parsed user config (default: loaded from XDG location)

        Returns:
            Populated Settings

        Raises:
            ValueError: If a configured value has the wrong type or the log
                level is not recognised
        """
        environ = os.environ if environ is None else environ
        if user_config is None:
            user_config = UserConfig(environ)

        root = environ.get(ENV_PROJECT_ROOT)
        override = Path(root) if root else None

        config_tool = environ.get(ENV_CONFIG_TOOL) or user_config.get_checked(
            "tool.config_command", DEFAULT_CONFIG_TOOL, str, "a string"
        )

        if ENV_NO_AUTO_COMMIT in environ:
            auto_commit = not env_flag_disables(environ[ENV_NO_AUTO_COMMIT])
        else:
            auto_commit = user_config.get_checked(
                "commit.auto_commit", True, bool, "true or false"
            )

        markers = user_config.get_checked(
            "project.markers", list(DEFAULT_MARKERS), list, "a list of names"
        )
        for marker in markers:
            # "." or ".." would match in every directory
            if not isinstance(marker, str) or marker.strip() in ("", ".", ".."):
                raise ValueError(
                    f"Invalid marker {marker!r} in 'project.markers' of {user_config.config_file}"
                )
        markers = tuple(markers)

        log_level = (
            environ.get(ENV_LOG_LEVEL)
            or user_config.get_checked("logging.level", DEFAULT_LOG_LEVEL, str, "a string")
        ).strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(
                f"{ENV_LOG_LEVEL} must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )

        return cls(
            project_root_override=override,
            config_tool=config_tool,
            auto_commit=auto_commit,
            markers=markers,
            log_level=log_level,
        )
