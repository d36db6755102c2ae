"""Shared fixtures for c2rust-clean tests."""

import stat
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import pytest

from c2rust_clean.core.errors import ConfigSaveFailed, ConfigToolNotFound


class InMemoryConfigBackend:
    """ConfigBackend fake that renders the ``clean`` record like c2rust-config."""

    def __init__(self, fail_on_key: Optional[str] = None, available: bool = True):
        self.values: Dict[Tuple[str, str], str] = {}
        self.set_calls = []
        self.fail_on_key = fail_on_key
        self.available = available
        self.checked = False

    def check_available(self) -> None:
        self.checked = True
        if not self.available:
            raise ConfigToolNotFound("in-memory")

    def set(self, key: str, value: str, feature: str) -> None:
        self.set_calls.append((key, value, feature))
        if key == self.fail_on_key:
            raise ConfigSaveFailed(key, "simulated failure")
        self.values[(feature, key)] = value

    def get(self, key: str, feature: str) -> Optional[str]:
        if key != "clean":
            return self.values.get((feature, key))

        fields = []
        for name in ("dir", "cmd"):
            value = self.values.get((feature, f"clean.{name}"))
            if value is None:
                continue
            quote = "'" if '"' in value else '"'
            fields.append(f"{name} = {quote}{value}{quote}")
        if not fields:
            return None
        return "{" + ", ".join(fields) + "}"


@pytest.fixture
def memory_backend():
    """Fresh in-memory configuration backend."""
    return InMemoryConfigBackend()


@pytest.fixture
def make_memory_backend():
    """Factory for in-memory backends with failure knobs."""
    return InMemoryConfigBackend


FAKE_TOOL_SCRIPT = """#!/bin/bash
if [ "$1" = "--help" ]; then
  exit 0
fi
echo "$@" >> "{log}"
feature=default
mode=""
while [ $# -gt 0 ]; do
  case "$1" in
    --feature) feature="$2"; shift 2 ;;
    --set) mode=set; key="$2"; value="$3"; shift 3 ;;
    --list) mode=list; key="$2"; shift 2 ;;
    *) shift ;;
  esac
done
state="{state}"
if [ "$mode" = "set" ]; then
  if [ "$key" = "{fail_key}" ]; then
    echo "cannot write $key" >&2
    exit 1
  fi
  printf '%s' "$value" > "$state/$feature.$key"
  exit 0
fi
if [ "$mode" = "list" ]; then
  if [ "$key" = "clean" ]; then
    [ -f "$state/$feature.clean.cmd" ] || exit 1
    printf '{{dir = "%s", cmd = "%s"}}\\n' "$(cat "$state/$feature.clean.dir")" "$(cat "$state/$feature.clean.cmd")"
    exit 0
  fi
  [ -f "$state/$feature.$key" ] || exit 1
  cat "$state/$feature.$key"
  exit 0
fi
exit 0
"""


class FakeConfigTool:
    """Shell-script stand-in for c2rust-config that records its arguments."""

    def __init__(self, base: Path, fail_key: str = ""):
        self.path = base / "mock-c2rust-config"
        self.log_file = base / "config.log"
        self.state_dir = base / "config-state"
        self.state_dir.mkdir()
        self.path.write_text(
            FAKE_TOOL_SCRIPT.format(log=self.log_file, state=self.state_dir, fail_key=fail_key)
        )
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def log(self) -> str:
        return self.log_file.read_text() if self.log_file.exists() else ""

    def stored(self, key: str, feature: str = "default") -> Optional[str]:
        path = self.state_dir / f"{feature}.{key}"
        return path.read_text() if path.exists() else None


@pytest.fixture
def fake_tool(tmp_path):
    """Executable fake c2rust-config living outside the project tree."""
    if sys.platform == "win32":
        pytest.skip("fake c2rust-config is a bash script")
    tool_dir = tmp_path / "tool"
    tool_dir.mkdir()
    return FakeConfigTool(tool_dir)


@pytest.fixture
def failing_fake_tool(tmp_path):
    """Fake c2rust-config whose --set of clean.cmd fails."""
    if sys.platform == "win32":
        pytest.skip("fake c2rust-config is a bash script")
    tool_dir = tmp_path / "failing-tool"
    tool_dir.mkdir()
    return FakeConfigTool(tool_dir, fail_key="clean.cmd")


@pytest.fixture
def isolated_git_env(tmp_path, monkeypatch):
    """Hide user/system git config so no commit identity is configured."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
    for var in (
        "GIT_AUTHOR_NAME",
        "GIT_AUTHOR_EMAIL",
        "GIT_COMMITTER_NAME",
        "GIT_COMMITTER_EMAIL",
        "GIT_DIR",
        "GIT_WORK_TREE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
