"""Git subprocess wrapper for the private .c2rust history store."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence


class GitError(Exception):
    """Exception raised when git operations fail."""

    pass


class GitOperations:
    """Wrapper for git subprocess commands with proper error handling."""

    def __init__(self, repo_path: Optional[str] = None):
        """Initialize GitOperations.

        Args:
            repo_path: Directory git runs in. If None, uses current directory.
        """
        self.repo_path = repo_path

    def _run_git_command(
        self, args: List[str], check: bool = True
    ) -> subprocess.CompletedProcess:
        """Run a git command with proper error handling.

        Args:
            args: Git command arguments (e.g., ["git", "status"])
            check: Whether to raise exception on non-zero exit code

        Returns:
            CompletedProcess object with command results

        Raises:
            GitError: If command fails and check=True
        """
        try:
            result = subprocess.run(
                args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitError(f"Git executable not found: {e}") from e
        except OSError as e:
            raise GitError(f"Unexpected error running git command: {e}") from e

        if check and result.returncode != 0:
            raise GitError(
                f"Git command failed: {' '.join(args)}\n"
                f"Exit code: {result.returncode}\n"
                f"stdout: {result.stdout}\n"
                f"stderr: {result.stderr}"
            )
        return result

    def top_level(self) -> Optional[Path]:
        """Return the work tree root containing repo_path, or None outside a repo."""
        result = self._run_git_command(
            ["git", "rev-parse", "--show-toplevel"], check=False
        )
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return Path(result.stdout.strip()).resolve()

    def status_porcelain(self) -> List[str]:
        """Return changed entries (staged, unstaged and untracked), one per line."""
        result = self._run_git_command(
            ["git", "status", "--porcelain", "--untracked-files=all"]
        )
        return [line for line in result.stdout.splitlines() if line.strip()]

    def add_all(self) -> None:
        """Stage every change, including deletions and renames."""
        self._run_git_command(["git", "add", "-A"])

    def config_value(self, key: str) -> Optional[str]:
        """Read a git config value visible from repo_path, or None if unset."""
        result = self._run_git_command(["git", "config", "--get", key], check=False)
        value = result.stdout.strip()
        return value if result.returncode == 0 and value else None

    def commit(self, message: str, identity: Optional[Sequence[str]] = None) -> str:
        """Commit the staged tree on top of HEAD (or as the root commit).

        Args:
            message: Commit message
            identity: Optional (name, email) applied for this commit only

        Returns:
            SHA of the new commit

        Raises:
            GitError: If the commit cannot be created
        """
        args = ["git"]
        if identity is not None:
            name, email = identity
            args += ["-c", f"user.name={name}", "-c", f"user.email={email}"]
        args += ["commit", "--no-verify", "-m", message]
        self._run_git_command(args)

        result = self._run_git_command(["git", "rev-parse", "HEAD"])
        return result.stdout.strip()
