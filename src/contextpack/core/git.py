# src/contextpack/core/git.py
import os
import shutil
import subprocess
from typing import Dict, Iterable, List, Optional, Protocol

import pathspec

from contextpack.exceptions import GitError, NotARepositoryError


def is_hidden(path: str) -> bool:
    """Fallback ignore rule: dotfiles are treated as ignored."""
    return os.path.basename(path).startswith(".")


class GitClient(Protocol):
    """The git operations discovery and processing need."""

    def is_available(self) -> bool:
        ...

    def is_git_ignored(self, path: str) -> bool:
        ...

    def get_git_files(self, directory: str) -> List[str]:
        ...


class RealGitClient:
    """GitClient backed by the git executable found on PATH."""

    def __init__(self, executable: str = "git"):
        self.executable = executable
        # Resolved once; later calls never re-probe PATH
        self._available = shutil.which(executable) is not None

    def is_available(self) -> bool:
        return self._available

    def is_git_ignored(self, path: str) -> bool:
        """
        Asks `git check-ignore`. Exit 0 means ignored, 1 means not ignored.
        Anything else (no git, not a repo, launch failure) falls back to the
        hidden-file rule.
        """
        if not self._available:
            return is_hidden(path)

        directory = os.path.dirname(path) or "."
        name = os.path.basename(path)
        try:
            result = subprocess.run(
                [self.executable, "-C", directory, "check-ignore", "-q", name],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            return is_hidden(path)

        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        return is_hidden(path)

    def get_git_files(self, directory: str) -> List[str]:
        """
        Lists tracked and untracked-but-not-ignored files under `directory`.
        Raises NotARepositoryError when git exits with 128, GitError otherwise.
        """
        if not self._available:
            raise GitError("git not available")

        try:
            result = subprocess.run(
                [self.executable, "-C", directory, "ls-files", "-z",
                 "--cached", "--others", "--exclude-standard"],
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise GitError(f"error running git ls-files: {e}") from e

        if result.returncode == 128:
            raise NotARepositoryError()
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise GitError(f"error running git ls-files (exit {result.returncode}): {stderr}")

        output = result.stdout.decode("utf-8", errors="surrogateescape")
        # --cached and --others can both report a path in unusual states
        return list(dict.fromkeys(
            os.path.join(directory, line) for line in output.split("\0") if line
        ))


class ScriptedGitClient:
    """
    GitClient with pre-programmed answers, for deterministic tests.

    Ignore lookups check explicit per-path answers first, then gitwildmatch
    patterns, then fall back to the hidden-file rule. Directories without
    a scripted listing behave like directories outside a repository.
    """

    def __init__(
        self,
        available: bool = True,
        files_in_dir: Optional[Dict[str, List[str]]] = None,
        ignored: Optional[Dict[str, bool]] = None,
        ignore_patterns: Optional[Iterable[str]] = None,
    ):
        self.available = available
        self.files_in_dir: Dict[str, List[str]] = dict(files_in_dir or {})
        self.ignored: Dict[str, bool] = dict(ignored or {})
        self.ignore_spec = pathspec.PathSpec.from_lines("gitwildmatch", list(ignore_patterns or []))

    def is_available(self) -> bool:
        return self.available

    def is_git_ignored(self, path: str) -> bool:
        if path in self.ignored:
            return self.ignored[path]
        if self.ignore_spec.match_file(path):
            return True
        return is_hidden(path)

    def get_git_files(self, directory: str) -> List[str]:
        if not self.available:
            raise GitError("git not available")
        if directory not in self.files_in_dir:
            raise NotARepositoryError()
        return list(self.files_in_dir[directory])

    def set_files_in_dir(self, directory: str, files: List[str]) -> None:
        self.files_in_dir[directory] = list(files)

    def set_ignored_files(self, ignored: Dict[str, bool]) -> None:
        self.ignored = dict(ignored)
