# src/contextpack/exceptions.py
from typing import Optional

from contextpack.models import Stats


class ContextPackError(Exception):
    """Base exception for contextpack errors."""
    pass


class NoPathsError(ContextPackError):
    """Raised when no input paths were supplied."""

    def __init__(self, message: str = "no paths provided"):
        super().__init__(message)


class NoFilesProcessedError(ContextPackError):
    """
    Raised when candidate files were found but every one of them was
    filtered out. Carries the run statistics so callers can still report them.
    """

    def __init__(self, stats: Optional[Stats] = None):
        super().__init__("no files were processed from the provided paths")
        self.stats = stats if stats is not None else Stats()


class DiscoveryError(ContextPackError):
    """Raised when a directory cannot be listed."""
    pass


class GitError(ContextPackError):
    """Raised when git cannot list a directory."""
    pass


class NotARepositoryError(GitError):
    """Raised when the directory is not inside a git work tree."""

    def __init__(self, message: str = "not a git repository"):
        super().__init__(message)


class OutputError(ContextPackError):
    """Raised when the document cannot be written to its destination."""
    pass


class OutputExistsError(OutputError):
    """Raised when the output file exists and overwriting is not allowed."""
    pass


class ClipboardError(OutputError):
    """Raised when copying to the clipboard fails."""
    pass
