# src/contextpack/core/scanner.py
import os
from typing import List

from contextpack.config import Config
from contextpack.exceptions import DiscoveryError, GitError, NotARepositoryError


def _raise_walk_error(error: OSError):
    raise error


def walk_directory(directory: str) -> List[str]:
    """
    Recursively lists files under `directory`, skipping hidden entries.

    Directories whose name starts with '.' are pruned (the walk root itself is
    never pruned) and dot-named files are not listed. Entries are visited in
    sorted order so repeated runs produce the same listing.
    """
    files: List[str] = []
    # os.walk lets us modify `dirs` in place, which stops descent into pruned directories
    for root, dirs, names in os.walk(directory, onerror=_raise_walk_error):
        for d in list(dirs):
            if d.startswith("."):
                dirs.remove(d)
        dirs.sort()

        for name in sorted(names):
            if name.startswith("."):
                continue
            files.append(os.path.join(root, name))
    return files


def _existing(paths: List[str]) -> List[str]:
    # git listings can be stale (deleted but still in the index)
    return [p for p in paths if os.path.exists(p)]


def get_files_from_dir(directory: str, config: Config) -> List[str]:
    """
    Lists candidate files in a directory.

    Uses git when available, so the repository's own ignore rules decide
    what is listed. Falls back to a plain walk when git is unavailable or the
    directory is not inside a repository. Any other failure raises
    DiscoveryError.
    """
    client = config.git_client
    if client.is_available():
        try:
            return _existing(client.get_git_files(directory))
        except NotARepositoryError:
            pass
        except GitError as e:
            raise DiscoveryError(str(e)) from e

    try:
        return walk_directory(directory)
    except OSError as e:
        raise DiscoveryError(f"cannot walk {directory}: {e}") from e
