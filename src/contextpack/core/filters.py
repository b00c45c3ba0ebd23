# src/contextpack/core/filters.py
import os

from contextpack.config import Config


def excluded_by_name(path: str, config: Config) -> bool:
    return os.path.basename(path) in config.exclude_names


def should_process(path: str, config: Config) -> bool:
    """
    Decides whether a file passes the name and extension filters.

    Precedence: excluded names, then the include list (when non-empty), then
    the exclude list. An extension present in both lists is rejected.
    """
    if excluded_by_name(path, config):
        return False

    ext = os.path.splitext(path)[1].lower()

    if config.include_exts and ext not in config.include_exts:
        return False

    if config.exclude_exts and ext in config.exclude_exts:
        return False

    return True
