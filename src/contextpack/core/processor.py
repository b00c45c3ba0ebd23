# src/contextpack/core/processor.py
import os
from typing import Callable

from contextpack.config import Config
from contextpack.core.binary import is_binary
from contextpack.core.filters import excluded_by_name, should_process
from contextpack.utils.logger import Logger

Formatter = Callable[[str, bytes], str]


def process_file(path: str, config: Config, logger: Logger, formatter: Formatter) -> str:
    """
    Runs one candidate through the existence, ignore, filter and binary checks
    and returns the formatter's output, or "" if the file was skipped at any
    stage. Nothing here raises for per-file problems; they are logged instead.
    """
    # A. Existence (files may vanish between discovery and reading)
    try:
        os.stat(path)
    except FileNotFoundError:
        return ""
    except OSError as e:
        logger.warn("stat %s: %s", path, e)
        return ""

    # B. Ignore Check
    if config.git_client.is_git_ignored(path):
        if not config.ignore_gitignore:
            logger.verbose("skipping gitignored file: %s", path)
            return ""
        logger.verbose("processing gitignored file (bypass enabled): %s", path)

    # C. Name / Extension Filters
    if not should_process(path, config):
        if excluded_by_name(path, config):
            logger.verbose("skipping file (in exclude-names list): %s", path)
        return ""

    # D. Read
    try:
        with open(path, "rb") as f:
            content = f.read()
    except OSError as e:
        logger.warn("cannot read %s: %s", path, e)
        return ""

    # E. Binary Check
    if is_binary(content):
        logger.verbose("skipping binary file: %s", path)
        return ""

    return formatter(path, content)
