# src/contextpack/core/aggregator.py
import os
import stat
from typing import List, Optional, Sequence, Tuple

from contextpack.config import CONTEXT_CLOSE, CONTEXT_OPEN, Config, new_config
from contextpack.core.processor import process_file
from contextpack.core.scanner import get_files_from_dir
from contextpack.exceptions import DiscoveryError, NoFilesProcessedError, NoPathsError
from contextpack.models import Stats
from contextpack.utils.logger import Logger
from contextpack.utils.stats import calculate_statistics


def format_segment(template: str, path: str, content: bytes) -> str:
    """Substitutes {path}, then {content}, into the template."""
    # Undecodable file names arrive as lone surrogates; they cannot be encoded on output
    shown = path.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    text = content.decode("utf-8", errors="replace")
    return template.replace("{path}", shown).replace("{content}", text)


def wrap_in_context(content: str) -> str:
    return CONTEXT_OPEN + content + CONTEXT_CLOSE


def discover_files(paths: Sequence[str], config: Config, logger: Logger) -> List[str]:
    """
    Expands every input path into candidate files, walking each directory
    exactly once. Unreadable inputs and directories are logged and skipped.
    """
    all_files: List[str] = []
    for path in paths:
        logger.verbose("Processing path: %s", path)
        try:
            info = os.stat(path)
        except OSError as e:
            logger.warn("%s", e)
            continue

        if stat.S_ISDIR(info.st_mode):
            try:
                all_files.extend(get_files_from_dir(path, config))
            except DiscoveryError as e:
                logger.warn("Error getting files from directory %s: %s", path, e)
        else:
            all_files.append(path)
    return all_files


def _aggregate(paths: Sequence[str], config: Config, logger: Logger) -> Tuple[str, int, int]:
    all_files = discover_files(paths, config, logger)
    total = len(all_files)
    logger.verbose("Found %d total files across all paths", total)

    processed = 0

    def formatter(file_path: str, content: bytes) -> str:
        nonlocal processed
        processed += 1
        logger.verbose("Processing file (%d/%d): %s", processed, total, file_path)
        return format_segment(config.format, file_path, content)

    segments = []
    for file_path in all_files:
        output = process_file(file_path, config, logger, formatter)
        if output:
            segments.append(output)

    return "".join(segments), processed, total


def _build_stats(document: str, processed: int, total: int) -> Stats:
    chars, lines, tokens = calculate_statistics(document)
    return Stats(
        files_processed=processed,
        files_total=total,
        lines=lines,
        chars=chars,
        tokens=tokens,
    )


def process_paths(
    paths: Sequence[str], config: Config, logger: Logger
) -> Tuple[str, Stats]:
    """
    Concatenates the formatted segments of every candidate under `paths`,
    without the top-level context wrapper. Statistics describe the
    unwrapped content.

    Raises NoFilesProcessedError when candidates existed but none survived
    filtering.
    """
    content, processed, total = _aggregate(paths, config, logger)
    stats = _build_stats(content, processed, total)
    if paths and total > 0 and processed == 0:
        raise NoFilesProcessedError(stats)
    return content, stats


def process_project(
    paths: Sequence[str],
    config: Optional[Config] = None,
    logger: Optional[Logger] = None,
) -> Tuple[str, Stats]:
    """
    Collects and formats content from the given files and directories.

    Returns the document wrapped in <context> tags together with statistics
    computed over that document.

    Raises:
        NoPathsError: if `paths` is empty.
        NoFilesProcessedError: if files were found but all were filtered out.
    """
    if config is None:
        config = new_config()
    if logger is None:
        logger = Logger(config.verbose)

    if not paths:
        raise NoPathsError()

    content, processed, total = _aggregate(paths, config, logger)
    document = wrap_in_context(content)
    stats = _build_stats(document, processed, total)

    if total > 0 and processed == 0:
        raise NoFilesProcessedError(stats)

    return document, stats
