# src/contextpack/cli.py
import sys
import argparse
import os

# Module imports
from contextpack.config import (
    DEFAULT_FORMAT,
    new_config,
    with_exclude,
    with_exclude_names,
    with_format,
    with_ignore_gitignore,
    with_include,
    with_verbose,
)
from contextpack.core.aggregator import process_project
from contextpack.exceptions import ContextPackError
from contextpack.models import Stats
from contextpack.output import copy_to_clipboard, write_to_file
from contextpack.utils.logger import Logger

def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="contextpack",
        description="Collect the contents of files and directories into one LLM-friendly document.",
    )
    parser.add_argument("paths", nargs="*", help="Files or directories to collect")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--dry-run", action="store_true", help="Print the document instead of copying or writing it")
    parser.add_argument("--include", type=str, default="", help="Comma-separated extensions to include (e.g. .txt,.go)")
    parser.add_argument("--exclude", type=str, default="", help="Comma-separated extensions to exclude (e.g. .exe,.bin)")
    parser.add_argument(
        "--exclude-names",
        type=str,
        default="",
        help="Comma-separated file names to exclude (e.g. package-lock.json,yarn.lock)",
    )
    parser.add_argument(
        "--format",
        type=str,
        default=DEFAULT_FORMAT,
        help="Per-file template. Use {path} and {content} as placeholders",
    )
    parser.add_argument("--ignore-gitignore", action="store_true", help="Process files even if git ignores them")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write to this file instead of the clipboard (e.g. CONTEXT.md)",
    )
    parser.add_argument("--force", action="store_true", help="Allow overwriting an existing --output file")
    return parser

def build_config(args):
    """Turns parsed arguments into an immutable Config."""
    options = [with_verbose(args.verbose), with_ignore_gitignore(args.ignore_gitignore)]
    if args.include:
        options.append(with_include(args.include))
    if args.exclude:
        options.append(with_exclude(args.exclude))
    if args.exclude_names:
        options.append(with_exclude_names(args.exclude_names))
    if args.format:
        options.append(with_format(args.format))
    return new_config(*options)

def log_statistics(stats: Stats, logger: Logger):
    logger.info("--- contextpack ---")
    logger.info("- Files: %d/%d", stats.files_processed, stats.files_total)
    logger.info("- Lines: %d", stats.lines)
    logger.info("- Characters: %d", stats.chars)
    logger.info("- Estimated tokens: %d", stats.tokens)

def main():
    logger = Logger()
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()
        config = build_config(args)
        logger = Logger(config.verbose)

        # 2. Output target is checked before any scanning
        output_path = None
        if args.output:
            output_path = os.path.abspath(args.output)
            logger.verbose("Output will be written to: %s", output_path)
            if os.path.exists(output_path):
                if not args.force:
                    logger.error("Output file %s already exists. Use --force to overwrite.", output_path)
                    sys.exit(1)
                logger.verbose("Output file %s exists, will be overwritten because --force is set", output_path)

        if not args.paths:
            logger.error("usage: %s [options] path1 [path2 ...]", parser.prog)
            parser.print_help(sys.stderr)
            sys.exit(1)

        # 3. Collect
        try:
            document, stats = process_project(args.paths, config, logger)
        except ContextPackError as e:
            logger.error("Failed to process project: %s", e)
            sys.exit(1)

        # 4. Output: dry-run > file > clipboard
        try:
            if args.dry_run:
                print("### DRY RUN: Content that would be generated ###")
                print(document)
                logger.info("Dry run complete. No file written or clipboard modified.")
            elif output_path:
                logger.verbose("Writing content (%d chars) to file: %s", len(document), output_path)
                write_to_file(document, output_path, overwrite=args.force)
                logger.info("Output successfully written to %s", output_path)
            else:
                copy_to_clipboard(document)
                logger.info("Content successfully copied to clipboard.")
        except ContextPackError as e:
            logger.error("%s", e)
            sys.exit(1)

        log_statistics(stats, logger)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        logger.error("An unexpected error occurred: %s", e)
        sys.exit(1)

if __name__ == "__main__":
    main()
