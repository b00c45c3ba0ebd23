# examples/simple_usage.py
"""
Minimal library usage: build a Config, collect a directory, report the
statistics, then print the document or write it to a file.

    python examples/simple_usage.py --dir ./src
    python examples/simple_usage.py --dir ./src --include .py,.md --output codebase.md
"""
import sys
import argparse

from contextpack.config import new_config, with_exclude, with_include, with_verbose
from contextpack.core.aggregator import process_project
from contextpack.exceptions import ContextPackError
from contextpack.output import write_to_file


def main(argv=None):
    parser = argparse.ArgumentParser(description="contextpack library example")
    parser.add_argument("--dir", default=".", help="Directory or file to process")
    parser.add_argument("--output", default="", help="Output file (prints to console if empty)")
    parser.add_argument("--include", default="", help="Extensions to include, e.g. '.py,.txt'")
    parser.add_argument("--exclude", default=".exe,.bin,.obj,.jpg,.png,.gif", help="Extensions to exclude")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    options = [with_verbose(args.verbose), with_exclude(args.exclude)]
    if args.include:
        options.append(with_include(args.include))
    config = new_config(*options)

    try:
        content, stats = process_project([args.dir], config)
    except ContextPackError as e:
        print(f"Error processing files: {e}", file=sys.stderr)
        return 1

    print("\nContent statistics:")
    print(f"- Files: {stats.files_processed}/{stats.files_total}")
    print(f"- Characters: {stats.chars}")
    print(f"- Lines: {stats.lines}")
    print(f"- Estimated tokens: {stats.tokens}\n")

    if args.output:
        try:
            write_to_file(content, args.output, overwrite=True)
        except ContextPackError as e:
            print(f"Error writing to file: {e}", file=sys.stderr)
            return 1
        print(f"Content successfully written to {args.output}")
    else:
        print("------- GENERATED CONTENT -------")
        print(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
