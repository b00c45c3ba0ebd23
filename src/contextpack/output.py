# src/contextpack/output.py
from pathlib import Path
from typing import Union

import pyperclip

from contextpack.exceptions import ClipboardError, OutputError, OutputExistsError


def write_to_file(content: str, file_path: Union[str, Path], overwrite: bool = False) -> None:
    """
    Writes the document to `file_path`, creating parent directories.
    An existing file is only replaced when `overwrite` is True.
    """
    path = Path(file_path)

    if not overwrite and path.exists():
        raise OutputExistsError(
            f"file already exists and overwrite is not allowed: {path}"
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"failed to create parent directories for '{path}': {e}") from e

    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except (OSError, UnicodeError) as e:
        raise OutputError(f"failed to write to file '{path}': {e}") from e


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"clipboard copy failed: {e}") from e
