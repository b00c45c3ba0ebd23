# src/contextpack/utils/logger.py
import sys
from typing import Optional, TextIO


class Logger:
    """
    Minimal diagnostic sink with four severities.
    Everything goes to stderr; verbose messages only when verbose is on.
    """

    def __init__(self, verbose: bool = False, stream: Optional[TextIO] = None):
        self.is_verbose = verbose
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Looked up lazily so pytest's capsys sees the output
        return self._stream if self._stream is not None else sys.stderr

    def _emit(self, prefix: str, fmt: str, args) -> None:
        message = fmt % args if args else fmt
        print(f"{prefix}{message}", file=self.stream)

    def info(self, fmt: str, *args) -> None:
        self._emit("", fmt, args)

    def warn(self, fmt: str, *args) -> None:
        self._emit("warning: ", fmt, args)

    def error(self, fmt: str, *args) -> None:
        self._emit("error: ", fmt, args)

    def verbose(self, fmt: str, *args) -> None:
        if self.is_verbose:
            self._emit("", fmt, args)
