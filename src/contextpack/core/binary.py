# src/contextpack/core/binary.py
from contextpack.config import BINARY_NON_PRINTABLE_THRESHOLD, BINARY_SAMPLE_SIZE

_WHITESPACE = frozenset(b"\n\r\t ")
_DEL = 127


def is_binary(content: bytes) -> bool:
    """
    Heuristic check for non-text content.

    Any null byte means binary. Otherwise the first 512 bytes are sampled and
    the content is binary when more than 30% of them are ASCII control
    characters (other than newline, carriage return, tab and space) or DEL.

    Only the prefix is inspected, so large files stay cheap. Text in some
    unusual encodings (e.g. UTF-16) can be misclassified; that is a known
    limitation of the heuristic.
    """
    if b"\0" in content:
        return True

    sample = content[:BINARY_SAMPLE_SIZE]
    non_printable = sum(
        1 for b in sample
        if (b < 32 and b not in _WHITESPACE) or b == _DEL
    )
    return non_printable > len(sample) * BINARY_NON_PRINTABLE_THRESHOLD
