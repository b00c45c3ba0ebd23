# src/contextpack/utils/stats.py
from typing import Tuple

# str.isspace() also accepts the ASCII file/group/record/unit separators;
# they are not word breaks here
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_space(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_WHITESPACE


def estimate_token_count(text: str) -> int:
    """
    Rough token estimate: the number of maximal runs of non-whitespace
    characters. Much cruder than a real LLM tokenizer; only meant as a hint.
    """
    count = 0
    in_token = False
    for ch in text:
        if _is_space(ch):
            if in_token:
                count += 1
                in_token = False
        else:
            in_token = True
    if in_token:
        count += 1
    return count


def calculate_statistics(text: str) -> Tuple[int, int, int]:
    """Returns (chars, lines, tokens) for the given text."""
    chars = len(text)
    lines = text.count("\n") + 1
    tokens = estimate_token_count(text)
    return chars, lines, tokens
