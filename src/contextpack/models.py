# src/contextpack/models.py
from dataclasses import dataclass

@dataclass(frozen=True)
class Stats:
    """Immutable statistics about one aggregation run."""
    files_processed: int = 0
    files_total: int = 0
    lines: int = 0
    chars: int = 0
    tokens: int = 0
