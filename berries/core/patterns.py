"""Catalog of every row pattern holding exactly three berries."""

from __future__ import annotations
from itertools import combinations
from typing import Iterable, Tuple

from .board import N, BERRIES_PER_UNIT

Pattern = Tuple[int, ...]


def _build_row_patterns() -> Tuple[Pattern, ...]:
    patterns = []
    for positions in combinations(range(N), BERRIES_PER_UNIT):
        row = [0] * N
        for p in positions:
            row[p] = 1
        patterns.append(tuple(row))
    return tuple(patterns)


# All 84 ways to choose 3 of 9 positions, in lexicographic order of positions.
ROW_PATTERNS: Tuple[Pattern, ...] = _build_row_patterns()


def get_all_patterns() -> Tuple[Pattern, ...]:
    """Return the full, immutable pattern catalog."""
    return ROW_PATTERNS


def get_patterns_excluding_columns(columns: Iterable[int]) -> Tuple[Pattern, ...]:
    """
    Return the patterns that place no berry in any of the given columns.

    Catalog order is preserved.
    """
    forbidden = set(columns)
    if not forbidden:
        return ROW_PATTERNS
    return tuple(p for p in ROW_PATTERNS if not any(p[c] for c in forbidden))


def pattern_columns(pattern: Pattern) -> Tuple[int, ...]:
    """Columns marked by a pattern, ascending."""
    return tuple(c for c, v in enumerate(pattern) if v)


def pattern_to_mask(pattern: Pattern) -> int:
    """Encode a pattern as a 9-bit mask; bit c is set when column c is marked."""
    mask = 0
    for c in pattern_columns(pattern):
        mask |= 1 << c
    return mask
