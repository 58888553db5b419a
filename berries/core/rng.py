"""Random source helpers.

Randomness is passed around as a zero-argument callable returning uniform
floats in [0, 1), e.g. ``random.Random(42).random``.
"""

from __future__ import annotations
import random
from typing import Callable, List, Optional, TypeVar

T = TypeVar("T")

Rng = Callable[[], float]


def make_rng(rng: Optional[Rng] = None, seed: Optional[int] = None) -> Rng:
    """
    Resolve a random source.

    An explicit rng wins; otherwise a private random.Random(seed) is created,
    so the module-level random state is never touched.
    """
    if rng is not None:
        return rng
    return random.Random(seed).random


def rand_int(rng: Rng, max_exclusive: int) -> int:
    """Uniform integer in [0, max_exclusive)."""
    x = rng()
    # clamp misbehaving sources into [0, 1)
    if x <= 0:
        x = 0.0
    elif x >= 1:
        x = 0.999999999999
    return int(x * max_exclusive)


def shuffle(items: List[T], rng: Rng) -> None:
    """Fisher-Yates shuffle in place, drawing from rng."""
    for i in range(len(items) - 1, 0, -1):
        j = rand_int(rng, i + 1)
        items[i], items[j] = items[j], items[i]
