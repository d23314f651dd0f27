"""
shuffle.py — Seeded Sequence Generator
======================================
Reproducible permutations for quiz and exam assembly.

A 32-bit linear congruential generator (Numerical Recipes constants) drives
a Fisher–Yates shuffle.  The same seed and the same input always produce the
same order, in every process and on every platform, so a quiz can be
regenerated for grading instead of being stored.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER: int = 1664525
LCG_INCREMENT:  int = 1013904223
_MODULUS:       int = 2 ** 32
_MAX_STATE:     int = 0xFFFFFFFF


class SeededSequence:
    """Deterministic unit-interval draws keyed by an integer seed."""

    def __init__(self, seed: int) -> None:
        self.state = seed & _MAX_STATE

    def draw(self) -> float:
        """Advance the state and return a value in ``[0, 1]``."""
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) % _MODULUS
        return self.state / _MAX_STATE


def deterministic_shuffle(items: Iterable[T], seed: int) -> list[T]:
    """Return a new list holding *items* permuted by *seed*; the input is untouched."""
    out = list(items)
    rng = SeededSequence(seed)
    for i in range(len(out) - 1, 0, -1):
        # state == 2**32-1 yields exactly 1.0
        j = min(int(rng.draw() * (i + 1)), i)
        out[i], out[j] = out[j], out[i]
    return out
