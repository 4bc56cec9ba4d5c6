"""Seeded random streams and coordinate hashing.

A ``SeededRandom`` is built from a seed string and can branch into child
streams with ``seed_new``.  Children are derived from the *initial* seed
and the suffixes only, so a child never depends on how many values the
parent has already produced.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK32


def seed_to_int(seed: str) -> int:
    """Fold a seed string into a stable unsigned 32-bit integer."""
    h = 9
    for ch in str(seed):
        h = _imul(h ^ ord(ch), 9**9)
    return (h ^ (h >> 9)) & _MASK32


def fast_hash(x: int, y: int, seed_int: int) -> int:
    """Deterministic unsigned 32-bit hash of an integer coordinate pair.

    Cheap enough to call once per screen cell; used to decide whether a
    hyperspace cell holds a star without building a full random stream.
    """
    h = seed_int & _MASK32
    x = int(x) & _MASK32
    y = int(y) & _MASK32

    h = _imul(h ^ x, 0xCC9E2D51)
    h = ((h << 15) | (h >> 17)) & _MASK32
    h = _imul(h, 0x1B873593)

    h = _imul(h ^ y, 0xCC9E2D51)
    h = ((h << 15) | (h >> 17)) & _MASK32
    h = _imul(h, 0x1B873593)

    # Final avalanche
    h ^= h >> 16
    h = _imul(h, 0x85EBCA6B)
    h ^= h >> 13
    return h & _MASK32


class SeededRandom:
    """Reproducible random stream keyed by a seed string."""

    def __init__(self, seed: str) -> None:
        self._initial_seed = str(seed)
        self._rng = random.Random(self._initial_seed)

    def __repr__(self) -> str:
        return f"SeededRandom({self._initial_seed!r})"

    @property
    def initial_seed(self) -> str:
        return self._initial_seed

    def get_initial_seed(self) -> str:
        return self._initial_seed

    def seed_new(self, *suffixes: object) -> SeededRandom:
        """Branch an independent child stream.

        Same parent seed and same suffixes always give the same child.
        """
        parts = [self._initial_seed, *(str(s) for s in suffixes)]
        return SeededRandom(":".join(parts))

    def random(self, lo: float = 0.0, hi: float = 1.0) -> float:
        """Float in [lo, hi)."""
        return lo + self._rng.random() * (hi - lo)

    def random_int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both ends inclusive."""
        return self._rng.randint(int(lo), int(hi))

    def choice(self, seq: Sequence[T]) -> T | None:
        """Uniform pick from ``seq``; ``None`` for an empty sequence."""
        if not seq:
            return None
        return seq[self.random_int(0, len(seq) - 1)]
