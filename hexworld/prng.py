from __future__ import annotations

"""Seeded linear-congruential generator shared by every generation stage."""

import math
from typing import List, MutableSequence, TypeVar

T = TypeVar("T")

_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


class SeededRandom:
    """
    Deterministic pseudo-random source driven by an integer seed.

    Two instances built from the same seed return the same sequence for the
    same sequence of calls. This is the only randomness the world and river
    generators are allowed to consume.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) % _MODULUS

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def range(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        return min_value + self.next() * (max_value - min_value)

    def int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both ends inclusive."""
        return math.floor(min_value + self.next() * (max_value + 1 - min_value))

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(items) - 1, 0, -1):
            j = self.int(0, i)
            items[i], items[j] = items[j], items[i]

    def shuffled(self, items: List[T]) -> List[T]:
        copy = list(items)
        self.shuffle(copy)
        return copy


def derive_seed(seed: int, tag: int) -> int:
    """
    Derive a child seed for an independent stream (e.g. river sources) from the
    world seed. Uses the same mixing constants as the generator itself so the
    result stays inside the modulus.
    """
    return (int(seed) * _MULTIPLIER + tag * _INCREMENT) % _MODULUS


__all__ = ["SeededRandom", "derive_seed"]
