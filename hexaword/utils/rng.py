"""Seeded pseudo-random source shared by every layout decision.

The generator is Mulberry32 keyed by a 31-bit rolling hash of a string seed.
All arithmetic is done modulo 2**32, which keeps the output bit-identical to
the JavaScript client that renders the same puzzle from the same seed.
"""

from __future__ import annotations

from typing import List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_DIVISOR = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def _utf16_units(text: str) -> List[int]:
    data = text.encode("utf-16-le")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def hash_string(text: str) -> int:
    """Order-dependent ``h * 31 + c`` hash folded to a non-negative 32-bit int."""

    value = 0
    for unit in _utf16_units(text):
        value = (value * 31 + unit) & _MASK
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


class SeededRNG:
    """Deterministic Mulberry32 stream."""

    def __init__(self, seed: str) -> None:
        self.seed = seed
        self._state = hash_string(seed) & _MASK

    def next(self) -> float:
        """Return a float in ``[0, 1)``."""

        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK) ^ t
        return ((t ^ (t >> 14)) & _MASK) / _DIVISOR

    def next_int(self, minimum: int, maximum: int) -> int:
        """Return an integer in ``[minimum, maximum]`` inclusive."""

        if minimum > maximum:
            raise ValueError(f"Invalid range: min ({minimum}) > max ({maximum})")
        return int(self.next() * (maximum - minimum + 1)) + minimum

    def pick(self, items: Sequence[T]) -> Optional[T]:
        if not items:
            return None
        return items[int(self.next() * len(items))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place; returns the same sequence."""

        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.next() < probability


def create_rng(seed: str) -> SeededRNG:
    return SeededRNG(seed)


def seeded_tiebreak(seed: str, word: str) -> int:
    """Stable pseudo-random rank for ``word`` under ``seed``."""

    return create_rng(f"{seed}|{word}").next_int(0, 0x7FFFFFFF)


def seeded_uuid(seed: str, counter: int = 0) -> str:
    """Deterministic UUID-shaped identifier derived from ``seed``."""

    rng = create_rng(f"{seed}_{counter}")
    digits = []
    for i in range(32):
        if i in (8, 12, 16, 20):
            digits.append("-")
        digits.append(format(int(rng.next() * 16), "x"))
    return "".join(digits)
