"""
Seed arithmetic shared by every generator.

All values are signed 64-bit integers. Sub-seeds are derived with an explicit
FNV-1a 64-bit string hash, never with Python's built-in ``hash()`` (which is
randomized per process for strings).
"""

from __future__ import annotations

import random
from dataclasses import dataclass

_MASK_64 = 0xFFFFFFFFFFFFFFFF
_SIGN_BIT = 0x8000000000000000

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3


def wrap64(value: int) -> int:
    """Reduce an arbitrary integer to the signed 64-bit range (two's complement)."""
    value &= _MASK_64
    return value - (1 << 64) if value & _SIGN_BIT else value


def fnv1a_64(text: str) -> int:
    """
    FNV-1a 64-bit hash of the UTF-8 encoding of text, as a signed 64-bit int.

    Args:
        text: Label to hash.

    Returns:
        int: Signed 64-bit hash value.
    """
    h = FNV_OFFSET_BASIS
    for byte in text.encode('utf-8'):
        h ^= byte
        h = (h * FNV_PRIME) & _MASK_64
    return wrap64(h)


def derive_seed(seed: int, label: str) -> int:
    """Derive the sub-seed for label: ``wrap64(seed + fnv1a_64(label))``."""
    return wrap64(seed + fnv1a_64(label))


class SeededRandom(random.Random):
    """
    A local pseudo-random generator bound to one seed.

    Seeded with the unsigned image of the seed so that ``s`` and ``-s`` give
    different streams (``random.Random`` would otherwise use ``abs(seed)``).
    """

    def __init__(self, seed: int):
        self.initial_seed = wrap64(seed)
        super().__init__(self.initial_seed & _MASK_64)

    def next_long(self) -> int:
        return wrap64(self.getrandbits(64))

    def next_int(self, bound: int) -> int:
        """Uniform int in ``[0, bound)``."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self.randrange(bound)

    def next_float(self) -> float:
        return self.random()

    def next_double(self) -> float:
        return self.random()

    def next_bool(self) -> bool:
        return bool(self.getrandbits(1))

    def next_in_range(self, low: int, high: int) -> int:
        """Int in ``[low, high)``, or ``low`` when the range is empty."""
        if high > low:
            return self.next_int(high - low) + low
        return low


@dataclass(frozen=True)
class SeedContext:
    """
    Immutable seed value with named sub-seed derivation.

    ``derive`` is a pure function of (seed, label): deriving the same label
    twice always gives the same context, independent of call order.
    """

    seed: int

    def __post_init__(self):
        object.__setattr__(self, 'seed', wrap64(self.seed))

    def derive(self, label: str) -> SeedContext:
        return SeedContext(derive_seed(self.seed, label))

    def rng(self) -> SeededRandom:
        """Return a fresh generator; every call restarts the same stream."""
        return SeededRandom(self.seed)

    def materialize(self, count: int) -> list[int]:
        """Draw ``count`` seeds up front from a fresh generator."""
        rng = self.rng()
        return [rng.next_long() for _ in range(count)]

    def __int__(self) -> int:
        return self.seed
