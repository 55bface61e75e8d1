"""
Determinism helpers.

Goals:
- Provide a seeded RNG whose stream is reproducible bit-for-bit on every platform
  (world generation depends on the exact sequence).
- Provide a coordinate hash for noise that does not consume the RNG stream.
- Resolve a user-supplied seed, falling back to a fresh one for bad input.

Non-goals:
- Cryptographic security
"""

from __future__ import annotations

import logging
import math
import secrets
from typing import Any

logger = logging.getLogger(__name__)

_MASK32 = 0xFFFFFFFF
_FRESH_SEED_LIMIT = 1_000_000_000


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK32


class Mulberry32:
    """
    Small 32-bit state PRNG.

    Every operation is integer arithmetic masked to 32 bits, so the float stream for a
    given seed is identical regardless of platform or Python build.
    """

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = int(seed) & _MASK32

    def next_u32(self) -> int:
        self.state = (self.state + 0x6D2B79F5) & _MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return (t ^ (t >> 14)) & _MASK32

    def random(self) -> float:
        """Next float in [0, 1)."""
        return self.next_u32() / 4294967296.0

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()


def hash_noise(x: int, y: int) -> float:
    """
    Deterministic value noise in [0, 1) for an integer coordinate.

    Pure function of (x, y); never touches an RNG.
    """
    h = ((int(x) * 73856093) ^ (int(y) * 19349663)) & _MASK32
    h = _imul(h ^ (h >> 16), 0x45D9F3B)
    h = _imul(h ^ (h >> 16), 0x45D9F3B)
    h ^= h >> 16
    return (h & _MASK32) / 4294967296.0


def fresh_seed() -> int:
    """A new seed from OS entropy (only used at the input boundary)."""
    return secrets.randbelow(_FRESH_SEED_LIMIT)


def _coerce_seed(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            return None
        return int(raw)
    if isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw
        text = text.strip()
        if not text:
            return None
        try:
            return int(text, 10)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
        return _coerce_seed(value)
    return None


def resolve_seed(raw: Any = None) -> int:
    """
    Turn an optional external seed parameter into a usable integer seed.

    Absent, non-numeric and non-finite input is not an error: a fresh seed is generated
    and reported at INFO level so the run can still be reproduced.
    """
    seed = _coerce_seed(raw)
    if seed is None:
        seed = fresh_seed()
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            logger.info("No seed supplied; using fresh seed %d", seed)
        else:
            logger.info("Ignoring unusable seed %r; using fresh seed %d", raw, seed)
    return seed
