from __future__ import annotations

import logging
from typing import Sequence, Tuple, TypeVar

from ..errors import EmptyChoiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
ZERO_SEED_REPLACEMENT = 0x1234567


def to_u32(value: int) -> int:
    """Reduce any Python int to its unsigned 32-bit two's complement pattern."""
    return value & MASK32


def xorshift32(state: int) -> Tuple[int, int]:
    """Advance a xorshift32 state.

    Pure transition: returns ``(next_state, output)``. The output is the new
    state itself, read as an unsigned 32-bit integer.
    """
    x = state & MASK32
    x ^= (x << 13) & MASK32
    x ^= x >> 17
    x ^= (x << 5) & MASK32
    return x, x


class Rng:
    """Deterministic 32-bit generator handle.

    A thin stateful wrapper over :func:`xorshift32`. Each subsystem call should
    build its own instance from a freshly derived seed; instances are never
    shared across subsystems.

    Usage:
        rng = Rng(monster_spawn_seed(seed))
        roll = rng.next_int(0, 100)
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        state = to_u32(int(seed))
        if state == 0:
            # Zero is the fixed point of xorshift.
            state = ZERO_SEED_REPLACEMENT
        self._state = state

    @property
    def state(self) -> int:
        return self._state

    def next_u32(self) -> int:
        self._state, out = xorshift32(self._state)
        return out

    def next_float(self) -> float:
        """Return a float in the closed range [0, 1]."""
        return self.next_u32() / MASK32

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int:
        """Return an int in ``[min_inclusive, max_exclusive)``.

        A degenerate range returns ``min_inclusive`` without consuming a draw.
        Modulo bias is accepted.
        """
        span = max_exclusive - min_inclusive
        if span <= 0:
            return min_inclusive
        return min_inclusive + (self.next_u32() % span)

    def pick_one(self, items: Sequence[T]) -> T:
        if not items:
            raise EmptyChoiceError("Rng.pick_one() received an empty sequence")
        return items[self.next_int(0, len(items))]

    def fork(self, salt: int) -> "Rng":
        """Return an independent generator seeded from the current state and a salt."""
        return Rng(self._state ^ salt)

    def __repr__(self) -> str:
        return f"Rng(state=0x{self._state:08x})"


__all__ = ["Rng", "xorshift32", "to_u32", "MASK32", "ZERO_SEED_REPLACEMENT"]
