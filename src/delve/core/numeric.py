from __future__ import annotations

import math


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going towards positive infinity.

    Python's built-in ``round`` uses banker's rounding, which would move prices
    by one on exact halves.
    """
    return int(math.floor(value + 0.5))


__all__ = ["clamp", "round_half_up"]
