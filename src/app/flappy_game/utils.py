"""Utility helpers used across the game stack."""
from __future__ import annotations

import math


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp a number to [lo, hi]."""
    return max(lo, min(hi, v))


def parse_bool(s: str | None, default: bool = False) -> bool:
    if s is None:
        return default
    return s.strip().lower() in {"1", "true", "yes", "on"}


def round_half_up(x: float) -> int:
    """Round like the browser's Math.round: halves go toward +inf."""
    return int(math.floor(x + 0.5))
