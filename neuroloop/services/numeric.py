import math


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Integer rounding with .5 going up, as the mobile client rounds."""
    return int(math.floor(value + 0.5))


def round1(value: float) -> float:
    """Round to one decimal place (.05 goes up)."""
    return math.floor(value * 10 + 0.5) / 10
