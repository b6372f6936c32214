import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the dashboards do (0.5 always rounds up, no banker's rounding)."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded
