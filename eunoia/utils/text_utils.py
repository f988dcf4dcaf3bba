from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


def truncate(text: Optional[str], max_len: int) -> Optional[str]:
    """Cut text to max_len characters, marking the cut with '...'"""
    if text is None:
        return None
    return text if len(text) <= max_len else text[:max_len] + "..."


def round_half_up(value: float, digits: int = 0):
    # round() is banker's rounding; scores and averages round .5 away from zero
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def is_blank(text: Optional[str]) -> bool:
    return text is None or not str(text).strip()
