"""Number formatting and rounding utilities"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_MONEY_RE = re.compile(r"^\d[\d,]*\.?\d*$")


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (builtin round() is banker's rounding)"""
    return int(math.floor(value + 0.5))


def format_fixed(value: float, digits: int) -> str:
    """Fixed-point text with ties rounded up, as JavaScript's toFixed does"""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_money(text: str) -> Optional[float]:
    """Parse '32,450.00' style amounts, returns None if text is not a money figure"""
    cleaned = text.strip()
    if not _MONEY_RE.match(cleaned):
        return None
    return float(cleaned.replace(",", ""))
