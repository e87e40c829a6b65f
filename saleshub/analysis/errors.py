"""
Caller contract violations for the deterministic sales core
"""

import math
from typing import Any, Optional


class InvalidArgument(ValueError):
    """Argument of the wrong type passed to a scoring function"""
    pass


def optional_text(value: Any, name: str) -> Optional[str]:
    """Return value if it is None or a string, otherwise raise InvalidArgument"""
    if value is None or isinstance(value, str):
        return value
    raise InvalidArgument(f"{name} must be a string, got {type(value).__name__}")


def optional_number(value: Any, name: str) -> Optional[float]:
    """Return value if it is None or a real number (bool excluded)"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"{name} must be a number, got {type(value).__name__}")
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf like JS Math.round"""
    return math.floor(value + 0.5)
