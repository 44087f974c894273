"""Parsing helpers for numeric request values that end up in INTEGER columns."""
from decimal import Decimal, InvalidOperation
from typing import Optional

# Largest value a PostgreSQL INTEGER column holds
INTEGER_MAX = 2_147_483_647


def to_db_id(value) -> Optional[int]:
    """
    Parse a row id from a request value.

    Returns None for booleans, non-integers and ids outside 1..INTEGER_MAX,
    none of which can match a row.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    if number < 1 or number > INTEGER_MAX:
        return None
    return number


def to_positive_int(value) -> Optional[int]:
    """
    Parse a count, truncating fractions ('3' -> 3, 2.7 -> 2).

    Returns None for anything non-numeric, non-positive or above INTEGER_MAX.
    The magnitude is checked on the Decimal exponent before any int
    conversion, so '1e2000000' is rejected without building the number.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number.adjusted() > 9:
        return None
    count = int(number)
    if count < 1 or count > INTEGER_MAX:
        return None
    return count
