"""Arbitrary-precision money values carried as decimal strings."""

import logging
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Parse a decimal string (or number). Absent or unparseable values are 0."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, bool):
        return ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.debug("Unparseable decimal value %r, treating as 0", value)
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def is_nonzero(value) -> bool:
    return to_decimal(value) != ZERO


def sum_decimal_strings(values) -> str:
    """Sum decimal strings, returning a plain (non-scientific) string."""
    total = sum((to_decimal(v) for v in values), ZERO)
    return format_decimal(total)


def format_decimal(value: Decimal) -> str:
    return format(value, "f")
