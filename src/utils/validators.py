import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Tuple

logger = logging.getLogger(__name__)

YEAR_MONTH_PATTERN = re.compile(r'^(\d{4})-(\d{2})$')


def parse_year_month(year_month: str) -> Tuple[int, int]:
    """Split a YYYY-MM string into (year, month)"""
    match = YEAR_MONTH_PATTERN.match(str(year_month).strip())
    if not match:
        raise ValueError(f"Invalid reference month '{year_month}', expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise ValueError(f"Invalid reference month '{year_month}'")
    return year, month


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Convert form values to Decimal; blank means zero"""
    if value is None or (isinstance(value, str) and value.strip() == ''):
        return Decimal('0')
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value).strip().replace(',', '.'))
    except InvalidOperation:
        raise ValueError(f"{field_name} must be a number, got '{value}'")
    if not result.is_finite():
        raise ValueError(f"{field_name} must be finite")
    return result


def to_int(value: Any, field_name: str = "value") -> int:
    """Whole-number form values (days, dependents); fractions are rejected"""
    result = to_decimal(value, field_name)
    if result != result.to_integral_value():
        raise ValueError(f"{field_name} must be a whole number, got '{value}'")
    return int(result)


def non_negative(value, field_name: str = "value"):
    """Clamp negative quantities to zero"""
    if value < 0:
        logger.warning(f"Negative {field_name} ({value}) treated as 0")
        return type(value)(0)
    return value
