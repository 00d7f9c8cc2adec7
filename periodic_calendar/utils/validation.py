"""
Validation utilities
"""
import re
from decimal import Decimal, InvalidOperation


def normalize_decimal_input(value: str) -> str:
    """
    Normalize an amount typed by hand: comma becomes a dot

    Example:
        >>> normalize_decimal_input("100,50")
        "100.50"
    """
    return value.strip().replace(",", ".")


def validate_decimal_amount(value: str, max_decimal_places: int = 2) -> tuple[bool, str | None]:
    """
    Check an amount string

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_amount("100.50")
        (True, None)
        >>> validate_decimal_amount("100.505")
        (False, "At most 2 decimal places")
    """
    normalized = normalize_decimal_input(value)

    try:
        decimal_value = Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "Invalid amount"
    if not decimal_value.is_finite():
        return False, "Invalid amount"

    pattern = rf"^-?\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"At most {max_decimal_places} decimal places"

    return True, None


def validate_and_normalize_amount(value: str | None, max_decimal_places: int = 2) -> str | None:
    """
    Validate and normalize an optional amount; blank input means no amount

    Raises:
        ValueError: if the amount is malformed
    """
    if value is None or not value.strip():
        return None

    is_valid, error = validate_decimal_amount(value, max_decimal_places)
    if not is_valid:
        raise ValueError(error)

    return normalize_decimal_input(value)
