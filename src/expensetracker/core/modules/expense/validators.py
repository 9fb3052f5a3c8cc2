import math
from decimal import Decimal

from expensetracker.errors import ValidationError


def validate_description(description: str) -> str:
    """Return the stripped description, raising ValidationError if nothing is left."""
    cleaned = description.strip() if isinstance(description, str) else ""
    if not cleaned:
        raise ValidationError("Description is required")
    return cleaned


def validate_amount(amount: object) -> float:
    """Return the amount as float.

    Must be an int, float or Decimal (not bool), finite and strictly positive.
    """
    if isinstance(amount, bool) or not isinstance(amount, int | float | Decimal):
        raise ValidationError("Amount must be a number")
    value = float(amount)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Amount must be a positive number")
    return value
