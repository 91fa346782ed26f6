"""
Input validation functions for Recipe Vault.

This module provides validation functions for recipe payloads:
- Primitive type checks (text, integer, number)
- String validation (required fields, length)
- Full-update validation of a recipe's field set

All validation functions raise ValidationError on failure and name the
offending field.
"""

from decimal import Decimal
from typing import Any, Dict

from recipe_vault.services.exceptions import ValidationError

from .constants import (
    ERROR_INVALID_INTEGER,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_TEXT,
    ERROR_REQUIRED_FIELD,
    ERROR_TOO_MANY_DECIMALS,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    PRICE_SCALE,
)


def validate_required_string(value: Any, field_name: str = "Field") -> None:
    """
    Validate that a string field is not empty.

    Raises:
        ValidationError: If value is None, empty or whitespace only
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        raise ValidationError([f"{field_name}: {ERROR_REQUIRED_FIELD}"], field=field_name)


def validate_string_length(value: str, max_length: int, field_name: str = "Field") -> None:
    """
    Validate that a string doesn't exceed maximum length.

    Raises:
        ValidationError: If value is longer than max_length
    """
    if value and len(value) > max_length:
        raise ValidationError(
            [f"{field_name}: Must be {max_length} characters or less"], field=field_name
        )


def validate_text(value: Any, field_name: str = "Field") -> None:
    """Validate that a value is a string (empty strings allowed)."""
    if not isinstance(value, str):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_TEXT}"], field=field_name)


def validate_integer(value: Any, field_name: str = "Field") -> None:
    """
    Validate that a value is an integer.

    Booleans are rejected even though bool subclasses int. Floats with an
    integral value (4.0) are rejected as well.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_INTEGER}"], field=field_name)


def validate_number(value: Any, field_name: str = "Field") -> None:
    """Validate that a value is an int, float or Decimal (not a bool)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"], field=field_name)


def validate_scale(value: Any, places: int, field_name: str = "Field") -> None:
    """
    Validate that a number fits a column with the given number of decimal places.

    Values that would be rounded on storage are rejected. Floats are read
    through str(), so 1.555 counts as three places.
    """
    if value is None:
        return
    exponent = Decimal(str(value)).normalize().as_tuple().exponent
    if isinstance(exponent, int) and exponent < -places:
        raise ValidationError(
            [f"{field_name}: {ERROR_TOO_MANY_DECIMALS.format(places=places)}"], field=field_name
        )


def validate_full_update(fields: Dict[str, Any]) -> None:
    """
    Validate a full-replace update payload.

    Checks, in order: title is text, imageurl is text, servings is an
    integer, readyInMinutes is an integer, pricePerServing is a number with
    at most PRICE_SCALE decimal places.
    Stops at the first offending field.

    Args:
        fields: Mapping keyed by the external field names

    Raises:
        ValidationError: Naming the first offending field
    """
    if not isinstance(fields, dict):
        raise ValidationError(["Updates must be an object"])

    validate_text(fields.get("title"), "title")
    validate_required_string(fields["title"], "title")
    validate_string_length(fields["title"], MAX_TITLE_LENGTH, "title")

    validate_text(fields.get("imageurl"), "imageurl")
    validate_string_length(fields["imageurl"], MAX_URL_LENGTH, "imageurl")

    validate_integer(fields.get("servings"), "servings")
    validate_integer(fields.get("readyInMinutes"), "readyInMinutes")
    validate_number(fields.get("pricePerServing"), "pricePerServing")
    validate_scale(fields["pricePerServing"], PRICE_SCALE, "pricePerServing")
