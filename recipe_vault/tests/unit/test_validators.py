"""Unit tests for input validators."""

from decimal import Decimal

import pytest

from recipe_vault.services.exceptions import ValidationError
from recipe_vault.utils.validators import (
    validate_full_update,
    validate_integer,
    validate_number,
    validate_required_string,
    validate_scale,
    validate_string_length,
    validate_text,
)


VALID = {
    "title": "Soup",
    "imageurl": "",
    "servings": 4,
    "readyInMinutes": 30,
    "pricePerServing": Decimal("1.50"),
}


class TestPrimitiveValidators:
    def test_required_string(self):
        validate_required_string("Soup", "title")
        for value in (None, "", "   "):
            with pytest.raises(ValidationError) as exc:
                validate_required_string(value, "title")
            assert exc.value.field == "title"

    def test_string_length(self):
        validate_string_length("abc", 3, "unit")
        with pytest.raises(ValidationError) as exc:
            validate_string_length("abcd", 3, "unit")
        assert "3 characters or less" in str(exc.value)

    def test_text(self):
        validate_text("", "imageurl")
        with pytest.raises(ValidationError):
            validate_text(None, "imageurl")

    def test_integer_rejects_bool_and_float(self):
        validate_integer(0, "servings")
        for value in (True, 4.0, "4", None):
            with pytest.raises(ValidationError):
                validate_integer(value, "servings")

    def test_number(self):
        for value in (1, 1.5, Decimal("2.25")):
            validate_number(value, "pricePerServing")
        for value in (False, "1.5", None):
            with pytest.raises(ValidationError):
                validate_number(value, "pricePerServing")


    def test_scale(self):
        for value in (None, 2, 1.5, 1.2345, Decimal("1.230000"), 1200):
            validate_scale(value, 4, "pricePerServing")
        for value in (1.23456, Decimal("0.00001")):
            with pytest.raises(ValidationError) as exc:
                validate_scale(value, 4, "pricePerServing")
            assert "at most 4 decimal places" in str(exc.value)


class TestValidateFullUpdate:
    def test_valid_payload(self):
        validate_full_update(dict(VALID))

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            validate_full_update(["Soup"])

    @pytest.mark.parametrize(
        "field, value",
        [
            ("title", None),
            ("title", ""),
            ("imageurl", None),
            ("servings", "4"),
            ("readyInMinutes", None),
            ("pricePerServing", "cheap"),
            ("pricePerServing", 1.23456),
        ],
    )
    def test_names_offending_field(self, field, value):
        fields = dict(VALID)
        fields[field] = value

        with pytest.raises(ValidationError) as exc:
            validate_full_update(fields)

        assert exc.value.field == field

    def test_reports_first_offending_field(self):
        fields = dict(VALID, servings="4", pricePerServing="cheap")

        with pytest.raises(ValidationError) as exc:
            validate_full_update(fields)

        assert exc.value.field == "servings"

    def test_overlong_title(self):
        with pytest.raises(ValidationError):
            validate_full_update(dict(VALID, title="x" * 501))
