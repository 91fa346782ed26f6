"""Unit tests for the service exception hierarchy."""

import pytest

from recipe_vault.services.exceptions import (
    ConstraintViolation,
    RecipeNotFound,
    ServiceError,
    TransactionAbort,
    UnsupportedFieldType,
    ValidationError,
)


@pytest.mark.parametrize(
    "error",
    [
        ValidationError(["title: Must be a string"], field="title"),
        UnsupportedFieldType("servings", "4", "integer"),
        RecipeNotFound("42"),
        ConstraintViolation("duplicate"),
        TransactionAbort("import_recipe"),
    ],
)
def test_all_errors_are_service_errors(error):
    assert isinstance(error, ServiceError)


def test_validation_error_joins_messages():
    error = ValidationError(["a: bad", "b: worse"], field="a")
    assert str(error) == "Validation failed: a: bad; b: worse"
    assert error.errors == ["a: bad", "b: worse"]
    assert error.field == "a"


def test_unsupported_field_type_message():
    error = UnsupportedFieldType("servings", "4", "integer")
    assert "servings" in str(error)
    assert "got str, expected integer" in str(error)
    assert error.value == "4"


def test_transaction_abort_keeps_cause():
    cause = RuntimeError("disk I/O error")
    error = TransactionAbort("delete_recipe", cause)
    assert error.original_error is cause
    assert str(error) == "Transaction aborted during delete_recipe: disk I/O error"


def test_constraint_violation_message():
    error = ConstraintViolation("Failed to import recipe 42")
    assert str(error) == "Constraint violation: Failed to import recipe 42"
    assert error.original_error is None
