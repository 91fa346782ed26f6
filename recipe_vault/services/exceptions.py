"""Service layer exception classes for Recipe Vault.

This module defines all custom exceptions used by the service layer to provide
consistent error handling for the HTTP layer that sits on top of it.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    ├── UnsupportedFieldType
    ├── RecipeNotFound
    ├── ConstraintViolation
    └── TransactionAbort
"""

from typing import Any, List, Optional


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class ValidationError(ServiceError):
    """Raised when input data fails validation before reaching storage.

    Args:
        errors: List of error messages
        field: Name of the first offending field, when known

    Example:
        >>> raise ValidationError(["servings: Must be an integer"], field="servings")
        ValidationError: Validation failed: servings: Must be an integer
    """

    def __init__(self, errors: List[str], field: Optional[str] = None):
        self.errors = errors
        self.field = field
        error_msg = "; ".join(errors)
        super().__init__(f"Validation failed: {error_msg}")


class UnsupportedFieldType(ServiceError):
    """Raised when a patch value's type cannot be mapped to the field's storage type.

    Args:
        field: Field name being patched
        value: The rejected value
        expected: Name of the type the field accepts
    """

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(
            f"Unsupported data type for field {field}: "
            f"got {type(value).__name__}, expected {expected}"
        )


class RecipeNotFound(ServiceError):
    """Raised when a write targets a recipe that does not exist.

    Args:
        recipe_id: The recipe identity that was not found
    """

    def __init__(self, recipe_id: str):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with ID {recipe_id} not found")


class ConstraintViolation(ServiceError):
    """Raised when the store rejects a write (duplicate key or missing referenced row).

    The unit of work has already been rolled back when this is raised.
    """

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Constraint violation: {message}")


class TransactionAbort(ServiceError):
    """Raised when a unit of work fails and is rolled back.

    Args:
        operation: Name of the aborted operation
        original_error: The storage-layer error that caused the abort
    """

    def __init__(self, operation: str, original_error: Exception = None):
        self.operation = operation
        self.original_error = original_error
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"Transaction aborted during {operation}{detail}")
