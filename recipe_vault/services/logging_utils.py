"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across import, patch and delete paths.

Usage:
    from recipe_vault.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="import_recipe",
        outcome="success",
        recipe_id="42",
        user_id="u1",
    )
"""

import logging
from typing import Any


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance with the 'recipe_vault.services' prefix.

    Example:
        >>> logger = get_service_logger(__name__)
        >>> logger.name
        'recipe_vault.services.import_service'
    """
    # Extract just the module name if full path is provided
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"recipe_vault.services.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "import_recipe", "link_user_to_recipe")
        outcome: Outcome description (e.g., "inserted", "already_linked", "rolled_back")
        level: Log level (default: INFO). Use DEBUG for per-row diagnostics.
        **context: Additional context fields (recipe_id, ingredient_id, error, ...)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)


def log_rollback(
    logger: logging.Logger,
    operation: str,
    error: Exception,
    **context: Any,
) -> None:
    """
    Log a unit of work that was rolled back after a storage error.

    Logged at WARNING with outcome "rolled_back" and the error text in the
    'error' context field.
    """
    log_operation(
        logger,
        operation=operation,
        outcome="rolled_back",
        level=logging.WARNING,
        error=str(error),
        **context,
    )
