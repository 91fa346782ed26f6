"""
Constants for the Recipe Vault application.

This module defines system-wide constants including:
- Application metadata
- Column sizes and scales shared by the models and validators
- Error message templates
"""

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Recipe Vault"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "recipe_vault.db"

ENV_PREFIX = "RECIPE_VAULT_"

# ============================================================================
# Column Sizes
# ============================================================================

MAX_ID_LENGTH = 255
MAX_TITLE_LENGTH = 500
MAX_NAME_LENGTH = 255
MAX_URL_LENGTH = 2048
MAX_UNIT_LENGTH = 50

# Decimal places kept by the numeric columns
PRICE_SCALE = 4
AMOUNT_SCALE = 8

# ============================================================================
# Database Defaults
# ============================================================================

DEFAULT_DB_TIMEOUT = 30
DEFAULT_DB_POOL_SIZE = 5
DEFAULT_DB_POOL_RECYCLE = 3600

# ============================================================================
# Error Messages
# ============================================================================

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_TEXT = "Must be a string"
ERROR_INVALID_INTEGER = "Must be an integer"
ERROR_INVALID_NUMBER = "Must be a number"
ERROR_TOO_MANY_DECIMALS = "Must have at most {places} decimal places"
ERROR_EMPTY_PATCH = "No fields to update"
ERROR_UNKNOWN_FIELD = "Unknown field"
