"""
Patch Service - partial updates to a recipe row.

Only the fields present in the update mapping are written. Every field name
is looked up in PATCHABLE_FIELDS before anything else happens; the entry
supplies the mapped ORM attribute and a typed coercer, so caller-supplied
names never reach the statement.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from recipe_vault.models import Recipe
from recipe_vault.services.database import session_scope
from recipe_vault.services.exceptions import (
    ConstraintViolation,
    RecipeNotFound,
    TransactionAbort,
    UnsupportedFieldType,
    ValidationError,
)
from recipe_vault.services.logging_utils import get_service_logger, log_operation, log_rollback
from recipe_vault.utils.constants import ERROR_EMPTY_PATCH, ERROR_UNKNOWN_FIELD, PRICE_SCALE
from recipe_vault.utils.validators import validate_scale

logger = get_service_logger(__name__)


class FieldType(str, Enum):
    """Storage types a patch value can be coerced to."""

    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"


def _coerce_text(field_name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise UnsupportedFieldType(field_name, value, FieldType.TEXT.value)
    return value


def _coerce_integer(field_name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedFieldType(field_name, value, FieldType.INTEGER.value)
    return value


def _coerce_decimal(field_name: str, value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise UnsupportedFieldType(field_name, value, FieldType.DECIMAL.value)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


_COERCERS: Dict[FieldType, Callable[[str, Any], Any]] = {
    FieldType.TEXT: _coerce_text,
    FieldType.INTEGER: _coerce_integer,
    FieldType.DECIMAL: _coerce_decimal,
}


@dataclass(frozen=True)
class PatchableField:
    """A recipe field that may be patched.

    Attributes:
        attribute: ORM attribute on Recipe written by this field
        field_type: Declared storage type of the value
        scale: Decimal places the column keeps, for DECIMAL fields
    """

    attribute: str
    field_type: FieldType
    scale: Optional[int] = None

    def coerce(self, field_name: str, value: Any) -> Any:
        value = _COERCERS[self.field_type](field_name, value)
        if self.scale is not None:
            validate_scale(value, self.scale, field_name)
        return value


PATCHABLE_FIELDS: Dict[str, PatchableField] = {
    "title": PatchableField("title", FieldType.TEXT),
    "imageurl": PatchableField("image_url", FieldType.TEXT),
    "servings": PatchableField("servings", FieldType.INTEGER),
    "readyInMinutes": PatchableField("ready_in_minutes", FieldType.INTEGER),
    "pricePerServing": PatchableField("price_per_serving", FieldType.DECIMAL, PRICE_SCALE),
}


def build_patch_values(updates: Mapping[str, Any]) -> Dict[Any, Any]:
    """
    Validate a patch mapping and translate it into column → value pairs.

    Args:
        updates: Field name → new value, only the fields to change

    Returns:
        Dict keyed by Recipe column attributes, ready for an UPDATE

    Raises:
        ValidationError: If the mapping is empty or names an unknown field
            or a decimal value has more places than the column keeps
        UnsupportedFieldType: If a value does not fit the field's declared type
    """
    if not isinstance(updates, Mapping):
        raise ValidationError(["Updates must be an object"])
    if not updates:
        raise ValidationError([ERROR_EMPTY_PATCH])

    unknown = [name for name in updates if name not in PATCHABLE_FIELDS]
    if unknown:
        raise ValidationError(
            [f"{name}: {ERROR_UNKNOWN_FIELD}" for name in unknown], field=unknown[0]
        )

    values = {}
    for name, value in updates.items():
        spec = PATCHABLE_FIELDS[name]
        values[getattr(Recipe, spec.attribute)] = spec.coerce(name, value)
    return values


async def patch_recipe(recipe_id: str, updates: Mapping[str, Any]) -> None:
    """
    Apply a partial update to an existing recipe.

    Fields absent from the mapping keep their stored values. Validation runs
    before a connection is borrowed, so a rejected patch performs no write.

    Args:
        recipe_id: Recipe identity
        updates: Field name → new value

    Raises:
        ValidationError: If the mapping is empty or names an unknown field
            or a decimal value has more places than the column keeps
        UnsupportedFieldType: If a value does not fit the field's declared type
        RecipeNotFound: If the recipe doesn't exist
        ConstraintViolation: If the store rejects the new values
        TransactionAbort: If the database operation fails
    """
    values = build_patch_values(updates)
    recipe_id = str(recipe_id)

    try:
        async with session_scope() as session:
            result = await session.execute(
                update(Recipe).where(Recipe.id == recipe_id).values(values)
            )
            if result.rowcount == 0:
                raise RecipeNotFound(recipe_id)

    except RecipeNotFound:
        raise
    except IntegrityError as e:
        log_rollback(logger, "patch_recipe", e, recipe_id=recipe_id)
        raise ConstraintViolation(f"Failed to patch recipe {recipe_id}", e)
    except SQLAlchemyError as e:
        log_rollback(logger, "patch_recipe", e, recipe_id=recipe_id)
        raise TransactionAbort("patch_recipe", e)

    log_operation(
        logger,
        operation="patch_recipe",
        outcome="success",
        recipe_id=recipe_id,
        fields=sorted(updates),
    )
