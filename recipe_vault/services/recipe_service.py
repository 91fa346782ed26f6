"""
Recipe Service - Business logic for recipe rows.

This service provides:
- Recipe upsert used by the import path (one INSERT ... ON CONFLICT DO UPDATE)
- Full-replace update with field validation
- Cascading delete of a recipe and every row that references it
- Read accessors (missing rows come back as None or an empty list)
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_vault.models import Recipe, RecipeIngredient, UserRecipe
from recipe_vault.services.database import dialect_insert, session_scope
from recipe_vault.services.dto import RecipePayload
from recipe_vault.services.exceptions import (
    ConstraintViolation,
    RecipeNotFound,
    TransactionAbort,
    ValidationError,
)
from recipe_vault.services.logging_utils import get_service_logger, log_operation, log_rollback
from recipe_vault.utils.validators import validate_full_update

logger = get_service_logger(__name__)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _recipe_values(fields: Dict[str, Any]) -> Dict[Any, Any]:
    """Map a full field set keyed by external names onto Recipe attributes."""
    return {
        Recipe.title: fields["title"],
        Recipe.image_url: fields["imageurl"] or "",
        Recipe.servings: fields["servings"],
        Recipe.ready_in_minutes: fields["readyInMinutes"],
        Recipe.price_per_serving: _to_decimal(fields["pricePerServing"]),
    }


def _apply_recipe_fields(recipe: Recipe, fields: Dict[str, Any]) -> None:
    """Copy every recipe column from a full field set keyed by external names."""
    for attribute, value in _recipe_values(fields).items():
        setattr(recipe, attribute.key, value)


# ============================================================================
# Upsert (import path)
# ============================================================================


async def upsert_recipe_details(
    recipe: RecipePayload,
    *,
    session: Optional[AsyncSession] = None,
) -> str:
    """
    Insert the recipe row, or update every column if it already exists.

    The write is a single INSERT ... ON CONFLICT (id) DO UPDATE, so two
    imports of the same recipe for different users both succeed. Re-running
    with identical input converges to the same stored row.

    Transaction boundary: Joins the caller's unit of work when a session is
    passed, otherwise runs in its own. Storage errors propagate unmodified.

    Args:
        recipe: Recipe payload
        session: Optional database session

    Returns:
        "inserted" or "updated", the branch observed before the write
    """
    if session is not None:
        return await _upsert_recipe_details_impl(recipe, session)
    async with session_scope() as session:
        return await _upsert_recipe_details_impl(recipe, session)


async def _upsert_recipe_details_impl(recipe: RecipePayload, session: AsyncSession) -> str:
    recipe_id = str(recipe.id)

    # Diagnostic only; the write below does not depend on it
    existing = await session.scalar(select(Recipe.id).where(Recipe.id == recipe_id))
    outcome = "updated" if existing is not None else "inserted"

    table = Recipe.__table__
    row = {
        attribute.property.columns[0].key: value
        for attribute, value in _recipe_values(recipe.update_fields()).items()
    }
    stmt = dialect_insert(session, table).values(id=recipe_id, **row)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.id],
        set_={key: stmt.excluded[key] for key in row},
    )
    await session.execute(stmt)

    log_operation(logger, operation="upsert_recipe_details", outcome=outcome, recipe_id=recipe_id)
    return outcome


# ============================================================================
# Full-replace update
# ============================================================================


async def update_recipe(recipe_id: str, fields: Dict[str, Any]) -> Recipe:
    """
    Replace every column of an existing recipe.

    Unlike patch_recipe(), all five fields are required.

    Args:
        recipe_id: Recipe identity
        fields: title, imageurl, servings, readyInMinutes, pricePerServing

    Returns:
        Updated Recipe instance

    Raises:
        ValidationError: If a field is missing or has the wrong type
        RecipeNotFound: If the recipe doesn't exist
        ConstraintViolation: If the store rejects the new values
        TransactionAbort: If the database operation fails
    """
    validate_full_update(fields)
    recipe_id = str(recipe_id)

    try:
        async with session_scope() as session:
            recipe = await session.get(Recipe, recipe_id)
            if recipe is None:
                raise RecipeNotFound(recipe_id)

            _apply_recipe_fields(recipe, fields)
            await session.flush()

        log_operation(logger, operation="update_recipe", outcome="success", recipe_id=recipe_id)
        return recipe

    except (RecipeNotFound, ValidationError):
        raise
    except IntegrityError as e:
        log_rollback(logger, "update_recipe", e, recipe_id=recipe_id)
        raise ConstraintViolation(f"Failed to update recipe {recipe_id}", e)
    except SQLAlchemyError as e:
        log_rollback(logger, "update_recipe", e, recipe_id=recipe_id)
        raise TransactionAbort("update_recipe", e)


# ============================================================================
# Cascade delete
# ============================================================================


async def delete_recipe(recipe_id: str) -> bool:
    """
    Delete a recipe and every association row that references it.

    In one unit of work, in this order: recipe_ingredients rows, user_recipes
    rows, then the recipes row. Ingredient rows are never touched.

    Args:
        recipe_id: Recipe identity

    Returns:
        True if the recipe row was deleted, False if it did not exist

    Raises:
        ConstraintViolation: If the store rejects a delete
        TransactionAbort: If any step fails (everything is rolled back)
    """
    recipe_id = str(recipe_id)

    try:
        async with session_scope() as session:
            await session.execute(
                delete(RecipeIngredient).where(RecipeIngredient.recipe_id == recipe_id)
            )
            await session.execute(delete(UserRecipe).where(UserRecipe.recipe_id == recipe_id))
            result = await session.execute(delete(Recipe).where(Recipe.id == recipe_id))
            deleted = result.rowcount > 0

    except IntegrityError as e:
        log_rollback(logger, "delete_recipe", e, recipe_id=recipe_id)
        raise ConstraintViolation(f"Failed to delete recipe {recipe_id}", e)
    except SQLAlchemyError as e:
        log_rollback(logger, "delete_recipe", e, recipe_id=recipe_id)
        raise TransactionAbort("delete_recipe", e)

    log_operation(
        logger,
        operation="delete_recipe",
        outcome="deleted" if deleted else "not_found",
        recipe_id=recipe_id,
    )
    return deleted


# ============================================================================
# Reads
# ============================================================================


async def get_recipe(recipe_id: str) -> Optional[Recipe]:
    """
    Retrieve a recipe by identity.

    The recipe's ingredient links (and their ingredients) are loaded eagerly,
    so to_dict(include_relationships=True) works after the session closes.

    Returns:
        Recipe, or None if absent
    """
    async with session_scope() as session:
        return await session.get(Recipe, str(recipe_id))


async def get_recipes_for_user(user_id: str) -> List[Recipe]:
    """
    Retrieve every recipe linked to a user.

    Borrows a connection for this call only; the shared pool stays open.

    Returns:
        List of Recipe ordered by title (empty if the user has none)
    """
    async with session_scope() as session:
        result = await session.execute(
            select(Recipe)
            .join(UserRecipe, UserRecipe.recipe_id == Recipe.id)
            .where(UserRecipe.user_id == str(user_id))
            .order_by(Recipe.title, Recipe.id)
        )
        return list(result.scalars().all())
