"""
Link Service - association rows between recipes, ingredients and users.

Both links are written as a single INSERT ... ON CONFLICT DO NOTHING against
the table's unique key, so a concurrent link of the same pair ends with exactly
one row and no error. The unique constraints on recipe_ingredients and
user_recipes are what make this hold; the statement only relies on them.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from recipe_vault.models import RecipeIngredient, UserRecipe
from recipe_vault.services.database import dialect_insert, session_scope
from recipe_vault.services.dto import IngredientPayload
from recipe_vault.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


async def link_recipe_ingredient(
    recipe_id: str,
    ingredient: IngredientPayload,
    *,
    session: Optional[AsyncSession] = None,
) -> bool:
    """Ensure a recipe ↔ ingredient row exists.

    An existing link is left untouched, including its amount and unit.

    Transaction boundary: Joins the caller's unit of work when a session is
    passed, otherwise runs in its own.

    Args:
        recipe_id: Recipe identity (must already exist)
        ingredient: Ingredient payload carrying id, amount and unit
        session: Optional database session

    Returns:
        True if a row was inserted, False if the link already existed

    Raises:
        sqlalchemy.exc.IntegrityError: If the recipe or ingredient row is missing
    """
    if session is not None:
        return await _link_recipe_ingredient_impl(recipe_id, ingredient, session)
    async with session_scope() as session:
        return await _link_recipe_ingredient_impl(recipe_id, ingredient, session)


async def _link_recipe_ingredient_impl(
    recipe_id: str, ingredient: IngredientPayload, session: AsyncSession
) -> bool:
    recipe_id = str(recipe_id)
    ingredient_id = str(ingredient.id)

    stmt = (
        dialect_insert(session, RecipeIngredient)
        .values(
            recipe_id=recipe_id,
            ingredient_id=ingredient_id,
            amount=ingredient.amount,
            unit=ingredient.unit or "",
        )
        .on_conflict_do_nothing(index_elements=["recipe_id", "ingredient_id"])
    )
    result = await session.execute(stmt)
    linked = result.rowcount == 1

    log_operation(
        logger,
        operation="link_recipe_ingredient",
        outcome="linked" if linked else "already_linked",
        recipe_id=recipe_id,
        ingredient_id=ingredient_id,
    )
    return linked


async def link_user_to_recipe(
    user_id: str,
    recipe_id: str,
    *,
    session: Optional[AsyncSession] = None,
) -> bool:
    """Ensure a user ↔ recipe row exists.

    Transaction boundary: Joins the caller's unit of work when a session is
    passed, otherwise runs in its own.

    Args:
        user_id: User identity
        recipe_id: Recipe identity (must already exist)
        session: Optional database session

    Returns:
        True if a row was inserted, False if the link already existed

    Raises:
        sqlalchemy.exc.IntegrityError: If the recipe row is missing
    """
    if session is not None:
        return await _link_user_to_recipe_impl(user_id, recipe_id, session)
    async with session_scope() as session:
        return await _link_user_to_recipe_impl(user_id, recipe_id, session)


async def _link_user_to_recipe_impl(user_id: str, recipe_id: str, session: AsyncSession) -> bool:
    user_id = str(user_id)
    recipe_id = str(recipe_id)

    stmt = (
        dialect_insert(session, UserRecipe)
        .values(user_id=user_id, recipe_id=recipe_id)
        .on_conflict_do_nothing(index_elements=["user_id", "recipe_id"])
    )
    result = await session.execute(stmt)
    linked = result.rowcount == 1

    log_operation(
        logger,
        operation="link_user_to_recipe",
        outcome="linked" if linked else "already_linked",
        user_id=user_id,
        recipe_id=recipe_id,
    )
    return linked
