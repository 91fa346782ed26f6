"""
Ingredient Service - shared ingredient rows.

An ingredient row is written with a single conditional INSERT ... ON CONFLICT
statement so that two imports referencing the same ingredient at the same
time cannot lose an update or collide on the primary key.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_vault.models import Ingredient, RecipeIngredient
from recipe_vault.services.database import dialect_insert, session_scope
from recipe_vault.services.dto import IngredientPayload
from recipe_vault.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


async def upsert_ingredient(
    ingredient: IngredientPayload,
    *,
    session: Optional[AsyncSession] = None,
) -> None:
    """Insert an ingredient, or overwrite its name and image if it exists.

    Transaction boundary: Joins the caller's unit of work when a session is
    passed, otherwise runs in its own.

    Args:
        ingredient: Ingredient payload; a missing image is stored as ""
        session: Optional database session
    """
    if session is not None:
        return await _upsert_ingredient_impl(ingredient, session)
    async with session_scope() as session:
        return await _upsert_ingredient_impl(ingredient, session)


async def _upsert_ingredient_impl(ingredient: IngredientPayload, session: AsyncSession) -> None:
    stmt = dialect_insert(session, Ingredient).values(
        id=str(ingredient.id),
        name=ingredient.name,
        image=ingredient.image or "",
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Ingredient.id],
        set_={"name": stmt.excluded.name, "image": stmt.excluded.image},
    )
    await session.execute(stmt)

    log_operation(
        logger,
        operation="upsert_ingredient",
        outcome="success",
        level=logging.DEBUG,
        ingredient_id=str(ingredient.id),
    )


async def get_ingredient(ingredient_id: str) -> Optional[Ingredient]:
    """Retrieve an ingredient by identity.

    Returns:
        Ingredient, or None if absent
    """
    async with session_scope() as session:
        return await session.get(Ingredient, str(ingredient_id))


async def get_recipe_ingredients(recipe_id: str) -> List[RecipeIngredient]:
    """Retrieve a recipe's ingredient links with their ingredients loaded.

    Returns:
        List of RecipeIngredient ordered by ingredient id (empty if none)
    """
    async with session_scope() as session:
        result = await session.execute(
            select(RecipeIngredient)
            .where(RecipeIngredient.recipe_id == str(recipe_id))
            .order_by(RecipeIngredient.ingredient_id)
        )
        return list(result.scalars().all())
