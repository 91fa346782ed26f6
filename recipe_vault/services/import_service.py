"""
Import Service - atomic import of a complete recipe graph.

One import is one unit of work:
1. Upsert the recipe row
2. For each ingredient: upsert the ingredient row, then link it to the recipe
3. Link the user to the recipe

Either every step commits or the whole unit of work is rolled back; a failed
import leaves storage exactly as it was before the call.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_vault.services.database import session_scope
from recipe_vault.services.dto import RecipePayload
from recipe_vault.services.exceptions import ConstraintViolation, ServiceError, TransactionAbort
from recipe_vault.services.ingredient_service import upsert_ingredient
from recipe_vault.services.link_service import link_recipe_ingredient, link_user_to_recipe
from recipe_vault.services.logging_utils import get_service_logger, log_operation, log_rollback
from recipe_vault.services.recipe_service import upsert_recipe_details
from recipe_vault.utils.validators import validate_full_update, validate_required_string

logger = get_service_logger(__name__)


@dataclass
class ImportResult:
    """Outcome of importing a recipe or a batch of recipes.

    Attributes:
        imported: Identities of recipes whose unit of work committed
        failed: Mapping of recipe identity (or list position) to error message
    """

    imported: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed

    def get_summary(self) -> str:
        """Human-readable one-line summary."""
        return f"Imported {len(self.imported)} recipe(s), {len(self.failed)} failed"


async def import_recipe(recipe: Union[RecipePayload, Dict[str, Any]], user_id: str) -> str:
    """
    Import a recipe with its ingredients and link it to a user.

    Idempotent: importing the same payload for the same user twice leaves the
    store as a single import would.

    Args:
        recipe: RecipePayload, or a raw catalogue dict
        user_id: User identity to link the recipe to

    Returns:
        The recipe identity

    Raises:
        ValidationError: If the payload is malformed (nothing is written)
        ConstraintViolation: If the store rejects a write (rolled back)
        TransactionAbort: If any other storage failure occurs (rolled back)
    """
    if not isinstance(recipe, RecipePayload):
        recipe = RecipePayload.from_dict(recipe)
    validate_required_string(user_id, "user_id")
    validate_full_update(recipe.update_fields())

    user_id = str(user_id)
    recipe_id = recipe.id

    try:
        async with session_scope() as session:
            await _import_recipe_graph(session, recipe, user_id)

    except IntegrityError as e:
        log_rollback(logger, "import_recipe", e, recipe_id=recipe_id, user_id=user_id)
        raise ConstraintViolation(f"Failed to import recipe {recipe_id}", e)
    except SQLAlchemyError as e:
        log_rollback(logger, "import_recipe", e, recipe_id=recipe_id, user_id=user_id)
        raise TransactionAbort("import_recipe", e)

    log_operation(
        logger,
        operation="import_recipe",
        outcome="success",
        recipe_id=recipe_id,
        user_id=user_id,
        ingredient_count=len(recipe.ingredients),
    )
    return recipe_id


async def _import_recipe_graph(session: AsyncSession, recipe: RecipePayload, user_id: str) -> None:
    """Write the recipe graph in program order inside the caller's unit of work."""
    await upsert_recipe_details(recipe, session=session)

    for ingredient in recipe.ingredients:
        await upsert_ingredient(ingredient, session=session)
        await link_recipe_ingredient(recipe.id, ingredient, session=session)

    await link_user_to_recipe(user_id, recipe.id, session=session)


async def import_recipes_from_json(input_file: Union[str, Path], user_id: str) -> ImportResult:
    """
    Import every recipe in a JSON file for one user.

    The file holds either one recipe object or a list of them. Each recipe is
    its own unit of work, so one bad recipe does not undo the others.

    Args:
        input_file: Path to the JSON file
        user_id: User identity to link every recipe to

    Returns:
        ImportResult listing imported and failed recipes
    """
    with open(input_file, "r", encoding="utf-8") as fh:
        data = json.load(fh)

    entries = data if isinstance(data, list) else [data]
    result = ImportResult()

    for position, entry in enumerate(entries):
        label = str(entry.get("id", f"#{position}")) if isinstance(entry, dict) else f"#{position}"
        try:
            result.imported.append(await import_recipe(entry, user_id))
        except ServiceError as e:
            result.failed[label] = str(e)

    log_operation(
        logger,
        operation="import_recipes_from_json",
        outcome="success" if result.success else "partial",
        imported=len(result.imported),
        failed=len(result.failed),
    )
    return result
