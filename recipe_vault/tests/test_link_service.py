"""
Tests for link_service.

Links are insert-if-absent: the first call writes a row, later calls for the
same pair are no-ops, and racing calls end with exactly one row.
"""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from recipe_vault.models import RecipeIngredient, UserRecipe
from recipe_vault.services.dto import IngredientPayload, RecipePayload
from recipe_vault.services.ingredient_service import get_recipe_ingredients, upsert_ingredient
from recipe_vault.services.link_service import link_recipe_ingredient, link_user_to_recipe
from recipe_vault.services.recipe_service import upsert_recipe_details


SALT = IngredientPayload(id="7", name="Salt", amount=1, unit="tsp")


async def _seed(soup_payload):
    await upsert_recipe_details(RecipePayload.from_dict(soup_payload))
    await upsert_ingredient(SALT)


class TestLinkRecipeIngredient:
    async def test_first_link_inserts(self, test_db, count_rows, soup_payload):
        await _seed(soup_payload)

        assert await link_recipe_ingredient("42", SALT) is True
        assert await count_rows(test_db, RecipeIngredient, recipe_id="42") == 1

    async def test_repeat_link_is_noop(self, test_db, count_rows, soup_payload):
        await _seed(soup_payload)
        await link_recipe_ingredient("42", SALT)

        assert await link_recipe_ingredient("42", SALT) is False
        assert await count_rows(test_db, RecipeIngredient) == 1

    async def test_existing_link_keeps_amount_and_unit(self, test_db, soup_payload):
        await _seed(soup_payload)
        await link_recipe_ingredient("42", SALT)

        await link_recipe_ingredient("42", IngredientPayload(id="7", name="Salt", amount=5, unit="g"))

        (link,) = await get_recipe_ingredients("42")
        assert link.unit == "tsp"
        assert link.amount == 1

    async def test_missing_unit_stored_as_empty(self, test_db, soup_payload):
        await _seed(soup_payload)

        await link_recipe_ingredient("42", IngredientPayload(id="7", name="Salt"))

        (link,) = await get_recipe_ingredients("42")
        assert link.unit == ""
        assert link.amount is None

    async def test_link_requires_existing_recipe(self, test_db):
        await upsert_ingredient(SALT)

        with pytest.raises(IntegrityError):
            await link_recipe_ingredient("999", SALT)

    async def test_link_requires_existing_ingredient(self, test_db, soup_payload):
        await upsert_recipe_details(RecipePayload.from_dict(soup_payload))

        with pytest.raises(IntegrityError):
            await link_recipe_ingredient("42", SALT)

    async def test_concurrent_links_leave_one_row(self, file_db, count_rows, soup_payload):
        """Two units of work racing on the same pair: one inserts, one is a no-op."""
        await _seed(soup_payload)

        results = await asyncio.gather(
            link_recipe_ingredient("42", SALT),
            link_recipe_ingredient("42", SALT),
        )

        assert sorted(results) == [False, True]
        assert await count_rows(file_db, RecipeIngredient) == 1


class TestLinkUserToRecipe:
    async def test_first_link_inserts(self, test_db, count_rows, soup_payload):
        await _seed(soup_payload)

        assert await link_user_to_recipe("u1", "42") is True
        assert await count_rows(test_db, UserRecipe, user_id="u1", recipe_id="42") == 1

    async def test_repeat_link_is_noop(self, test_db, count_rows, soup_payload):
        await _seed(soup_payload)
        await link_user_to_recipe("u1", "42")

        assert await link_user_to_recipe("u1", "42") is False
        assert await count_rows(test_db, UserRecipe) == 1

    async def test_link_requires_existing_recipe(self, test_db):
        with pytest.raises(IntegrityError):
            await link_user_to_recipe("u1", "999")

    async def test_concurrent_links_leave_one_row(self, file_db, count_rows, soup_payload):
        await _seed(soup_payload)

        results = await asyncio.gather(
            link_user_to_recipe("u1", "42"),
            link_user_to_recipe("u1", "42"),
        )

        assert sorted(results) == [False, True]
        assert await count_rows(file_db, UserRecipe) == 1
