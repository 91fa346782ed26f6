"""
Recipe models.

This module contains:
- Recipe: A recipe imported from an external catalogue
- RecipeIngredient: Junction table linking recipes to ingredients with amounts
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import BaseModel
from recipe_vault.utils.constants import (
    AMOUNT_SCALE,
    MAX_ID_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_UNIT_LENGTH,
    MAX_URL_LENGTH,
    PRICE_SCALE,
)


class Recipe(BaseModel):
    """
    Recipe model.

    The identity is assigned externally and stays stable across re-imports,
    which is what makes the import idempotent.

    Attributes:
        id: External recipe identity (string)
        title: Recipe title
        image_url: Image reference (stored in the ``imageurl`` column)
        servings: Number of servings
        ready_in_minutes: Preparation time in minutes
        price_per_serving: Price per serving
        recipe_ingredients: Ingredient links with amounts
    """

    __tablename__ = "recipes"

    id = Column(String(MAX_ID_LENGTH), primary_key=True)
    title = Column(String(MAX_TITLE_LENGTH), nullable=False)
    image_url = Column("imageurl", String(MAX_URL_LENGTH), nullable=False, default="")
    servings = Column(Integer, nullable=True)
    ready_in_minutes = Column(Integer, nullable=True)
    price_per_serving = Column(Numeric(12, PRICE_SCALE), nullable=True)

    # Relationships (read side only; links are written with Core statements)
    recipe_ingredients = relationship(
        "RecipeIngredient",
        lazy="selectin",
        viewonly=True,
        order_by="RecipeIngredient.ingredient_id",
    )


class RecipeIngredient(BaseModel):
    """
    Junction table linking recipes to ingredients with quantities.

    At most one row exists per (recipe_id, ingredient_id); both referenced
    rows must exist.

    Attributes:
        recipe_id: Foreign key to Recipe
        ingredient_id: Foreign key to Ingredient
        amount: Amount needed
        unit: Unit of measurement ("" when the catalogue gives none)
    """

    __tablename__ = "recipe_ingredients"

    # No ON DELETE CASCADE: dependent rows are removed explicitly before the recipe
    recipe_id = Column(String(MAX_ID_LENGTH), ForeignKey("recipes.id"), primary_key=True)
    ingredient_id = Column(
        String(MAX_ID_LENGTH), ForeignKey("ingredients.id"), primary_key=True
    )

    amount = Column(Numeric(18, AMOUNT_SCALE), nullable=True)
    unit = Column(String(MAX_UNIT_LENGTH), nullable=False, default="")

    ingredient = relationship("Ingredient", lazy="joined")

    __table_args__ = (
        UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_ingredient"),
        Index("idx_recipe_ingredient_ingredient", "ingredient_id"),
    )

    def __repr__(self) -> str:
        """String representation of recipe ingredient."""
        return (
            f"RecipeIngredient(recipe_id={self.recipe_id!r}, "
            f"ingredient_id={self.ingredient_id!r}, "
            f"amount={self.amount}, unit='{self.unit}')"
        )
