"""
UserRecipe model - pure association between a user and a saved recipe.

Users are owned by the authentication system, so user_id is an opaque
identity with no foreign key in this schema.
"""

from sqlalchemy import Column, ForeignKey, Index, String, UniqueConstraint

from .base import BaseModel
from recipe_vault.utils.constants import MAX_ID_LENGTH


class UserRecipe(BaseModel):
    """
    Junction table linking users to recipes.

    Attributes:
        user_id: External user identity
        recipe_id: Foreign key to Recipe
    """

    __tablename__ = "user_recipes"

    user_id = Column(String(MAX_ID_LENGTH), primary_key=True)
    recipe_id = Column(String(MAX_ID_LENGTH), ForeignKey("recipes.id"), primary_key=True)

    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_user_recipe"),
        Index("idx_user_recipe_recipe", "recipe_id"),
    )
