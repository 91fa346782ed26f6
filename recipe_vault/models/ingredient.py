"""
Ingredient model.

An ingredient row is shared by every recipe that references it and is never
removed when a recipe is deleted.
"""

from sqlalchemy import Column, String

from .base import BaseModel
from recipe_vault.utils.constants import MAX_ID_LENGTH, MAX_NAME_LENGTH, MAX_URL_LENGTH


class Ingredient(BaseModel):
    """
    Ingredient model.

    Attributes:
        id: External ingredient identity (string)
        name: Ingredient name
        image: Image reference, "" when absent (never NULL)
    """

    __tablename__ = "ingredients"

    id = Column(String(MAX_ID_LENGTH), primary_key=True)
    name = Column(String(MAX_NAME_LENGTH), nullable=False)
    image = Column(String(MAX_URL_LENGTH), nullable=False, default="", server_default="")
