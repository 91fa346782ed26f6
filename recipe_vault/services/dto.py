"""Data Transfer Objects for service layer.

This module provides type-safe payloads for the recipe import path. The
external catalogue shape (camelCase keys, numeric identities, optional
images) is normalized here so the services only deal with one shape.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from recipe_vault.services.exceptions import ValidationError
from recipe_vault.utils.constants import AMOUNT_SCALE
from recipe_vault.utils.validators import validate_scale, validate_text

Number = Union[int, float, Decimal]


def _identity(data: Dict[str, Any], key: str, label: str) -> str:
    value = data.get(key)
    if value is None or (isinstance(value, str) and value.strip() == ""):
        raise ValidationError([f"{label}: This field is required"], field=key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError([f"{label}: Must be a string or integer identity"], field=key)
    return str(value)


@dataclass
class IngredientPayload:
    """One entry of a recipe's ingredient list.

    Attributes:
        id: Ingredient identity (shared across recipes)
        name: Ingredient name
        image: Image reference, "" when absent
        amount: Amount used by the recipe
        unit: Unit of the amount, "" when absent
    """

    id: str
    name: str
    image: str = ""
    amount: Optional[Number] = None
    unit: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IngredientPayload":
        """Build an ingredient payload from a catalogue entry.

        Raises:
            ValidationError: If the identity or name is missing, the amount is
                not a number, or the image or unit is not text
        """
        if not isinstance(data, dict):
            raise ValidationError(["Ingredient entries must be objects"])

        name = data.get("name")
        if not isinstance(name, str) or name.strip() == "":
            raise ValidationError(["Ingredient name: This field is required"], field="name")

        amount = data.get("amount")
        if amount is not None and (isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal))):
            raise ValidationError(["Ingredient amount: Must be a number"], field="amount")
        validate_scale(amount, AMOUNT_SCALE, "amount")

        image = data.get("image")
        image = "" if image is None else image
        validate_text(image, "image")

        unit = data.get("unit")
        unit = "" if unit is None else unit
        validate_text(unit, "unit")

        return cls(
            id=_identity(data, "id", "Ingredient id"),
            name=name,
            image=image,
            amount=amount,
            unit=unit,
        )


@dataclass
class RecipePayload:
    """A recipe as delivered by the external catalogue.

    Attributes:
        id: Recipe identity, stable across re-imports
        title: Recipe title
        image_url: Image reference ("image" or "imageurl" in the source)
        servings: Number of servings
        ready_in_minutes: Preparation time in minutes
        price_per_serving: Price per serving
        ingredients: Ingredient list ("extendedIngredients" in the source)
    """

    id: str
    title: Any
    image_url: Any = ""
    servings: Any = None
    ready_in_minutes: Any = None
    price_per_serving: Any = None
    ingredients: List[IngredientPayload] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecipePayload":
        """Build a recipe payload from a catalogue object.

        Field types are checked later by validate_full_update(); this only
        normalizes keys and defaults.

        Raises:
            ValidationError: If the payload is not an object, or an identity is missing
        """
        if not isinstance(data, dict):
            raise ValidationError(["Recipe payload must be an object"])

        raw_ingredients = data.get("extendedIngredients") or []
        if not isinstance(raw_ingredients, list):
            raise ValidationError(
                ["extendedIngredients: Must be a list"], field="extendedIngredients"
            )

        image_url = data.get("image")
        if image_url is None:
            image_url = data.get("imageurl")

        return cls(
            id=_identity(data, "id", "Recipe id"),
            title=data.get("title"),
            image_url="" if image_url is None else image_url,
            servings=data.get("servings"),
            ready_in_minutes=data.get("readyInMinutes"),
            price_per_serving=data.get("pricePerServing"),
            ingredients=[IngredientPayload.from_dict(item) for item in raw_ingredients],
        )

    def update_fields(self) -> Dict[str, Any]:
        """Recipe columns keyed by their external field names."""
        return {
            "title": self.title,
            "imageurl": self.image_url,
            "servings": self.servings,
            "readyInMinutes": self.ready_in_minutes,
            "pricePerServing": self.price_per_serving,
        }
