"""
Base model class for all database models.

Provides common functionality for all models:
- SQLAlchemy declarative base
- Utility methods (to_dict, __repr__)

Identities in this schema are assigned by the caller (an external recipe
catalogue), so the base class declares no primary key of its own.
"""

from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import declarative_base

# Create the declarative base for all models
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common methods.

    All models inherit from this class to get:
    - to_dict(): Convert model to dictionary
    - __repr__(): Readable representation keyed by identity columns
    """

    __abstract__ = True

    def to_dict(self, include_relationships: bool = False) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Keys are the mapped attribute names, which can differ from the
        underlying column names.

        Args:
            include_relationships: If True, include related objects (default: False).
                Relationships must already be loaded.

        Returns:
            Dictionary representation of the model
        """
        result = {}

        for attr in self.__mapper__.column_attrs:
            value = getattr(self, attr.key)

            # Decimal is not JSON serializable
            if isinstance(value, Decimal):
                value = float(value)

            result[attr.key] = value

        if include_relationships:
            for relationship in self.__mapper__.relationships:
                rel_name = relationship.key
                rel_value = getattr(self, rel_name)

                if rel_value is None:
                    result[rel_name] = None
                elif isinstance(rel_value, list):
                    result[rel_name] = [item.to_dict() for item in rel_value]
                else:
                    result[rel_name] = rel_value.to_dict()

        return result

    def __repr__(self) -> str:
        """
        String representation of model instance.

        Returns:
            String like "ClassName(id='42', title='Soup')"
        """
        class_name = self.__class__.__name__
        attrs = []

        for column in self.__table__.primary_key.columns:
            attrs.append(f"{column.key}={getattr(self, column.key, None)!r}")

        for label in ("title", "name"):
            value = getattr(self, label, None)
            if value is not None:
                attrs.append(f"{label}='{value}'")

        attrs_str = ", ".join(attrs)
        return f"{class_name}({attrs_str})"
