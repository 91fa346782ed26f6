"""Recipe Vault - transactional persistence for recipes, ingredients and their links."""

__version__ = "0.1.0"
