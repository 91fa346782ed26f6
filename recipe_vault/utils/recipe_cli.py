"""
Recipe CLI Utility

Simple command-line interface for importing, listing, patching and deleting
recipes. No HTTP layer required - designed for scripting and testing use.

Usage Examples:
    # Import recipes from a catalogue export for a user
    recipe-vault import recipes.json --user u1

    # List a user's recipes
    recipe-vault list u1

    # Change the title and servings of a recipe
    recipe-vault patch 42 title="Tomato Soup" servings=6

    # Delete a recipe and its links
    recipe-vault delete 42
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List

from recipe_vault.services.database import close_connections, initialize_app_database
from recipe_vault.services.exceptions import ServiceError
from recipe_vault.services.import_service import import_recipes_from_json
from recipe_vault.services.patch_service import patch_recipe
from recipe_vault.services.recipe_service import delete_recipe, get_recipes_for_user
from recipe_vault.utils.constants import APP_NAME, APP_VERSION


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """
    Parse FIELD=VALUE arguments into an update mapping.

    Values are read as JSON scalars when possible (6 -> int, 1.5 -> float,
    "6" -> str); anything else is kept as a plain string.

    Raises:
        ValueError: If an argument has no '='
    """
    updates = {}
    for item in assignments:
        if "=" not in item:
            raise ValueError(f"Expected FIELD=VALUE, got '{item}'")
        name, raw = item.split("=", 1)
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        updates[name.strip()] = value
    return updates


async def import_cmd(input_file: str, user_id: str) -> int:
    """Import every recipe in a JSON file for a user."""
    print(f"Importing recipes from {input_file} for user {user_id}...")

    try:
        result = await import_recipes_from_json(input_file, user_id)
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}")
        return 1

    print(result.get_summary())
    for label, error in result.failed.items():
        print(f"  {label}: {error}")
    return 0 if result.success else 1


async def list_cmd(user_id: str) -> int:
    """Print a user's recipes."""
    recipes = await get_recipes_for_user(user_id)
    if not recipes:
        print(f"No recipes found for user {user_id}")
        return 0
    for recipe in recipes:
        print(f"{recipe.id}\t{recipe.title}")
    return 0


async def patch_cmd(recipe_id: str, assignments: List[str]) -> int:
    """Apply FIELD=VALUE updates to a recipe."""
    try:
        updates = parse_assignments(assignments)
        await patch_recipe(recipe_id, updates)
    except (ValueError, ServiceError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Recipe {recipe_id} updated")
    return 0


async def delete_cmd(recipe_id: str) -> int:
    """Delete a recipe and its association rows."""
    try:
        deleted = await delete_recipe(recipe_id)
    except ServiceError as e:
        print(f"ERROR: {e}")
        return 1

    if not deleted:
        print(f"Recipe {recipe_id} not found")
        return 1
    print(f"Recipe {recipe_id} deleted")
    return 0


async def run_command(args: argparse.Namespace) -> int:
    """Initialize the database, run one command and close the pool."""
    await initialize_app_database()
    try:
        if args.command == "import":
            return await import_cmd(args.file, args.user)
        elif args.command == "list":
            return await list_cmd(args.user_id)
        elif args.command == "patch":
            return await patch_cmd(args.recipe_id, args.assignments)
        elif args.command == "delete":
            return await delete_cmd(args.recipe_id)
        else:
            print(f"Unknown command: {args.command}")
            return 1
    finally:
        await close_connections()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipe-vault",
        description=f"Recipe persistence utility for {APP_NAME}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  recipe-vault import recipes.json --user u1
  recipe-vault list u1
  recipe-vault patch 42 title="Tomato Soup" servings=6
  recipe-vault delete 42
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    import_parser = subparsers.add_parser("import", help="Import recipes from a JSON file")
    import_parser.add_argument("file", help="JSON file with one recipe object or a list")
    import_parser.add_argument("--user", required=True, help="User to link the recipes to")

    list_parser = subparsers.add_parser("list", help="List a user's recipes")
    list_parser.add_argument("user_id", help="User identity")

    patch_parser = subparsers.add_parser("patch", help="Patch recipe fields")
    patch_parser.add_argument("recipe_id", help="Recipe identity")
    patch_parser.add_argument("assignments", nargs="+", metavar="FIELD=VALUE")

    delete_parser = subparsers.add_parser("delete", help="Delete a recipe and its links")
    delete_parser.add_argument("recipe_id", help="Recipe identity")

    return parser


def main(argv: List[str] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return asyncio.run(run_command(args))


if __name__ == "__main__":
    sys.exit(main())
