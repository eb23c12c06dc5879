#!/usr/bin/env python3

import sys
import json
from config import get_seed_dir
from errors import NotFoundError, SyncFailure, ValidationError
from logger import get_logger

logger = get_logger()


def cmd_list(args, ledger):
    """List the user's categories by type."""
    if not len(ledger.registry):
        logger.info("No categories found.")
        logger.info("Use 'python -m cli categories seed' to add the built-in ones.")
        return

    for type in ("income", "expense"):
        if args.kind and args.kind != type:
            continue
        categories = ledger.registry.all(type)

        logger.info(f"\n{type.capitalize()} categories:")
        logger.info("=" * 80)
        for category in categories:
            custom = " (custom)" if category.is_custom else ""
            logger.info(f"  {category.label:<30} ID: {category.id}{custom}")

    logger.info(f"\nTotal categories: {len(ledger.registry)}")


def cmd_create(args, ledger):
    """Create a custom category."""
    try:
        category = ledger.add_category(args.name, args.kind, args.icon)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)
    except SyncFailure as e:
        logger.error(f"{e}. The category was not created.")
        sys.exit(1)

    logger.info(f"✓ Category created successfully with ID: {category.id}")
    logger.info(f"  {category.label} ({category.type})")


def cmd_delete(args, ledger):
    """Delete a custom category that has no transactions."""
    try:
        category = ledger.remove_category(args.category_id, args.kind)
    except (NotFoundError, ValidationError) as e:
        logger.error(str(e))
        sys.exit(1)
    except SyncFailure as e:
        logger.error(f"{e}. The category was not deleted.")
        sys.exit(1)

    logger.info(f"✓ Category '{category.name}' deleted successfully.")


def cmd_seed(args, ledger):
    """Seed built-in categories from JSON file."""
    seed_file = get_seed_dir() / "categories.json"

    if not seed_file.exists():
        logger.error(f"Seed file not found: {seed_file}")
        sys.exit(1)

    try:
        with open(seed_file, "r") as f:
            categories_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing JSON file: {e}")
        sys.exit(1)

    logger.info(f"\nSeeding built-in categories for {ledger.user_email}")
    logger.info("=" * 80)

    created_count = 0
    skipped_count = 0

    for category_data in categories_data:
        category_id = category_data.get("id")
        name = category_data.get("name")
        type = category_data.get("type")

        if ledger.registry.find(category_id, type) is not None:
            logger.info(f"⊘ Skipped '{name}' (already exists)")
            skipped_count += 1
            continue

        try:
            category = ledger.add_builtin_category(
                category_id, name, type, category_data.get("icon")
            )
        except ValidationError as e:
            logger.warning(f"Skipping invalid seed entry {category_data}: {e}")
            continue
        except SyncFailure as e:
            logger.error(f"Error creating category '{name}': {e}")
            continue

        logger.info(f"✓ Created {category.label} ({type})")
        created_count += 1

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {created_count}")
    logger.info(f"Skipped: {skipped_count}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.add_argument(
        "--kind", choices=["income", "expense"], help="Only show one type"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a custom category"
    )
    create_parser.add_argument("kind", choices=["income", "expense"], help="Type the category applies to")
    create_parser.add_argument("name", help="Category name (e.g., Pets)")
    create_parser.add_argument("--icon", help="Short glyph shown before the name")
    create_parser.set_defaults(func=cmd_create)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a custom category with no transactions"
    )
    delete_parser.add_argument("kind", choices=["income", "expense"], help="Type of the category")
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.set_defaults(func=cmd_delete)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Add the built-in categories"
    )
    seed_parser.set_defaults(func=cmd_seed)
