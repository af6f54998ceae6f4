#!/usr/bin/env python
"""Seed a local database with a demo catalog.

Categories and products go through the services, so the same rules as the
HTTP API apply (sibling-unique names, existing parents, unique product
names). Rows that already exist are skipped.

Usage:
    # Create tables and load the default preset
    python scripts/seed_catalog.py --create-tables

    # Load a specific preset without products
    python scripts/seed_catalog.py --preset grocery --no-products

    # Print the current category tree
    python scripts/seed_catalog.py --tree

    # List available presets
    python scripts/seed_catalog.py --list-presets
"""

import argparse
import asyncio
import sys
from decimal import Decimal
from uuid import UUID

from catalog.core.errors import DuplicateCategoryNameError, DuplicateProductNameError
from catalog.infra.database import close_db_engine, create_tables, get_db_session
from catalog.infra.logging import get_logger, setup_logging
from catalog.repositories import CategoryRepository, ProductRepository
from catalog.schemas.category import CategoryCreate, CategoryResponse
from catalog.schemas.product import ProductCreate
from catalog.services import CategoryService, ProductService

setup_logging()
logger = get_logger(__name__)

# name -> (children, [(product name, price, stock)])
PRESETS: dict[str, dict] = {
    "electronics": {
        "Electronics": (
            {
                "Phones": ({}, [("Pixel 8", "699.00", 25), ("iPhone 15 Pro", "999.99", 7)]),
                "Laptops": ({}, [("ThinkPad X1", "1499.00", 4)]),
                "Accessories": ({}, [("USB-C Cable", "9.99", 0)]),
            },
            [],
        ),
        "Books": ({}, [("The Pragmatic Programmer", "39.90", 15)]),
    },
    "grocery": {
        "Grocery": (
            {
                "Fruit": ({}, [("Apples 1kg", "2.49", 120)]),
                "Dairy": ({"Cheese": ({}, [("Gouda 200g", "3.10", 9)])}, [("Milk 1L", "1.15", 60)]),
            },
            [],
        ),
    },
}


async def _find_category(categories: CategoryRepository, name: str, parent_id: UUID | None) -> UUID:
    existing = await categories.find_sibling(name, parent_id)
    assert existing is not None
    return existing.id


async def seed_tree(
    category_service: CategoryService,
    product_service: ProductService,
    tree: dict,
    parent_id: UUID | None = None,
    with_products: bool = True,
) -> tuple[int, int]:
    """Insert a preset subtree.

    Returns:
        Tuple of (categories created, products created)
    """
    created_categories = 0
    created_products = 0

    for name, (children, products) in tree.items():
        try:
            category = await category_service.create(CategoryCreate(name=name, parent_id=parent_id))
            category_id = category.id
            created_categories += 1
        except DuplicateCategoryNameError:
            category_id = await _find_category(category_service.categories, name, parent_id)
            logger.info("Category exists, skipping", name=name)

        if with_products:
            for product_name, price, stock in products:
                try:
                    await product_service.create(
                        ProductCreate(
                            name=product_name,
                            price=Decimal(price),
                            stock=stock,
                            category_id=category_id,
                        )
                    )
                    created_products += 1
                except DuplicateProductNameError:
                    logger.info("Product exists, skipping", name=product_name)

        sub_categories, sub_products = await seed_tree(
            category_service,
            product_service,
            children,
            parent_id=category_id,
            with_products=with_products,
        )
        created_categories += sub_categories
        created_products += sub_products

    return created_categories, created_products


async def seed(preset: str, with_products: bool) -> tuple[int, int]:
    async with get_db_session() as session:
        categories = CategoryRepository(session)
        products = ProductRepository(session)
        return await seed_tree(
            CategoryService(categories, products),
            ProductService(products, categories),
            PRESETS[preset],
            with_products=with_products,
        )


def _print_node(node: CategoryResponse, indent: int = 0) -> None:
    print(f"{'  ' * indent}- {node.name} ({node.product_count} products)")
    for child in node.children or []:
        _print_node(child, indent + 1)


async def print_tree() -> None:
    async with get_db_session() as session:
        categories = CategoryRepository(session)
        service = CategoryService(categories, ProductRepository(session))
        roots = await service.find_roots()
        if not roots:
            print("  No categories")
        for root in roots:
            _print_node(await service.get_category_hierarchy(root.id))


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Seed a local database with a demo catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--preset",
        choices=list(PRESETS.keys()),
        default="electronics",
        help="Catalog preset to load (default: electronics)",
    )
    parser.add_argument(
        "--no-products",
        action="store_true",
        help="Only create categories",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the current category tree and exit",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List available presets and exit",
    )

    return parser.parse_args()


async def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.list_presets:
        print("\nAvailable presets:")
        print("-" * 40)
        for name, tree in PRESETS.items():
            print(f"  {name}: {', '.join(tree)}")
        return 0

    try:
        if args.create_tables:
            await create_tables()

        if args.tree:
            print("\nCategory tree:")
            print("-" * 40)
            await print_tree()
            return 0

        categories, products = await seed(args.preset, with_products=not args.no_products)
        print(f"\nSeeded preset '{args.preset}': {categories} categories, {products} products")
        return 0
    finally:
        await close_db_engine()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
