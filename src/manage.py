"""Dress Gallery database management CLI.

Creates and drops the ordering schema, and loads catalog products into the
inventory ledger from a JSON file.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed-products FILE.json  # Register products
"""

import argparse
import json
import sys


def setup_database():
    from ordering.domain import ordering
    from ordering.utils.db import setup_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Creating ordering database schema...")
    setup_db(ordering)
    print("Done.")


def drop_database():
    from ordering.domain import ordering
    from ordering.utils.db import drop_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Dropping ordering database schema...")
    drop_db(ordering)
    print("Done.")


def seed_products(path):
    """Register every product listed in ``path`` (a JSON array)."""
    from ordering.domain import ordering
    from ordering.utils.db import seed_products as seed

    with open(path, encoding="utf-8") as f:
        products = json.load(f)

    ordering.init()
    ids = seed(ordering, products)
    print(f"Registered {len(ids)} products.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Dress Gallery database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-products", help="Register catalog products from a JSON file")
    seed_parser.add_argument("path", help="JSON file with a list of products")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-products":
        seed_products(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
