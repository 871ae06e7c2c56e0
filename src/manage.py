"""Restaurant reviews database management CLI.

Usage:
    python src/manage.py setup-db   # Create tables
    python src/manage.py drop-db    # Drop tables
    python src/manage.py reset-db   # Drop, then create

Set PROTEAN_ENV=production to target the PostgreSQL database from domain.toml.
"""

import argparse
import sys


def _initialized_domain():
    from restaurants.domain import restaurants

    restaurants.init()
    return restaurants


def setup_databases():
    from restaurants.utils.db import setup_db

    providers = setup_db(_initialized_domain())
    if providers:
        print(f"Created schema on: {', '.join(providers)}")
    else:
        print("No SQL databases configured; nothing to create.")


def drop_databases():
    from restaurants.utils.db import drop_db

    providers = drop_db(_initialized_domain())
    if providers:
        print(f"Dropped schema on: {', '.join(providers)}")
    else:
        print("No SQL databases configured; nothing to drop.")


COMMANDS = {
    "setup-db": (setup_databases,),
    "drop-db": (drop_databases,),
    "reset-db": (drop_databases, setup_databases),
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Restaurant reviews database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("reset-db", help="Drop and recreate all database tables")

    args = parser.parse_args(argv)

    for step in COMMANDS[args.command]:
        step()


if __name__ == "__main__":
    sys.exit(main())
