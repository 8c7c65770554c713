"""Marketplace database management CLI.

Usage:
    python src/manage.py setup-db       # Create all tables
    python src/manage.py drop-db        # Drop all tables
    python src/manage.py create-admin   # Create the configured admin account
"""

import argparse
import sys

from marketplace.domain import marketplace


def setup_database():
    from marketplace.utils.db import setup_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Creating marketplace database schema...")
    setup_db(marketplace)
    print("Done.")


def drop_database():
    from marketplace.utils.db import drop_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Dropping marketplace database schema...")
    drop_db(marketplace)
    print("Done.")


def create_admin():
    from marketplace.account.bootstrap import ensure_admin

    marketplace.init()
    with marketplace.domain_context():
        admin_id = ensure_admin()
    print(f"Admin account ready: {admin_id}")


def main():
    parser = argparse.ArgumentParser(description="Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("create-admin", help="Create the admin account from configuration")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
