#!/usr/bin/env python3
"""
Saldo CLI - Command-line interface for tracking income and expenses.

Usage:
    python -m cli [--user EMAIL] <command> <subcommand> [options]

Commands:
    transactions Record, edit, delete and list transactions
    categories   Manage categories
    reports      Period reports, dashboard and CSV export
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli --user me@example.com categories seed
    python -m cli transactions add expense "Lunch" 12.50 2025-03-14 --category food
    python -m cli transactions list --kind expense --search lunch
    python -m cli reports show --period quarter
    python -m cli reports export --period custom --start 2025-01-01 --end 2025-03-31 --output q1.csv
"""

import sys
import argparse
from cli import transactions, categories, reports, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from ledger.ledger import Ledger
from logger import setup_logging

# Commands that work on a loaded ledger
LEDGER_COMMANDS = ("transactions", "categories", "reports")


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Saldo - Personal income and expense tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--user",
        help="Email of the user whose ledger to use (defaults to [user] email in config)",
    )

    # Create subparsers for each command
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    reports.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        logger = setup_logging(config)

        if args.command in LEDGER_COMMANDS:
            user_email = args.user or config.user_email
            if not user_email:
                logger.error(
                    "No user configured. Pass --user or set [user] email in ~/.config/saldo.toml"
                )
                sys.exit(1)

            # One ledger per run, owned by this user
            ledger = Ledger(Services(config), user_email).load()
            args.func(args, ledger)
        elif args.command == "migrate":
            # Migrate commands need db_manager for raw database operations
            args.func(args, DatabaseManager(config))
        else:
            args.func(args)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
