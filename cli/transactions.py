#!/usr/bin/env python3

import sys
from errors import NotFoundError, SyncFailure, ValidationError
from logger import get_logger

logger = get_logger()


def format_transaction(transaction, registry) -> str:
    """One-line display form of a transaction."""
    sign = "+" if transaction.type == "income" else "-"
    label = registry.resolve_label(transaction.category_id, transaction.type)
    return (
        f"{transaction.transaction_date.isoformat()}  "
        f"{sign}{transaction.amount:>12,.2f}  "
        f"{transaction.description[:40]:<40}  {label}  [{transaction.id}]"
    )


def _report_result(result, action: str, registry):
    if result.persisted:
        logger.info(f"✓ Transaction {action} successfully")
    else:
        logger.warning(
            f"Transaction {action} locally, but it may not be saved: {result.error}"
        )
    logger.info(f"  {format_transaction(result.transaction, registry)}")


def cmd_add(args, ledger):
    """Record a new income or expense transaction.

    Args:
        args: Parsed command-line arguments with kind, description, amount,
              date and category
        ledger: Loaded Ledger for the current user
    """
    try:
        result = ledger.add_transaction(
            args.kind, args.description, args.amount, args.date, args.category
        )
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    _report_result(result, "added", ledger.registry)


def cmd_edit(args, ledger):
    """Edit description, amount, date or category of a transaction."""
    fields = {
        name: value
        for name, value in (
            ("description", args.description),
            ("amount", args.amount),
            ("transaction_date", args.date),
            ("category_id", args.category),
        )
        if value is not None
    }

    if not fields:
        logger.error("Nothing to change. Pass at least one of --description, --amount, --date, --category.")
        sys.exit(1)

    try:
        result = ledger.edit_transaction(args.transaction_id, **fields)
    except (NotFoundError, ValidationError) as e:
        logger.error(str(e))
        sys.exit(1)

    _report_result(result, "updated", ledger.registry)


def cmd_delete(args, ledger):
    """Delete a transaction after confirmation."""
    transaction = ledger.store.find(args.transaction_id)
    if transaction is None:
        logger.error(f"Transaction with ID '{args.transaction_id}' not found.")
        sys.exit(1)

    logger.info("\nTransaction to delete:")
    logger.info(f"  {format_transaction(transaction, ledger.registry)}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this transaction? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        ledger.delete_transaction(args.transaction_id)
    except SyncFailure as e:
        logger.error(f"{e}. The transaction was not deleted, try again.")
        sys.exit(1)

    logger.info("✓ Transaction deleted.")


def cmd_list(args, ledger):
    """List transactions, newest first."""
    transactions = ledger.transactions(type=args.kind, search=args.search)

    if not transactions:
        logger.info("No transactions found.")
        return

    for transaction in transactions:
        logger.info(format_transaction(transaction, ledger.registry))

    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_recent(args, ledger):
    """Show the most recent transactions."""
    recent = ledger.dashboard(recent_limit=args.limit).recent

    if not recent:
        logger.info("No transactions recorded yet. Start by adding income and expenses!")
        return

    for transaction in recent:
        logger.info(format_transaction(transaction, ledger.registry))


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Manage transactions",
        description="Record, edit, delete and list income and expense transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add",
        help="Record a new transaction",
        epilog="""
Examples:
  python -m cli transactions add income "March salary" 4200 2025-03-05 --category salary
  python -m cli transactions add expense "Groceries" 87.35 2025-03-06 --category food
        """,
    )
    add_parser.add_argument("kind", choices=["income", "expense"], help="Transaction type")
    add_parser.add_argument("description", help="What the transaction was for")
    add_parser.add_argument("amount", help="Amount, always positive (e.g., 12.50)")
    add_parser.add_argument("date", help="Date in YYYY-MM-DD format")
    add_parser.add_argument(
        "--category",
        required=True,
        help="Category ID (see 'python -m cli categories list')",
    )
    add_parser.set_defaults(func=cmd_add)

    # transactions edit
    edit_parser = transactions_subparsers.add_parser(
        "edit", help="Edit an existing transaction"
    )
    edit_parser.add_argument("transaction_id", help="ID of the transaction to edit")
    edit_parser.add_argument("--description", help="New description")
    edit_parser.add_argument("--amount", help="New amount")
    edit_parser.add_argument("--date", help="New date in YYYY-MM-DD format")
    edit_parser.add_argument("--category", help="New category ID")
    edit_parser.set_defaults(func=cmd_edit)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction"
    )
    delete_parser.add_argument("transaction_id", help="ID of the transaction to delete")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List transactions, newest first"
    )
    list_parser.add_argument(
        "--kind", choices=["income", "expense"], help="Only show one type"
    )
    list_parser.add_argument(
        "--search",
        help="Case-insensitive text to find in description, amount or category",
    )
    list_parser.set_defaults(func=cmd_list)

    # transactions recent
    recent_parser = transactions_subparsers.add_parser(
        "recent", help="Show the latest transactions"
    )
    recent_parser.add_argument(
        "--limit", type=int, default=5, help="How many to show (default 5)"
    )
    recent_parser.set_defaults(func=cmd_recent)
