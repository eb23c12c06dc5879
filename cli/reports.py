#!/usr/bin/env python3

import sys
import csv
from datetime import date
from pathlib import Path
from logger import get_logger
from models.period import Period
from tools.reports import report_rows

logger = get_logger()


def _parse_period(args, ledger):
    """Build the Period and reference date from command-line arguments."""
    # Validate that both --start and --end are provided together
    if (args.start or args.end) and args.period != "custom":
        logger.error("--start and --end can only be used with --period custom")
        sys.exit(1)

    try:
        period = Period.parse(
            args.period or ledger.services.config.default_period,
            args.start,
            args.end,
        )
        today = date.fromisoformat(args.today) if args.today else date.today()
    except ValueError as e:
        logger.error(f"Invalid period: {e}")
        logger.error("Use YYYY-MM-DD format for --start, --end and --today")
        sys.exit(1)

    if period.is_open:
        logger.warning("Custom period without both --start and --end: showing all transactions")

    return period, today


def cmd_show(args, ledger):
    """Show the summary, expense breakdown and balance over time for a period."""
    period, today = _parse_period(args, ledger)
    report = ledger.report(period, today)
    summary = report.summary

    bounds = period.bounds(today)
    window = f"{bounds[0].isoformat()} to {bounds[1].isoformat()}" if bounds else "all dates"

    logger.info(f"\nReport: {period.label} ({window})")
    logger.info("=" * 80)
    logger.info(f"Income:       {summary.income:>14,.2f}")
    logger.info(f"Expenses:     {summary.expense:>14,.2f}  ({report.expense_percentage}% of income)")
    logger.info(f"Balance:      {summary.balance:>14,.2f}")
    logger.info(f"Transactions: {summary.count:>14}")

    logger.info("\nExpenses by category:")
    logger.info("-" * 80)
    if not report.by_category:
        logger.info("  No expenses in this period")
    for label, amount in report.by_category.items():
        logger.info(f"  {label:<40} {amount:>14,.2f}")

    logger.info("\nBalance over time:")
    logger.info("-" * 80)
    if not report.balance_series:
        logger.info("  No transactions in this period")
    for day, balance in report.balance_series:
        logger.info(f"  {day}  {balance:>14,.2f}")


def cmd_dashboard(args, ledger):
    """Show headline figures over all transactions."""
    dashboard = ledger.dashboard()
    summary = dashboard.summary

    logger.info("\nDashboard")
    logger.info("=" * 80)
    logger.info(f"Balance:      {summary.balance:>14,.2f}  ({dashboard.balance_status})")

    if summary.income > 0:
        logger.info(f"Income:       {summary.income:>14,.2f}  ({dashboard.counts['income']} entries)")
    else:
        logger.info("Income:       no income yet")

    if summary.expense > 0:
        logger.info(
            f"Expenses:     {summary.expense:>14,.2f}  ({dashboard.expense_percentage}% of income)"
        )
    else:
        logger.info("Expenses:     no expenses yet")

    logger.info(f"Transactions: {summary.count:>14}")


def cmd_export(args, ledger):
    """Export a period report to CSV."""
    period, today = _parse_period(args, ledger)
    report = ledger.report(period, today)

    if not report.transactions:
        logger.info("No transactions to export for this period.")
        sys.exit(0)

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = (
            ledger.services.config.export_dir / f"report-{period.kind}-{today.isoformat()}.csv"
        )

    try:
        # Create parent directory if it doesn't exist
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerows(report_rows(report, ledger.registry))

        logger.info(
            f"✓ Exported {len(report.transactions)} transaction(s) to: {output_path}"
        )
    except OSError as e:
        logger.error(f"Error exporting report: {e}")
        sys.exit(1)


def _add_period_arguments(parser):
    parser.add_argument(
        "--period",
        choices=["month", "quarter", "year", "custom"],
        help="Reporting period (defaults to [reports] default_period in config)",
    )
    parser.add_argument("--start", help="Start date YYYY-MM-DD (custom period)")
    parser.add_argument("--end", help="End date YYYY-MM-DD (custom period)")
    parser.add_argument(
        "--today",
        help="Reference date YYYY-MM-DD for month/quarter/year (defaults to today)",
    )


def setup_parser(subparsers):
    """Setup reports subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "reports",
        help="Reports and dashboard",
        description="Period summaries, category breakdowns, balance over time and CSV export",
    )

    reports_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    # reports show
    show_parser = reports_subparsers.add_parser(
        "show",
        help="Show the report for a period",
        epilog="""
Examples:
  python -m cli reports show --period month
  python -m cli reports show --period custom --start 2025-01-01 --end 2025-03-31
        """,
    )
    _add_period_arguments(show_parser)
    show_parser.set_defaults(func=cmd_show)

    # reports dashboard
    dashboard_parser = reports_subparsers.add_parser(
        "dashboard", help="Show totals over all transactions"
    )
    dashboard_parser.set_defaults(func=cmd_dashboard)

    # reports export
    export_parser = reports_subparsers.add_parser(
        "export", help="Export the report for a period to CSV"
    )
    _add_period_arguments(export_parser)
    export_parser.add_argument(
        "--output",
        help="Output CSV file path (defaults to a file in [reports] export_dir)",
    )
    export_parser.set_defaults(func=cmd_export)
