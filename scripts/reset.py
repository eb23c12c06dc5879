#!/usr/bin/env python3
"""Reset script for Saldo.

This script will:
1. Delete the data directory (including database, logs, and exports)
2. Run migrations to create a fresh database
"""

import shutil
import sys

from config import load_config
from db.manager import DatabaseManager
from cli.migrate import apply_pending


def reset():
    """Reset the application state."""
    print("Saldo Reset Script")
    print("=" * 50)

    config = load_config()

    # Show what will be deleted
    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")
    print(f"Exports: {config.export_dir}")

    response = input("\nThis will delete ALL data for ALL users. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    print("\nRunning migrations...")
    applied = apply_pending(DatabaseManager(config))

    print("\n" + "=" * 50)
    print(f"Reset complete! Applied {applied} migration(s).")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
