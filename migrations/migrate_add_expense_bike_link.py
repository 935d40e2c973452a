#!/usr/bin/env python3
"""Migration script to add bike links to the expenses table.

Early databases stored expenses without a bike reference, and the first
unlink implementation wrote an empty string instead of clearing it. This
migration:
- adds a nullable bike_id column to expenses (if missing)
- turns empty-string bike_id values into NULL (general expense)
- turns bike_id values that point at no existing bike into NULL
- fills a missing paid_by with 'Business'

Usage:
    python migrations/migrate_add_expense_bike_link.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import bikeflip modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from bikeflip.database.factories import create_sqlite_database


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def migrate_database(database_path: str | None = None) -> dict[str, int]:
    """Migrate the expenses table to carry bike links.

    Args:
        database_path: Path to database file. If None, uses default location.

    Returns:
        Counts of changed rows: "emptied", "dangling", "payer_filled"

    Raises:
        Exception: If migration fails
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    counts = {"emptied": 0, "dangling": 0, "payer_filled": 0}
    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        if "expenses" not in inspect(engine).get_table_names():
            raise Exception("Table 'expenses' does not exist. Please initialize the database schema first.")

        has_bike_id = column_exists(engine, "expenses", "bike_id")

        with engine.begin() as conn:
            if has_bike_id:
                print("bike_id column already present in expenses table")
            else:
                conn.execute(text("ALTER TABLE expenses ADD COLUMN bike_id VARCHAR"))
                print("  Added column: bike_id")

            counts["emptied"] = conn.execute(
                text("UPDATE expenses SET bike_id = NULL WHERE bike_id = ''")
            ).rowcount
            counts["dangling"] = conn.execute(
                text(
                    "UPDATE expenses SET bike_id = NULL "
                    "WHERE bike_id IS NOT NULL AND bike_id NOT IN (SELECT id FROM bikes)"
                )
            ).rowcount
            counts["payer_filled"] = conn.execute(
                text("UPDATE expenses SET paid_by = 'Business' WHERE paid_by IS NULL OR paid_by = ''")
            ).rowcount

        print(f"  Cleared {counts['emptied']} empty bike reference(s)")
        print(f"  Cleared {counts['dangling']} reference(s) to deleted bikes")
        print(f"  Set payer to Business on {counts['payer_filled']} expense(s)")
        print("Migration completed successfully!")
        return counts

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Migrate database to add bike links to expenses"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides BIKEFLIP_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
