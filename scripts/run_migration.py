"""
Apply the support label schema to the database behind Supabase.

Requires DATABASE_URL (direct Postgres connection string); the Supabase
REST client cannot run DDL.
"""
import os
import sys

import psycopg2
from dotenv import load_dotenv

MIGRATION_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "helpdesk", "database", "migrations", "support_labels_schema.sql",
)


def run_migration(database_url: str = None) -> bool:
    """Run the support label schema migration."""
    load_dotenv()
    database_url = database_url or os.getenv('DATABASE_URL')

    print(f"Reading migration from: {MIGRATION_PATH}")
    with open(MIGRATION_PATH, 'r', encoding='utf-8') as f:
        migration_sql = f.read()

    if not database_url:
        print("\nDATABASE_URL not found in environment")
        print("Run the SQL manually in the Supabase SQL Editor instead:")
        print(f"   {MIGRATION_PATH}")
        return False

    conn = psycopg2.connect(database_url)
    try:
        with conn.cursor() as cursor:
            cursor.execute(migration_sql)
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        print(f"\nMigration failed: {e}")
        return False
    finally:
        conn.close()

    print("\nMigration completed successfully!")
    return True


if __name__ == '__main__':
    sys.exit(0 if run_migration() else 1)
