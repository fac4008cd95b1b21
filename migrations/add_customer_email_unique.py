# migrations/add_customer_email_unique.py
"""
Make customers.email unique on databases created before checkout used
insert-or-fetch.

Older databases may already hold several customer rows per email. Those are
merged into the oldest row (orders are re-pointed to it) before the unique
index is created. Also adds the indexes the admin order table relies on.
"""

import os
import sys
from datetime import datetime

import psycopg2
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

MIGRATION_SQL = """
-- Re-point orders from duplicate customers to the oldest row per email
WITH ranked AS (
    SELECT id, email, MIN(id) OVER (PARTITION BY email) AS keep_id
    FROM customers
)
UPDATE orders o
SET customer_id = r.keep_id
FROM ranked r
WHERE o.customer_id = r.id AND r.id <> r.keep_id;

-- Drop the now unreferenced duplicates
DELETE FROM customers c
USING customers keep
WHERE c.email = keep.email AND c.id > keep.id;

CREATE UNIQUE INDEX IF NOT EXISTS ix_customers_email ON customers(email);

CREATE INDEX IF NOT EXISTS ix_orders_customer_id ON orders(customer_id);
CREATE INDEX IF NOT EXISTS ix_orders_created_at ON orders(created_at DESC);
CREATE INDEX IF NOT EXISTS ix_orders_status ON orders(order_status, payment_status);
CREATE INDEX IF NOT EXISTS ix_order_items_order_id ON order_items(order_id);
"""


def to_libpq_url(url: str) -> str:
    # SQLAlchemy URLs name the driver; libpq does not accept that part
    return url.replace("postgresql+psycopg2://", "postgresql://", 1)


def count_duplicate_emails(cursor) -> int:
    cursor.execute(
        "SELECT COUNT(*) FROM (SELECT email FROM customers GROUP BY email HAVING COUNT(*) > 1) d"
    )
    return cursor.fetchone()[0]


def run_migration() -> bool:
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("ERROR: DATABASE_URL not set (environment or .env)")
        return False
    if not database_url.startswith("postgresql"):
        print("Nothing to do: this migration only targets PostgreSQL")
        return True

    print("CUSTOMER EMAIL UNIQUENESS MIGRATION")
    print("=" * 60)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Database: {database_url.split('@')[-1] if '@' in database_url else 'localhost'}")

    conn = psycopg2.connect(to_libpq_url(database_url))
    try:
        with conn:
            with conn.cursor() as cursor:
                duplicates = count_duplicate_emails(cursor)
                print(f"Emails with duplicate customers: {duplicates}")

                cursor.execute(MIGRATION_SQL)

                remaining = count_duplicate_emails(cursor)
                if remaining:
                    raise RuntimeError(f"{remaining} duplicate emails remain after merge")
        print("Migration committed")
        return True
    except (psycopg2.Error, RuntimeError) as e:
        print(f"Migration rolled back: {e}")
        return False
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(0 if run_migration() else 1)
