"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from contextlib import closing

from db.connection import is_sqlite
from utils.logger import get_logger

logger = get_logger(__name__)

# Parcels table: one row per tracked shipment
SQLITE_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS parcel (
        number      INTEGER PRIMARY KEY AUTOINCREMENT,
        client      INTEGER,
        status      TEXT,
        address     TEXT,
        created_at  TEXT
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_parcel_client ON parcel(client);",
)

POSTGRES_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS parcel (
        number      SERIAL PRIMARY KEY,
        client      INTEGER,
        status      TEXT,
        address     TEXT,
        created_at  TEXT
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_parcel_client ON parcel(client);",
)


def create_tables(conn) -> None:
    """
    Execute the schema SQL to create the parcel table.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: An open sqlite3 or psycopg2 connection.
    """
    statements = SQLITE_SCHEMA if is_sqlite(conn) else POSTGRES_SCHEMA
    try:
        with closing(conn.cursor()) as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import open_connection, close_connection
    connection = open_connection()
    try:
        create_tables(connection)
    finally:
        close_connection(connection)
    print("Database schema created successfully.")
