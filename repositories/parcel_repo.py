"""
repositories/parcel_repo.py
---------------------------
Data access layer for parcels.
All SQL queries related to the `parcel` table live here.

The repository works on an already-open connection owned by the caller.
Queries are written with ``%s`` placeholders (psycopg2 style) and rewritten
to ``?`` for SQLite. Every call ends its own transaction: writes commit,
reads commit on PostgreSQL, and any failure rolls back.
"""

from contextlib import closing

from db.connection import is_sqlite
from models.parcel import Parcel, PARCEL_STATUSES, STATUS_REGISTERED
from repositories.errors import ParcelNotFoundError, WrongStatusError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "number, client, status, address, created_at"


class ParcelRepository:
    """Repository for CRUD operations on the parcel table."""

    def __init__(self, conn):
        self.conn = conn
        self._sqlite = is_sqlite(conn)

    # ── CREATE ────────────────────────────────────────────

    def add(self, parcel: Parcel) -> int:
        """
        Insert a new parcel record.

        Args:
            parcel: The Parcel to persist (its `number` is ignored).

        Returns:
            The number assigned by the database.
        """
        sql = """
            INSERT INTO parcel (client, status, address, created_at)
            VALUES (%s, %s, %s, %s)
        """
        params = (parcel.client, parcel.status, parcel.address, parcel.created_at)
        try:
            with closing(self.conn.cursor()) as cur:
                if self._sqlite:
                    cur.execute(self._sql(sql), params)
                    number = cur.lastrowid
                else:
                    cur.execute(sql + " RETURNING number;", params)
                    number = cur.fetchone()[0]
            self.conn.commit()
        except Exception as e:
            self._rollback("add")
            logger.error(f"add: failed to insert parcel for client {parcel.client}: {e}")
            raise
        logger.info(f"Added parcel #{number} for client {parcel.client}")
        return int(number)

    # ── READ ──────────────────────────────────────────────

    def get(self, number: int) -> Parcel:
        """
        Fetch a single parcel by its number.

        Raises:
            ParcelNotFoundError: If no parcel has this number.
        """
        sql = f"SELECT {_COLUMNS} FROM parcel WHERE number = %s;"
        try:
            with closing(self.conn.cursor()) as cur:
                cur.execute(self._sql(sql), (number,))
                row = cur.fetchone()
            self._end_read()
        except Exception as e:
            self._rollback("get")
            logger.error(f"get: failed to fetch parcel #{number}: {e}")
            raise
        if row is None:
            logger.warning(f"get: parcel #{number} not found")
            raise ParcelNotFoundError(number)
        parcel = self._row_to_parcel(row)
        logger.debug(f"get: {parcel}")
        return parcel

    def get_by_client(self, client: int) -> list[Parcel]:
        """
        Fetch all parcels owned by a client.

        The order of the result is whatever the database returns.
        An unknown client yields an empty list.
        """
        sql = f"SELECT {_COLUMNS} FROM parcel WHERE client = %s;"
        try:
            with closing(self.conn.cursor()) as cur:
                cur.execute(self._sql(sql), (client,))
                rows = cur.fetchall()
            self._end_read()
        except Exception as e:
            self._rollback("get_by_client")
            logger.error(f"get_by_client: failed to fetch parcels of client {client}: {e}")
            raise
        return [self._row_to_parcel(r) for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    def set_status(self, number: int, status: str) -> None:
        """
        Overwrite the status of a parcel.

        Any value is accepted and any transition is allowed.
        """
        if status not in PARCEL_STATUSES:
            logger.warning(f"set_status: parcel #{number} gets unknown status '{status}'")
        sql = "UPDATE parcel SET status = %s WHERE number = %s;"
        updated = self._write("set_status", number, sql, (status, number))
        if updated:
            logger.info(f"Parcel #{number} status set to '{status}'")
        else:
            logger.warning(f"set_status: parcel #{number} does not exist, nothing updated")

    def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a registered parcel.

        Raises:
            ParcelNotFoundError: If no parcel has this number.
            WrongStatusError: If the parcel is no longer registered.
        """
        sql = "UPDATE parcel SET address = %s WHERE number = %s AND status = %s;"
        if not self._write("set_address", number, sql, (address, number, STATUS_REGISTERED)):
            self._raise_not_modifiable("set_address", number)
        logger.info(f"Parcel #{number} address changed")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, number: int) -> None:
        """
        Delete a registered parcel.

        Raises:
            ParcelNotFoundError: If no parcel has this number.
            WrongStatusError: If the parcel is no longer registered.
        """
        sql = "DELETE FROM parcel WHERE number = %s AND status = %s;"
        if not self._write("delete", number, sql, (number, STATUS_REGISTERED)):
            self._raise_not_modifiable("delete", number)
        logger.info(f"Deleted parcel #{number}")

    # ── HELPERS ───────────────────────────────────────────

    def _sql(self, sql: str) -> str:
        return sql.replace("%s", "?") if self._sqlite else sql

    def _end_read(self) -> None:
        # psycopg2 opens a transaction on the first SELECT
        if not self._sqlite:
            self.conn.commit()

    def _rollback(self, op: str) -> None:
        """Roll back after a failed statement without masking the original error."""
        try:
            self.conn.rollback()
        except Exception as e:
            logger.error(f"{op}: rollback failed: {e}")

    def _write(self, op: str, number: int, sql: str, params: tuple) -> bool:
        """Run a single UPDATE/DELETE and commit. Returns True if a row was affected."""
        try:
            with closing(self.conn.cursor()) as cur:
                cur.execute(self._sql(sql), params)
                affected = cur.rowcount > 0
            self.conn.commit()
            return affected
        except Exception as e:
            self._rollback(op)
            logger.error(f"{op}: failed on parcel #{number}: {e}")
            raise

    def _raise_not_modifiable(self, op: str, number: int) -> None:
        """
        Explain why a status-guarded write touched no row.

        Raises ParcelNotFoundError when the row is missing,
        WrongStatusError when it exists but is not registered.
        A parcel set back to 'registered' between the guarded write and
        this read still raises WrongStatusError: the write was refused.
        """
        try:
            current = self.get(number)
        except ParcelNotFoundError:
            logger.warning(f"{op}: parcel #{number} not found")
            raise
        if current.is_registered():
            logger.warning(f"{op}: parcel #{number} status changed concurrently, change refused")
        else:
            logger.warning(f"{op}: parcel #{number} has status '{current.status}', change refused")
        raise WrongStatusError(number, current.status)

    @staticmethod
    def _row_to_parcel(row: tuple) -> Parcel:
        """Convert a database row tuple to a Parcel domain object."""
        return Parcel(
            number=row[0],
            client=row[1],
            status=row[2],
            address=row[3],
            created_at=row[4],
        )
