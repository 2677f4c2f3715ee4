"""
repositories/errors.py
----------------------
Domain errors raised by the repositories.
Driver errors (sqlite3.Error, psycopg2.Error) are never wrapped in these.
"""


class ParcelError(Exception):
    """Base class for parcel domain errors."""


class ParcelNotFoundError(ParcelError, LookupError):
    """Raised when no parcel exists with the given number."""

    def __init__(self, number: int):
        super().__init__(f"parcel #{number} not found")
        self.number = number


class WrongStatusError(ParcelError):
    """Raised when a change is attempted on a parcel that is no longer registered."""

    def __init__(self, number: int, status: str):
        super().__init__(
            f"parcel #{number} was not registered when the change was attempted (status now '{status}')"
        )
        self.number = number
        self.status = status
