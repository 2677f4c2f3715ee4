"""
models/parcel.py
----------------
Domain model for tracked parcels.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

STATUS_REGISTERED = "registered"
STATUS_SENT = "sent"
STATUS_DELIVERED = "delivered"

PARCEL_STATUSES = (STATUS_REGISTERED, STATUS_SENT, STATUS_DELIVERED)


def utc_timestamp() -> str:
    """Current UTC time in RFC 3339 form, e.g. 2024-05-01T12:30:00Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class Parcel:
    """
    Represents a single shipped parcel.

    Attributes:
        client: Identifier of the owning client.
        status: One of 'registered', 'sent', 'delivered'.
        address: Free-form delivery address.
        created_at: Creation timestamp (RFC 3339, UTC).
        number: Database primary key (None for new records).
    """
    client: int
    address: str
    status: str = STATUS_REGISTERED  # 'registered' | 'sent' | 'delivered'
    created_at: str = field(default_factory=utc_timestamp)
    number: Optional[int] = None

    def is_registered(self) -> bool:
        """Returns True while the parcel can still be edited or deleted."""
        return self.status == STATUS_REGISTERED

    def __str__(self) -> str:
        return f"#{self.number} | client {self.client} | {self.status} | {self.address} | {self.created_at}"
