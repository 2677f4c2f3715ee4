import os
import random
import sys
import time
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from db.connection import open_connection, close_connection  # noqa: E402
from db.init_db import create_tables  # noqa: E402
from models.parcel import Parcel, STATUS_REGISTERED, utc_timestamp  # noqa: E402
from repositories.parcel_repo import ParcelRepository  # noqa: E402

# Unique client ids across runs against the same database file
_rand = random.Random(time.monotonic_ns() ^ os.getpid())


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'tracker_test.db'}"


@pytest.fixture()
def conn(db_url):
    connection = open_connection(db_url)
    create_tables(connection)
    try:
        yield connection
    finally:
        close_connection(connection)


@pytest.fixture()
def repo(conn):
    return ParcelRepository(conn)


@pytest.fixture()
def random_client():
    return _rand.randrange(10_000_000)


def make_parcel(client: int = 1000, status: str = STATUS_REGISTERED, address: str = "test") -> Parcel:
    """Build an unsaved test parcel."""
    return Parcel(client=client, status=status, address=address, created_at=utc_timestamp())
