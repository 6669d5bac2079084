# SQLite connection handling for the local idempotency and user tables.
# No ORM: the two tables are small and written with plain SQL.

from contextlib import contextmanager
from pathlib import Path
import logging
import sqlite3

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS slips (
    transaction_reference TEXT PRIMARY KEY,
    amount REAL,
    slip_date TEXT,
    sender_bank TEXT,
    sender_account TEXT,
    receiver_bank TEXT,
    receiver_account TEXT,
    receiver_name TEXT,
    payload TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS line_users (
    user_id TEXT PRIMARY KEY,
    display_name TEXT,
    picture_url TEXT,
    status_message TEXT,
    registered_at TEXT NOT NULL
);
"""

class Database:
    def __init__(self, path: str):
        self.path = path
        self._schema_ready = False

    @contextmanager
    def connection(self):
        """One connection per unit of work; commits on success."""
        if not self._schema_ready:
            self.init_schema()
        conn = sqlite3.connect(self.path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_schema(self):
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            conn.close()
        self._schema_ready = True
        logger.info(f"Database ready at {self.path}")
