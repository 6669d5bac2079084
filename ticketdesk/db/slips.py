from abc import ABC, abstractmethod
from typing import Dict, Optional
import json
import logging
import sqlite3
import threading

from ticketdesk.db.session import Database
from ticketdesk.schemas.slip import SlipRecord

logger = logging.getLogger(__name__)

class SlipRepository(ABC):
    """Idempotency records keyed by transaction reference. Never updated or deleted."""

    @abstractmethod
    def get(self, transaction_reference: str) -> Optional[SlipRecord]:
        pass

    @abstractmethod
    def put_if_absent(self, record: SlipRecord) -> bool:
        """Store record unless its reference exists. True when this call wrote it."""
        pass

    def exists(self, transaction_reference: str) -> bool:
        return self.get(transaction_reference) is not None

class InMemorySlipRepository(SlipRepository):
    def __init__(self):
        self._storage: Dict[str, SlipRecord] = {}
        self._lock = threading.Lock()

    def get(self, transaction_reference: str) -> Optional[SlipRecord]:
        return self._storage.get(transaction_reference)

    def put_if_absent(self, record: SlipRecord) -> bool:
        with self._lock:
            if record.transaction_reference in self._storage:
                return False
            self._storage[record.transaction_reference] = record
            return True

class SqliteSlipRepository(SlipRepository):
    def __init__(self, db: Database):
        self.db = db

    def get(self, transaction_reference: str) -> Optional[SlipRecord]:
        with self.db.connection() as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM slips WHERE transaction_reference = ?",
                (transaction_reference,),
            ).fetchone()
        if row is None:
            return None
        return SlipRecord(
            transaction_reference=row["transaction_reference"],
            amount=row["amount"],
            date=row["slip_date"],
            sender_bank=row["sender_bank"],
            sender_account=row["sender_account"],
            receiver_bank=row["receiver_bank"],
            receiver_account=row["receiver_account"],
            receiver_name=row["receiver_name"],
            payload=json.loads(row["payload"]),
            created_at=row["created_at"],
        )

    def put_if_absent(self, record: SlipRecord) -> bool:
        # The primary key makes INSERT OR IGNORE an atomic create-if-absent
        with self.db.connection() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO slips (transaction_reference, amount, slip_date, sender_bank, "
                "sender_account, receiver_bank, receiver_account, receiver_name, payload, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.transaction_reference,
                    record.amount,
                    record.date.isoformat() if record.date else None,
                    record.sender_bank,
                    record.sender_account,
                    record.receiver_bank,
                    record.receiver_account,
                    record.receiver_name,
                    json.dumps(record.payload, ensure_ascii=False, default=str),
                    record.created_at.isoformat(),
                ),
            )
            written = cursor.rowcount == 1
        if not written:
            logger.info(f"Slip {record.transaction_reference} already recorded, not overwritten")
        return written
