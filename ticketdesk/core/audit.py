from abc import ABC, abstractmethod
from typing import List
from zoneinfo import ZoneInfo
import logging

from ticketdesk.core.clock import thai_timestamp
from ticketdesk.core.sheets import SheetsGateway
from ticketdesk.schemas.audit import AuditLogEntry

logger = logging.getLogger(__name__)

class AuditRepository(ABC):
    @abstractmethod
    def save(self, entry: AuditLogEntry):
        pass

    @abstractmethod
    def get_all(self) -> List[AuditLogEntry]:
        pass

class InMemoryAuditRepository(AuditRepository):
    def __init__(self):
        self._storage: List[AuditLogEntry] = []

    def save(self, entry: AuditLogEntry):
        self._storage.append(entry)
        logger.debug(f"Audit Logged: {entry.model_dump_json()}")

    def get_all(self) -> List[AuditLogEntry]:
        return list(self._storage)

    def clear(self):
        self._storage.clear()

# Global Accessor
audit_repo = InMemoryAuditRepository()

class EventLog:
    """Operator-facing activity log kept as rows of a spreadsheet tab."""

    def __init__(self, gateway: SheetsGateway, spreadsheet_id: str, sheet_name: str, timezone_name: str = "Asia/Bangkok"):
        self.gateway = gateway
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self.tz = ZoneInfo(timezone_name)

    def record(self, event_name: str, role: str, email: str = "-", name: str = "-",
               admin_uid: str = "-", customer_uid: str = "-") -> bool:
        row = [thai_timestamp(self.tz), event_name, role, email, name, admin_uid, customer_uid]
        try:
            self.gateway.append_row(self.spreadsheet_id, self.sheet_name, row)
        except Exception as e:
            logger.error(f"Event Logging Failed: {e}")
            return False
        logger.info(f"Event logged: {event_name}")
        return True
