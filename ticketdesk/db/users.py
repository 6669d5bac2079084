from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict
import threading

from ticketdesk.db.session import Database
from ticketdesk.schemas.line import UserProfile

class UserRepository(ABC):
    @abstractmethod
    def exists(self, user_id: str) -> bool:
        pass

    @abstractmethod
    def add_if_absent(self, profile: UserProfile) -> bool:
        pass

class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._storage: Dict[str, UserProfile] = {}
        self._lock = threading.Lock()

    def exists(self, user_id: str) -> bool:
        return user_id in self._storage

    def add_if_absent(self, profile: UserProfile) -> bool:
        with self._lock:
            if profile.user_id in self._storage:
                return False
            self._storage[profile.user_id] = profile
            return True

class SqliteUserRepository(UserRepository):
    def __init__(self, db: Database):
        self.db = db

    def exists(self, user_id: str) -> bool:
        with self.db.connection() as conn:
            row = conn.execute("SELECT 1 FROM line_users WHERE user_id = ?", (user_id,)).fetchone()
        return row is not None

    def add_if_absent(self, profile: UserProfile) -> bool:
        with self.db.connection() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO line_users (user_id, display_name, picture_url, status_message, registered_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    profile.user_id,
                    profile.display_name,
                    profile.picture_url,
                    profile.status_message,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            return cursor.rowcount == 1
