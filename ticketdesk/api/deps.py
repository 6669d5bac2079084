from functools import lru_cache

from ticketdesk.core.audit import EventLog
from ticketdesk.core.config import Settings, settings
from ticketdesk.core.dispatcher import EventDispatcher
from ticketdesk.core.line import LineMessagingClient
from ticketdesk.core.matcher import RecordMatcher
from ticketdesk.core.sheets import GspreadSheetsGateway, SheetsGateway
from ticketdesk.core.slip_verifier import SlipVerificationClient, SlipVerifier
from ticketdesk.db.session import Database
from ticketdesk.db.slips import SqliteSlipRepository
from ticketdesk.db.users import SqliteUserRepository

# Process-wide collaborators, built lazily from the settings object.
# Tests replace them through app.dependency_overrides.

def get_settings() -> Settings:
    return settings

@lru_cache
def get_database() -> Database:
    return Database(get_settings().DATABASE_PATH)

@lru_cache
def get_sheets_gateway() -> SheetsGateway:
    return GspreadSheetsGateway.from_settings(get_settings())

@lru_cache
def get_line_client() -> LineMessagingClient:
    return LineMessagingClient.from_settings(get_settings())

@lru_cache
def get_dispatcher() -> EventDispatcher:
    cfg = get_settings()
    gateway = get_sheets_gateway()
    return EventDispatcher(
        line=get_line_client(),
        matcher=RecordMatcher(gateway, cfg.MASTER_SHEET_ID, cfg.MASTER_SHEET_NAME),
        verifier=SlipVerifier(
            SlipVerificationClient.from_settings(cfg),
            SqliteSlipRepository(get_database()),
            cfg.SLIP_RECEIVER_PATTERNS,
            timezone_name=cfg.TIMEZONE,
        ),
        gateway=gateway,
        event_log=EventLog(gateway, cfg.LOG_SHEET_ID, cfg.LOG_SHEET_NAME, timezone_name=cfg.TIMEZONE),
        users=SqliteUserRepository(get_database()) if cfg.REGISTER_USERS else None,
        group_id=cfg.LINE_GROUP_ID,
        timezone_name=cfg.TIMEZONE,
        reply_usage_hint=cfg.REPLY_USAGE_HINT,
    )
