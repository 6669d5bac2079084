from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Ticketdesk LINE Webhook"
    LOG_LEVEL: str = "INFO"

    # LINE Messaging API
    LINE_ACCESS_TOKEN: str = ""
    LINE_API_BASE: str = "https://api.line.me/v2/bot"
    LINE_DATA_API_BASE: str = "https://api-data.line.me/v2/bot"
    LINE_GROUP_ID: str = ""

    # Slip verification service
    SLIP_API_KEY: str = ""
    SLIP_API_URL: str = "https://api.thunder.in.th/v1/verify"
    SLIP_RECEIVER_PATTERNS: List[str] = [
        r"บจก\.\s*โยเย\s*ม",
        r"YOYE\s*MUETHONG\s*CO\.,?LTD\.?",
    ]

    # Google Sheets
    SERVICE_ACCOUNT_JSON: str = ""
    MASTER_SHEET_ID: str = ""
    MASTER_SHEET_NAME: str = "index"
    LOG_SHEET_ID: str = ""
    LOG_SHEET_NAME: str = "Logs"

    # Local persistence (slip idempotency, user registry)
    DATABASE_PATH: str = "./data/ticketdesk.db"

    TIMEZONE: str = "Asia/Bangkok"
    HTTP_TIMEOUT: float = 30.0

    # Behaviour switches
    REPLY_USAGE_HINT: bool = False
    REGISTER_USERS: bool = True

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    @field_validator("SLIP_RECEIVER_PATTERNS")
    @classmethod
    def patterns_compile(cls, patterns: List[str]) -> List[str]:
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid receiver pattern {pattern!r}: {e}")
        return patterns

    @field_validator("TIMEZONE")
    @classmethod
    def timezone_exists(cls, name: str) -> str:
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {name!r}: {e}")
        return name

settings = Settings()
