from abc import ABC, abstractmethod
from typing import Any, List, Optional
import json
import logging

import gspread
from gspread.exceptions import GSpreadException
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from ticketdesk.core.config import Settings
from ticketdesk.schemas.result import Ok, Err, ReadResult

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
VALUE_INPUT_OPTION = "USER_ENTERED"

def a1_range(sheet_title: str, cells: str) -> str:
    """Qualify a cell range with a quoted tab title, e.g. 'Round 1'!A2:E."""
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'!{cells}"

class SheetsGateway(ABC):
    """Spreadsheet access keyed by spreadsheet id and A1 range.

    Reads never raise: they return Ok(value) or Err(reason) so callers can
    skip a failing tab or table and carry on. Writes raise on failure.
    """

    @abstractmethod
    def worksheet_titles(self, spreadsheet_id: str) -> ReadResult:
        pass

    @abstractmethod
    def read_range(self, spreadsheet_id: str, a1: str) -> ReadResult:
        pass

    @abstractmethod
    def append_row(self, spreadsheet_id: str, range_name: str, values: List[Any]):
        pass

    @abstractmethod
    def update_cell(self, spreadsheet_id: str, a1: str, value: Any):
        pass

class GspreadSheetsGateway(SheetsGateway):
    def __init__(self, service_account_json: str):
        self._service_account_json = service_account_json
        self._client: Optional[gspread.Client] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GspreadSheetsGateway":
        return cls(settings.SERVICE_ACCOUNT_JSON)

    def _get_client(self) -> gspread.Client:
        if self._client is None:
            if not self._service_account_json:
                raise RuntimeError("SERVICE_ACCOUNT_JSON is not configured")
            info = json.loads(self._service_account_json)
            # Keys pasted into env vars usually carry literal "\n" sequences
            if "private_key" in info:
                info["private_key"] = info["private_key"].replace("\\n", "\n")
            creds = Credentials.from_service_account_info(info, scopes=SCOPES)
            self._client = gspread.authorize(creds)
        return self._client

    def _open(self, spreadsheet_id: str) -> gspread.Spreadsheet:
        return self._get_client().open_by_key(spreadsheet_id)

    def worksheet_titles(self, spreadsheet_id: str) -> ReadResult:
        try:
            titles = [ws.title for ws in self._open(spreadsheet_id).worksheets()]
        except (GSpreadException, GoogleAuthError, OSError, RuntimeError, ValueError) as e:
            return Err(reason=f"metadata read failed for {spreadsheet_id}: {e}")
        return Ok(value=titles)

    def read_range(self, spreadsheet_id: str, a1: str) -> ReadResult:
        try:
            response = self._open(spreadsheet_id).values_get(a1)
        except (GSpreadException, GoogleAuthError, OSError, RuntimeError, ValueError) as e:
            return Err(reason=f"range {a1} read failed for {spreadsheet_id}: {e}")
        return Ok(value=response.get("values", []))

    def append_row(self, spreadsheet_id: str, range_name: str, values: List[Any]):
        self._open(spreadsheet_id).values_append(
            range_name,
            params={"valueInputOption": VALUE_INPUT_OPTION},
            body={"values": [values]},
        )

    def update_cell(self, spreadsheet_id: str, a1: str, value: Any):
        self._open(spreadsheet_id).values_update(
            a1,
            params={"valueInputOption": VALUE_INPUT_OPTION},
            body={"values": [[value]]},
        )
