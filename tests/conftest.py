import copy
import pytest
from typing import Any, Dict, List, Optional

from ticketdesk.core.audit import EventLog
from ticketdesk.core.dispatcher import EventDispatcher
from ticketdesk.core.line import LineApiError
from ticketdesk.core.matcher import RecordMatcher
from ticketdesk.core.sheets import SheetsGateway
from ticketdesk.core.slip_verifier import SlipVerifier
from ticketdesk.db.slips import InMemorySlipRepository
from ticketdesk.db.users import InMemoryUserRepository
from ticketdesk.schemas.line import UserProfile
from ticketdesk.schemas.result import Ok, Err

MASTER_ID = "master"
LOG_ID = "logbook"
GROUP_ID = "Cgroup"
RECEIVER_PATTERNS = [r"บจก\.\s*โยเย\s*ม", r"YOYE\s*MUETHONG\s*CO\.,?LTD\.?"]

class FakeSheets(SheetsGateway):
    """Spreadsheets as {spreadsheet_id: {tab_title: rows}}; rows exclude the header."""

    def __init__(self, books: Dict[str, Dict[str, List[List[Any]]]]):
        self.books = books
        self.failing_ids = set()
        self.failing_ranges = set()
        self.appended: List[tuple] = []
        self.updated: List[tuple] = []

    def worksheet_titles(self, spreadsheet_id):
        if spreadsheet_id in self.failing_ids or spreadsheet_id not in self.books:
            return Err(reason=f"cannot open {spreadsheet_id}")
        return Ok(value=list(self.books[spreadsheet_id].keys()))

    def read_range(self, spreadsheet_id, a1):
        if spreadsheet_id in self.failing_ids or spreadsheet_id not in self.books:
            return Err(reason=f"cannot open {spreadsheet_id}")
        if (spreadsheet_id, a1) in self.failing_ranges:
            return Err(reason=f"cannot read {a1}")
        tabs = self.books[spreadsheet_id]
        if "!" in a1:
            title = a1.rsplit("!", 1)[0]
            if title.startswith("'") and title.endswith("'"):
                title = title[1:-1].replace("''", "'")
        else:
            title = next(iter(tabs))
        if title not in tabs:
            return Err(reason=f"no tab {title}")
        return Ok(value=copy.deepcopy(tabs[title]))

    def append_row(self, spreadsheet_id, range_name, values):
        self.appended.append((spreadsheet_id, range_name, values))

    def update_cell(self, spreadsheet_id, a1, value):
        self.updated.append((spreadsheet_id, a1, value))

class FakeLine:
    def __init__(self):
        self.replies: List[tuple] = []
        self.pushes: List[tuple] = []
        self.contents: Dict[str, bytes] = {}
        self.profiles: Dict[str, UserProfile] = {}
        self.fail_push = False

    def reply(self, reply_token, text):
        self.replies.append((reply_token, text))

    def push(self, to, text):
        if self.fail_push:
            raise LineApiError(400, "invalid to")
        self.pushes.append((to, text))

    def get_message_content(self, message_id):
        return self.contents.get(message_id, b"\xff\xd8fake-jpeg")

    def get_profile(self, user_id):
        return self.profiles.get(user_id)

class FakeSlipClient:
    def __init__(self, payload: Optional[dict] = None):
        self.payload = payload
        self.calls = 0

    def verify(self, image):
        self.calls += 1
        return self.payload

def make_slip(trans_ref="TX-0001", receiver_th="บจก. โยเย มือทอง", receiver_en="YOYE MUETHONG CO.,LTD.",
              amount=1500.0, date="2024-01-15T07:30:00Z", status=200) -> dict:
    return {
        "status": status,
        "data": {
            "transRef": trans_ref,
            "date": date,
            "amount": {"amount": amount},
            "sender": {
                "bank": {"id": "004", "name": "Kasikorn Bank", "short": "KBANK"},
                "account": {"name": {"th": "นาย ลูกค้า"}, "bank": {"type": "BANKAC", "account": "xxx-x-x1234-x"}},
            },
            "receiver": {
                "bank": {"id": "014", "short": "SCB"},
                "account": {"name": {"th": receiver_th, "en": receiver_en}, "proxy": {"type": "MSISDN", "account": "xxx-xxx-9999"}},
            },
        },
    }

def text_event(text, user_id="Uabc", reply_token="rt-1") -> dict:
    return {
        "type": "message",
        "replyToken": reply_token,
        "source": {"type": "user", "userId": user_id},
        "message": {"id": "m-1", "type": "text", "text": text},
    }

def image_event(message_id="img-1", user_id="Uabc", reply_token="rt-img") -> dict:
    return {
        "type": "message",
        "replyToken": reply_token,
        "source": {"type": "user", "userId": user_id},
        "message": {"id": message_id, "type": "image"},
    }

@pytest.fixture
def sheets():
    return FakeSheets({
        MASTER_ID: {"index": [
            ["ConcertA", "sheet123"],
            ["  Blackpink2025 ", " sheet456 "],
        ]},
        "sheet123": {
            "Round 1": [
                [1, "", "Jane", "0810000000", "Uabc", "", "20 Dec", 2, 3500, "", "", "A1 12-13", "https://order/1"],
                [7, "", "Somchai", "0899999999", "Uxyz", "", "21 Dec", 1, 4500],
            ],
        },
        "sheet456": {
            "Day 1": [
                [1, "", "Mali", "0822222222", "Umali", "", "5 Jan", 4, 2900, "", "", "B2 1-4", ""],
            ],
            "Day 2": [
                [3, "", "Jane Doe", "0833333333", "Ujd"],
            ],
        },
    })

@pytest.fixture
def matcher(sheets):
    return RecordMatcher(sheets, MASTER_ID, "index")

@pytest.fixture
def slip_repo():
    return InMemorySlipRepository()

@pytest.fixture
def slip_client():
    return FakeSlipClient(make_slip())

@pytest.fixture
def verifier(slip_client, slip_repo):
    return SlipVerifier(slip_client, slip_repo, RECEIVER_PATTERNS, timezone_name="Asia/Bangkok")

@pytest.fixture
def line():
    return FakeLine()

@pytest.fixture
def users():
    return InMemoryUserRepository()

@pytest.fixture
def dispatcher(line, matcher, verifier, sheets, users):
    return EventDispatcher(
        line=line,
        matcher=matcher,
        verifier=verifier,
        gateway=sheets,
        event_log=EventLog(sheets, LOG_ID, "Logs"),
        users=users,
        group_id=GROUP_ID,
    )
