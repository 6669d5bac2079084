from typing import Iterable, Optional
from zoneinfo import ZoneInfo
import logging
import re

from ticketdesk.core import messages
from ticketdesk.core.audit import EventLog
from ticketdesk.core.clock import thai_timestamp
from ticketdesk.core.line import LineMessagingClient
from ticketdesk.core.matcher import RecordMatcher
from ticketdesk.core.sheets import SheetsGateway
from ticketdesk.core.slip_verifier import SlipVerifier
from ticketdesk.db.users import UserRepository
from ticketdesk.schemas.booking import COL_ROUND, or_dash
from ticketdesk.schemas.line import WebhookEvent

logger = logging.getLogger(__name__)

ONBOARDING_PATTERN = re.compile(r"สนใจ\s*(สอบถาม|ติดต่อ)?\s*และ\s*จ้าง\s*กดบัตร(ค่ะ|ครับ)?", re.IGNORECASE)
STOP_PATTERN = re.compile(r"หยุดกดได้เลย", re.IGNORECASE)
CUSTOMER_ID_COMMAND = "ขอรหัสลูกค้า"
SEARCH_PREFIX = "ค้นหา"
SEARCH_PATTERN = re.compile(r"^ค้นหา\s+(.+?)(?:\s+ใน\s+(.+))?$")
SEAT_PREFIX = "เช็คที่นั่ง"
SEAT_PATTERN = re.compile(r"^เช็คที่นั่ง\s+(\S+)\s+ใน\s+(.+)$")

class EventDispatcher:
    """
    Routes LINE webhook events to the matcher and the slip verifier.

    Events are handled one after another. Each event is isolated: any error
    is logged and answered with a generic apology, and the next event runs.
    """

    def __init__(
        self,
        line: LineMessagingClient,
        matcher: RecordMatcher,
        verifier: SlipVerifier,
        gateway: SheetsGateway,
        event_log: EventLog,
        users: Optional[UserRepository] = None,
        group_id: str = "",
        timezone_name: str = "Asia/Bangkok",
        reply_usage_hint: bool = False,
    ):
        self.line = line
        self.matcher = matcher
        self.verifier = verifier
        self.gateway = gateway
        self.event_log = event_log
        self.users = users
        self.group_id = group_id
        self.tz = ZoneInfo(timezone_name)
        self.reply_usage_hint = reply_usage_hint

    def dispatch(self, events: Iterable[WebhookEvent]):
        for event in events:
            self.handle(event)

    def handle(self, event: WebhookEvent):
        self._register_user(event.source.user_id)
        try:
            if event.type == "join":
                self._reply(event, messages.JOIN_GREETING)
            elif event.type == "message" and event.message is not None:
                if event.message.type == "text":
                    self.handle_text(event)
                elif event.message.type == "image":
                    self.handle_image(event)
        except Exception:
            logger.exception(f"Event handling failed ({event.type})")
            failure = messages.SLIP_FAILED if self._is_image(event) else messages.GENERIC_FAILURE
            self._reply_quietly(event, failure)

    @staticmethod
    def _is_image(event: WebhookEvent) -> bool:
        return event.message is not None and event.message.type == "image"

    def _reply(self, event: WebhookEvent, text: str):
        if not event.reply_token:
            logger.warning(f"No reply token on {event.type} event, reply dropped")
            return
        self.line.reply(event.reply_token, text)

    def _reply_quietly(self, event: WebhookEvent, text: str):
        try:
            self._reply(event, text)
        except Exception:
            logger.exception("Failure reply could not be sent")

    def _register_user(self, user_id: Optional[str]):
        if not user_id or self.users is None:
            return
        try:
            if self.users.exists(user_id):
                return
            profile = self.line.get_profile(user_id)
            if profile and self.users.add_if_absent(profile):
                logger.info(f"Registered new LINE user: {profile.display_name}")
        except Exception:
            logger.exception(f"User registration failed for {user_id}")

    def handle_text(self, event: WebhookEvent):
        text = (event.message.text or "").strip()
        user_id = event.source.user_id

        if ONBOARDING_PATTERN.search(text):
            self._reply(event, messages.ONBOARDING_GUIDE)
        elif STOP_PATTERN.search(text):
            self.handle_stop(event, user_id)
        elif text == CUSTOMER_ID_COMMAND:
            self._reply(event, messages.CUSTOMER_ID.format(user_id=user_id))
        elif text.startswith(SEAT_PREFIX):
            match = SEAT_PATTERN.match(text)
            if match:
                self._reply(event, self.matcher.lookup_uid(match.group(1), match.group(2)))
            else:
                self._reply(event, self.matcher.lookup_uid(None, None))
        elif text.startswith(SEARCH_PREFIX):
            match = SEARCH_PATTERN.match(text)
            if not match:
                self._reply(event, messages.SEARCH_USAGE)
                return
            keyword = match.group(1).strip()
            target = match.group(2).strip() if match.group(2) else None
            self._reply(event, self.matcher.search(keyword, target))
        elif self.reply_usage_hint:
            self._reply(event, messages.SEARCH_USAGE)

    def handle_stop(self, event: WebhookEvent, user_id: Optional[str]):
        logger.info(f"User {user_id} asked to stop")
        hit = self.matcher.find_customer_row(user_id)
        if hit is None:
            self._reply(event, messages.STOP_NOT_FOUND)
            return

        logger.info(f"Found {user_id} in {hit.concert_name}, row {hit.row_number}")
        self.gateway.update_cell(hit.spreadsheet_id, hit.stop_flag_cell, True)

        round_date = or_dash(hit.row.cell(COL_ROUND))
        notice = messages.STOP_GROUP_NOTICE.format(
            concert=hit.concert_name,
            queue=or_dash(hit.row.order),
            round=round_date,
            uid=user_id,
            operator=messages.STOP_OPERATOR,
            notified_at=thai_timestamp(self.tz),
        )
        # The flag is already written; the log row and the confirmation still follow
        if self.group_id:
            try:
                self.line.push(self.group_id, notice)
            except Exception:
                logger.exception(f"Operator notice for {user_id} could not be pushed")
        else:
            logger.warning("LINE_GROUP_ID not set, operator notice not sent")

        self.event_log.record(
            f"หยุดกด (ลูกค้าได้บัตรเอง) - {hit.concert_name} / รอบ: {round_date}",
            "Customer",
            customer_uid=user_id,
        )
        self._reply(event, messages.STOP_CONFIRMED.format(concert=hit.concert_name))

    def handle_image(self, event: WebhookEvent):
        image = self.line.get_message_content(event.message.id)
        verdict = self.verifier.verify_image(image)
        if verdict.reply_text:
            self._reply(event, verdict.reply_text)
