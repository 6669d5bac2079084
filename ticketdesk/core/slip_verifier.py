from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo
import logging
import re

import httpx
from pydantic import ValidationError

from ticketdesk.core import messages
from ticketdesk.core.clock import thai_date, thai_time
from ticketdesk.core.config import Settings
from ticketdesk.db.slips import SlipRepository
from ticketdesk.schemas.slip import SlipData, SlipPayload, SlipRecord, SlipState, SlipVerdict

logger = logging.getLogger(__name__)

class SlipVerificationClient:
    """Posts a slip image to the verification API and returns its JSON body."""

    def __init__(self, api_url: str, api_key: str, timeout: float = 30.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self.api_url = api_url
        self._http = httpx.Client(
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlipVerificationClient":
        return cls(settings.SLIP_API_URL, settings.SLIP_API_KEY, timeout=settings.HTTP_TIMEOUT)

    def verify(self, image: bytes) -> Optional[Dict[str, Any]]:
        response = self._http.post(
            self.api_url,
            files={"file": ("slip.jpg", image, "image/jpeg")},
        )
        if response.is_error:
            logger.info(f"Verification API answered {response.status_code}")
            return None
        try:
            return response.json()
        except ValueError:
            logger.info("Verification API answered with a non-JSON body")
            return None

def compile_receiver_pattern(patterns: List[str]) -> re.Pattern:
    return re.compile("|".join(f"(?:{p})" for p in patterns), re.IGNORECASE)

class SlipVerifier:
    """
    One verification attempt:

        RECEIVED -> SENT_TO_VERIFIER -> REJECTED_NOT_A_SLIP
                                     -> VERIFIED -> DUPLICATE | RECEIVER_MISMATCH | ACCEPTED

    Only ACCEPTED writes a record. A mismatched receiver leaves no trace so a
    corrected resubmission with the same reference is not blocked.
    Non-slip images are answered with silence (reply_text is None).
    """

    def __init__(
        self,
        client: SlipVerificationClient,
        repository: SlipRepository,
        receiver_patterns: List[str],
        timezone_name: str = "Asia/Bangkok",
    ):
        self.client = client
        self.repository = repository
        self.receiver_pattern = compile_receiver_pattern(receiver_patterns)
        self.tz = ZoneInfo(timezone_name)

    def verify_image(self, image: bytes) -> SlipVerdict:
        logger.debug(f"Slip {SlipState.SENT_TO_VERIFIER.value}: {len(image)} bytes")
        return self.evaluate(self.client.verify(image))

    def evaluate(self, raw: Optional[Dict[str, Any]]) -> SlipVerdict:
        data = self._verified_data(raw)
        if data is None:
            logger.info("Skipping image that is not a slip")
            return SlipVerdict(state=SlipState.REJECTED_NOT_A_SLIP)

        reference = data.trans_ref.strip()
        if self.repository.exists(reference):
            logger.info(f"Duplicate slip {reference}")
            return SlipVerdict(state=SlipState.DUPLICATE, transaction_reference=reference,
                               reply_text=messages.SLIP_DUPLICATE)

        receiver_name = self._receiver_name(data)
        if receiver_name is None:
            names = data.receiver.account.name
            logger.warning(f"Slip {reference} paid to unexpected receiver: {names.th or names.en}")
            return SlipVerdict(state=SlipState.RECEIVER_MISMATCH, transaction_reference=reference,
                               reply_text=messages.SLIP_RECEIVER_MISMATCH)

        record = SlipRecord(
            transaction_reference=reference,
            amount=data.amount.amount,
            date=data.date,
            sender_bank=data.sender.bank_label,
            sender_account=data.sender.account_number,
            receiver_bank=data.receiver.bank_label,
            receiver_account=data.receiver.account_number,
            receiver_name=receiver_name,
            payload=raw,
        )
        if not self.repository.put_if_absent(record):
            # Another submission of the same reference was stored first
            return SlipVerdict(state=SlipState.DUPLICATE, transaction_reference=reference,
                               reply_text=messages.SLIP_DUPLICATE)

        logger.info(f"Slip {reference} accepted, amount {record.amount}")
        return SlipVerdict(state=SlipState.ACCEPTED, transaction_reference=reference,
                           reply_text=self.format_confirmation(record), record=record)

    @staticmethod
    def _verified_data(raw: Optional[Dict[str, Any]]) -> Optional[SlipData]:
        if not isinstance(raw, dict):
            return None
        try:
            payload = SlipPayload.model_validate(raw)
        except ValidationError as e:
            logger.info(f"Unreadable verification payload: {e.error_count()} errors")
            return None
        if payload.status != 200 or payload.data is None:
            return None
        if not payload.data.trans_ref or not payload.data.trans_ref.strip():
            return None
        return payload.data

    def _receiver_name(self, data: SlipData) -> Optional[str]:
        names = data.receiver.account.name
        for candidate in (names.th, names.en):
            if candidate and self.receiver_pattern.search(candidate):
                return candidate
        return None

    def format_confirmation(self, record: SlipRecord) -> str:
        date_text, time_text = "-", "-"
        if record.date is not None:
            moment = record.date
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=self.tz)
            moment = moment.astimezone(self.tz)
            date_text = thai_date(moment)
            time_text = thai_time(moment)
        amount = f"{record.amount:,.2f}" if record.amount is not None else "-"
        return messages.SLIP_ACCEPTED.format(
            date=date_text,
            time=time_text,
            amount=amount,
            sender_bank=record.sender_bank,
            sender_account=record.sender_account,
        )
