from typing import Any, Dict, List, Optional
import logging

import httpx

from ticketdesk.core.config import Settings
from ticketdesk.schemas.line import UserProfile

logger = logging.getLogger(__name__)

# LINE rejects text messages above 5000 characters and more than 5 messages per call
MAX_TEXT_LENGTH = 5000
MAX_MESSAGES = 5

class LineApiError(Exception):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"LINE API returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body

def text_messages(text: str) -> List[Dict[str, str]]:
    chunks = [text[i:i + MAX_TEXT_LENGTH] for i in range(0, len(text), MAX_TEXT_LENGTH)] or [""]
    if len(chunks) > MAX_MESSAGES:
        logger.warning(f"Reply of {len(text)} chars truncated to {MAX_MESSAGES} messages")
        chunks = chunks[:MAX_MESSAGES]
    return [{"type": "text", "text": chunk} for chunk in chunks]

class LineMessagingClient:
    def __init__(self, access_token: str, api_base: str, data_api_base: str, timeout: float = 30.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self.api_base = api_base.rstrip("/")
        self.data_api_base = data_api_base.rstrip("/")
        self._http = httpx.Client(
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LineMessagingClient":
        return cls(
            settings.LINE_ACCESS_TOKEN,
            settings.LINE_API_BASE,
            settings.LINE_DATA_API_BASE,
            timeout=settings.HTTP_TIMEOUT,
        )

    def _post(self, path: str, payload: Dict[str, Any]):
        response = self._http.post(f"{self.api_base}{path}", json=payload)
        if response.is_error:
            raise LineApiError(response.status_code, response.text)

    def reply(self, reply_token: str, text: str):
        self._post("/message/reply", {"replyToken": reply_token, "messages": text_messages(text)})

    def push(self, to: str, text: str):
        self._post("/message/push", {"to": to, "messages": text_messages(text)})
        logger.info(f"Pushed message to {to}")

    def get_message_content(self, message_id: str) -> bytes:
        response = self._http.get(f"{self.data_api_base}/message/{message_id}/content")
        if response.is_error:
            raise LineApiError(response.status_code, response.text)
        return response.content

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            response = self._http.get(f"{self.api_base}/profile/{user_id}")
        except httpx.HTTPError as e:
            logger.error(f"Profile fetch failed for {user_id}: {e}")
            return None
        if response.is_error:
            logger.error(f"Profile fetch failed for {user_id}: {response.status_code} {response.text}")
            return None
        return UserProfile.model_validate(response.json())
