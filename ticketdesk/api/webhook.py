from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from typing import List
import logging

from ticketdesk.api.deps import get_dispatcher
from ticketdesk.core.dispatcher import EventDispatcher
from ticketdesk.schemas.line import WebhookEvent

router = APIRouter()
logger = logging.getLogger(__name__)

RUNNING_TEXT = "🟢 LINE Webhook is running!"

def parse_events(body) -> List[WebhookEvent]:
    """Keep every well-formed event; malformed ones are logged and dropped."""
    if not isinstance(body, dict):
        return []
    events: List[WebhookEvent] = []
    for index, raw in enumerate(body.get("events") or []):
        try:
            events.append(WebhookEvent.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Dropping malformed event #{index}: {e.error_count()} errors")
    return events

@router.get("/api/webhook", response_class=PlainTextResponse)
async def webhook_status():
    return RUNNING_TEXT

@router.post("/api/webhook", response_class=PlainTextResponse)
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    dispatcher: EventDispatcher = Depends(get_dispatcher),
):
    """
    Acknowledge LINE immediately; events are processed after the response
    has been sent, so processing errors never change the 200.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        body = None

    events = parse_events(body)
    if events:
        logger.info(f"Webhook received {len(events)} event(s)")
        background_tasks.add_task(dispatcher.dispatch, events)
    return "OK"
