from fastapi import APIRouter, Body, Depends, HTTPException
import httpx
import logging

from ticketdesk.api.deps import get_line_client
from ticketdesk.core.line import LineApiError, LineMessagingClient
from ticketdesk.schemas.line import PushRequest

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/api/push-line")
def push_line(
    request: PushRequest = Body(...),
    line: LineMessagingClient = Depends(get_line_client),
):
    """Forward an operator message to one LINE user."""
    if not request.uid or not request.message:
        raise HTTPException(status_code=400, detail="Missing uid or message")

    try:
        line.push(request.uid, request.message)
    except LineApiError as e:
        logger.error(f"Error sending LINE: {e.body}")
        raise HTTPException(status_code=500, detail=f"LINE push failed: {e.body}")
    except httpx.HTTPError as e:
        logger.error(f"Push error: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return {"success": True}
