from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import hashlib
from ticketdesk.core.audit import AuditRepository, audit_repo
from ticketdesk.schemas.audit import AuditLogEntry, AuditStatus
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

def action_type_for(endpoint: str) -> str:
    if "webhook" in endpoint:
        return "WEBHOOK"
    if "push" in endpoint:
        return "PUSH"
    if "health" in endpoint:
        return "HEALTH_CHECK"
    return "UNKNOWN"

class AuditMiddleware(BaseHTTPMiddleware):
    """Records one audit entry per request. Audit failures never reach the caller."""

    def __init__(self, app, repository: Optional[AuditRepository] = None):
        super().__init__(app)
        self.repository = repository or audit_repo

    async def dispatch(self, request: Request, call_next: Callable):
        endpoint = request.url.path
        method = request.method

        input_hash = None
        try:
            body = await request.body()
            # Hash even an empty body so GET requests are comparable
            input_hash = hashlib.sha256(body).hexdigest()
        except Exception as e:
            logger.warning(f"Could not read request body for audit: {e}")

        status = AuditStatus.FAILURE
        try:
            response = await call_next(request)
            if 200 <= response.status_code < 300:
                status = AuditStatus.SUCCESS
            return response
        finally:
            try:
                self.repository.save(AuditLogEntry(
                    endpoint=endpoint,
                    method=method,
                    action_type=action_type_for(endpoint),
                    input_hash=input_hash,
                    status=status,
                ))
            except Exception as log_error:
                logger.error(f"Audit Logging Failed: {log_error}")
