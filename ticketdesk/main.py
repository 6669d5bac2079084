import logging
from fastapi import FastAPI
from ticketdesk.core.config import settings
from ticketdesk.core.middleware import AuditMiddleware
from ticketdesk.api import health, webhook, push
from ticketdesk.api.deps import get_database, get_dispatcher

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

app = FastAPI(title=settings.PROJECT_NAME)
app.add_middleware(AuditMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(webhook.router)
app.include_router(push.router)

@app.on_event("startup")
async def startup_event():
    # Wiring errors stop the boot instead of failing every webhook call
    get_dispatcher()
    get_database().init_schema()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
