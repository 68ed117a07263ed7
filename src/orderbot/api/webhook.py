"""
Webhook API

FastAPI surface used when the bot runs in webhook mode:
- POST /api/bot/webhook: feeds a raw update into the update router
- POST /api/orders/{order_id}/notify: queues new-order notifications
- GET  /api/health
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from orderbot.db.base import OrderStore
from orderbot.handlers.router import UpdateRouter
from orderbot.notifications import DispatchWorker, NotificationDispatcher, notify_order_created

logger = logging.getLogger(__name__)


class WebhookResponse(BaseModel):
    """Response model for the webhook endpoint."""
    ok: bool


class NotifyRequest(BaseModel):
    """Request model for /orders/{order_id}/notify."""
    language: Optional[str] = None


class NotifyResponse(BaseModel):
    queued: bool
    order_number: str


def create_app(
    router: UpdateRouter,
    store: Optional[OrderStore] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
    worker: Optional[DispatchWorker] = None,
) -> FastAPI:
    """
    Build the FastAPI app around an update router.

    The notify endpoint is only mounted when store, dispatcher and worker are
    all provided.
    """
    api = APIRouter()

    @api.post("/bot/webhook", response_model=WebhookResponse)
    async def post_update(update: Dict[str, Any]):
        """
        Route one Telegram update.

        Always answers 200 so Telegram does not redeliver an update whose
        handler failed.
        """
        try:
            await run_in_threadpool(router.handle_update, update)
        except Exception as e:
            logger.error(f"Webhook update {update.get('update_id')} failed: {e}", exc_info=True)
        return WebhookResponse(ok=True)

    if store is not None and dispatcher is not None and worker is not None:

        @api.post("/orders/{order_id}/notify", response_model=NotifyResponse, status_code=202)
        async def post_notify(order_id: int, request: Optional[NotifyRequest] = None):
            """Queue the operator alert and customer confirmation for a stored order."""
            order = await run_in_threadpool(store.find_by_id, order_id)
            if order is None:
                raise HTTPException(
                    status_code=404,
                    detail={"error": "not_found", "message": f"Order {order_id} not found"},
                )
            language = request.language if request else None
            queued = notify_order_created(order, dispatcher, worker, language=language)
            return NotifyResponse(queued=queued, order_number=order.order_number)

    app = FastAPI(
        title="Orderbot API",
        description="Telegram order notification bot",
        version="1.0.0",
    )
    app.include_router(api, prefix="/api", tags=["bot"])

    @app.get("/api/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
