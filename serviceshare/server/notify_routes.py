from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
import json
import logging
from typing import Any, Callable, Optional

from ..client.notifications import notification_ack
from ..errors import ServiceShareError

logger = logging.getLogger(__name__)

NotificationHandler = Callable[[Optional[Any]], None]


def build_notify_router(client, handler: NotificationHandler, path: str = "/callback") -> APIRouter:
    """
    Router with a single POST endpoint for platform notifications.

    The raw body is verified and decrypted by `client`, the plain JSON
    (None when the push carried no payload) goes to `handler`, and the
    platform always gets HTTP 200 with a resCode acknowledgement.

    RSA verification, decryption and `handler` are blocking, so they run in
    the threadpool rather than on the event loop.
    """
    router = APIRouter()

    def _open(body: bytes) -> Optional[Any]:
        plain = client.verify_and_decrypt_notification(body)
        return json.loads(plain) if plain else None

    @router.post(path)
    async def receive_notification(request: Request):
        body = await request.body()
        try:
            data = await run_in_threadpool(_open, body)
        except (ServiceShareError, ValueError) as e:
            logger.error(f"Failed to verify notification on {path}: {e}")
            return notification_ack(False)

        try:
            await run_in_threadpool(handler, data)
        except Exception as e:
            logger.error(f"Notification handler failed on {path}: {e}")
            return notification_ack(False)

        return notification_ack(True)

    return router
