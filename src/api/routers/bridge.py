import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from api.backend import BridgeBackend
from api.body import INVALID_JSON, UPSTREAM_ERRORS, error_response, first_present, read_json_body
from api.dependencies import get_backend

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Hello"


@router.post("/bridge")
async def bridge(request: Request, backend: BridgeBackend = Depends(get_backend)):
    """Relay a message to the model; forward the reply to ``motionWebhook`` when given."""
    body = await read_json_body(request)
    if body is None:
        return error_response(INVALID_JSON)

    message = first_present(body, "message", "text")
    message = DEFAULT_MESSAGE if message is None else str(message)

    webhook = body.get("motionWebhook")

    logger.info(f"Bridge request: {message[:50]}...")
    try:
        return await asyncio.to_thread(
            backend.bridge, message, webhook, body.get("motionPayload")
        )
    except UPSTREAM_ERRORS as e:
        logger.error(f"Bridge failed: {e}")
        return PlainTextResponse(str(e), status_code=500)
