import asyncio
import logging

from fastapi import APIRouter, Depends, Request

from api.backend import BridgeBackend
from api.body import INVALID_JSON, UPSTREAM_ERRORS, error_response, first_present, read_json_body
from api.dependencies import get_backend

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/route")
async def route(request: Request, backend: BridgeBackend = Depends(get_backend)):
    """Extract tasks from free text with the model and create them with the command's defaults.

    The command comes from ``command`` or a leading ``/legal``, ``/biz`` or ``/personal``.
    """
    body = await read_json_body(request)
    if body is None:
        return error_response(INVALID_JSON)

    text = first_present(body, "text", "message")
    if not isinstance(text, str) or not text.strip():
        return error_response("Missing text")

    command = body.get("command")
    command = command if isinstance(command, str) else None

    try:
        return await asyncio.to_thread(backend.route, text, command)
    except UPSTREAM_ERRORS as e:
        logger.error(f"Route failed: {e}")
        return error_response(str(e), status_code=500)
