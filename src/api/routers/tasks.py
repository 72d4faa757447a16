import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from api.backend import BridgeBackend
from api.body import INVALID_JSON, error_response, read_json_body
from api.dependencies import get_backend
from motion_bridge.errors import ConfigurationError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/add-tasks")
async def add_tasks(request: Request, backend: BridgeBackend = Depends(get_backend)):
    """
    Create every task in ``tasks`` in Motion, one by one.
    Always 200 once the batch starts; per-item failures are reported in ``created``.
    """
    body = await read_json_body(request)
    if body is None:
        return error_response(INVALID_JSON)

    tasks = body.get("tasks")
    if not isinstance(tasks, list) or not tasks:
        return error_response("Missing tasks array")

    logger.info(f"Received {len(tasks)} task(s)")
    try:
        return await asyncio.to_thread(backend.add_tasks, tasks)
    except ConfigurationError as e:
        logger.error(f"Cannot create tasks: {e}")
        return PlainTextResponse(str(e), status_code=500)
