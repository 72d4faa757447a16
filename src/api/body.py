import json
import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from motion_bridge.errors import BridgeError

logger = logging.getLogger(__name__)

INVALID_JSON = "Invalid JSON body"

# Everything an outbound call chain may raise that should become an error response.
UPSTREAM_ERRORS = (BridgeError, httpx.HTTPError, httpx.InvalidURL)


async def read_json_body(request: Request) -> Optional[Dict[str, Any]]:
    """Return the body as a dict, or None when it is not a JSON object."""
    raw = await request.body()
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info(f"Rejected non-JSON body on {request.url.path}")
        return None
    if not isinstance(data, dict):
        logger.info(f"Rejected non-object JSON body on {request.url.path}")
        return None
    return data


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def first_present(body: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if body.get(key) is not None:
            return body[key]
    return None
