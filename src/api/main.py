import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import start_http_server
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from api.routers import bridge, route, tasks
from motion_bridge.errors import BridgeError

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

# Metrics are served on their own port; the relay itself only answers POST.
METRICS_PORT = os.getenv("METRICS_PORT", "").strip()

KNOWN_ENDPOINTS = {"/bridge", "/add-tasks", "/route"}

app = FastAPI(title="MotionBridge", redirect_slashes=False)
app.include_router(bridge.router)
app.include_router(tasks.router)
app.include_router(route.router)


@app.on_event("startup")
async def startup() -> None:
    if METRICS_PORT:
        start_http_server(int(METRICS_PORT))
        logger.info(f"Prometheus metrics listening on :{METRICS_PORT}")


@app.middleware("http")
async def post_only(request: Request, call_next):
    start = time.time()
    endpoint = request.url.path if request.url.path in KNOWN_ENDPOINTS else "other"

    if request.method != "POST":
        response = PlainTextResponse("Send POST", status_code=405)
    else:
        response = await call_next(request)

    REQUESTS_TOTAL.labels(endpoint=endpoint, status=str(response.status_code)).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)
    return response


@app.exception_handler(StarletteHTTPException)
async def plain_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return PlainTextResponse("Not found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.exception_handler(BridgeError)
async def bridge_error(request: Request, exc: BridgeError):
    # Failures raised while wiring a request (e.g. an unknown LLM_PROVIDER).
    logger.error(f"{request.url.path} failed: {exc}")
    return PlainTextResponse(str(exc), status_code=500)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
