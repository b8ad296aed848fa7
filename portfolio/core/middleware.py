import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from .config import Config


logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0
REQUEST_ID_HEADER = "X-Request-ID"


def request_id_for(request: Request) -> str:
    """Return the id assigned to this request, creating it on first use.

    Stored on ``request.state`` so the exception handler reports the same id
    the request logger used.
    """
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = f"{int(time.time() * 1000)}-{id(request)}"
        request.state.request_id = request_id
    return request_id


def apply_cors_headers(request: Request, response) -> None:
    # Responses built by the exception handler bypass CORSMiddleware
    origin = request.headers.get("origin")
    if origin and origin in Config.allowed_origins():
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "*"


async def log_requests(request: Request, call_next: Callable):
    """Log page loads and contact submissions.

    Everything is logged in development; otherwise only slow requests and
    error responses are.
    """
    request_id = request_id_for(request)
    start_time = time.monotonic()
    verbose = Config.ENVIRONMENT == "development"

    try:
        response = await call_next(request)
    except Exception as e:
        elapsed = time.monotonic() - start_time
        logger.error(f"[{request_id}] {request.method} {request.url.path} raised {type(e).__name__} after {elapsed:.2f}s")
        raise

    elapsed = time.monotonic() - start_time
    response.headers[REQUEST_ID_HEADER] = request_id
    summary = f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} in {elapsed:.2f}s"
    if response.status_code >= 500:
        logger.error(summary)
    elif elapsed > SLOW_REQUEST_SECONDS:
        logger.warning(f"{summary} (slow)")
    elif verbose or response.status_code >= 400:
        logger.info(summary)
    return response


async def global_exception_handler(request: Request, exc: Exception):
    request_id = request_id_for(request)
    logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)

    response = JSONResponse(status_code=500, content={"detail": "Internal server error"})
    response.headers[REQUEST_ID_HEADER] = request_id
    apply_cors_headers(request, response)
    return response
