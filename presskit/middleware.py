"""Request tracking middleware."""

import uuid
from time import perf_counter

from fastapi import Request
from loguru import logger


async def add_request_id(request: Request, call_next):
    """Tag each request with an id and time it.

    The id is taken from an inbound X-Request-ID header when present, bound
    to every log record emitted while the request is handled, and echoed back
    together with the elapsed time in X-Response-Time (milliseconds).
    """
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request.state.request_id = request_id
    started = perf_counter()

    with logger.contextualize(request_id=request_id):
        logger.debug(f"{request.method} {request.url.path} started")

        response = await call_next(request)
        elapsed_ms = (perf_counter() - started) * 1000

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}"
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} in {elapsed_ms:.1f}ms"
        )

        return response
