from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response

log = logging.getLogger("postquery.api")

REQUEST_ID_HEADER = "x-request-id"


async def request_logging_middleware(request: Request, call_next: Callable) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        log.info(
            "request",
            extra={
                "request_id": request_id,
                "path": str(request.url.path),
                "method": request.method,
                "status_code": status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000.0, 2),
            },
        )
