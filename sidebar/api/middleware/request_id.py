"""
Request correlation for sidebar calls.

The browser extension may send its own ``X-Request-ID`` so a chat or estimate
can be traced from the sidebar through the upstream LLM and JobTread calls.
Anything that does not look like an id is replaced, since the value ends up
in every log line of the request.
"""

import re
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from sidebar.config import get_settings
from sidebar.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,128}")


def resolve_request_id(header_value: Optional[str]) -> str:
    if header_value and _VALID_REQUEST_ID.fullmatch(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the request, its log records and its response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            duration_ms = (time.perf_counter() - start) * 1000
            if duration_ms > get_settings().slow_request_ms:
                # Usually an LLM generation; the path says which feature
                logger.warning(
                    "Slow request",
                    extra={
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration_ms": round(duration_ms, 1),
                    },
                )
            return response
        finally:
            request_id_var.reset(token)
