"""Per-request id, access logging, body size limit and last-resort 500s."""

import logging
import time
from typing import Callable, Dict, Optional
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from infocard.utils.logging import get_logger, request_id_var

logger = get_logger(__name__)

DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


def _envelope(status_code: int, message: str, request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers={"X-Request-ID": request_id},
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id and logs its start and outcome.

    Runs inside CORSMiddleware, so the JSON error it produces for an
    unhandled exception still carries the CORS headers. Bodies whose
    declared Content-Length exceeds ``max_body_bytes`` are refused with 413
    before the route reads them.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int = DEFAULT_MAX_BODY_BYTES):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    def _declared_length(self, request: Request) -> Optional[int]:
        raw = request.headers.get("content-length")
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        context: Dict[str, object] = {
            "endpoint": request.url.path,
            "method": request.method,
            "client_ip": request.client.host if request.client else "unknown",
        }
        label = f"{request.method} {request.url.path}"
        started = time.perf_counter()
        logger.info(label, extra={**context, "user_agent": request.headers.get("user-agent", "unknown")})

        try:
            length = self._declared_length(request)
            if length is not None and length > self.max_body_bytes:
                logger.log(
                    logging.WARNING,
                    f"{label} body of {length} bytes over limit",
                    extra={**context, "status_code": 413, "content_length": length},
                )
                return _envelope(413, "Request body too large", request_id)

            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    f"{label} unhandled error: {exc}",
                    extra={
                        **context,
                        "status_code": 500,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                        "error": str(exc),
                    },
                    exc_info=True,
                )
                return _envelope(500, "Internal server error", request_id)

            status_code = response.status_code
            logger.log(
                logging.INFO if status_code < 400 else logging.WARNING,
                f"{label} {status_code}",
                extra={
                    **context,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)
