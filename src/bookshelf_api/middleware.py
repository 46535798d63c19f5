import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from bookshelf_api.context import request_id_var, session_id_var

logger = logging.getLogger("bookshelf_api.request")


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session_id = (request.headers.get("X-Session-Id") or "").strip() or None
        request_id = request.headers.get("X-Request-Id") or f"req-{uuid.uuid4().hex[:12]}"

        session_token = session_id_var.set(session_id)
        req_token = request_id_var.set(request_id)
        start = time.perf_counter()

        try:
            response = await call_next(request)
            latency_ms = max((time.perf_counter() - start) * 1000, 0.0)
            logger.info(
                "http_request_complete",
                extra={
                    "method": request.method,
                    "path": str(request.url.path),
                    "status_code": response.status_code,
                    "latency_ms": round(latency_ms, 3),
                },
            )
            response.headers["X-Request-Id"] = request_id
            return response
        finally:
            session_id_var.reset(session_token)
            request_id_var.reset(req_token)
