"""
Recipe Catalog Logging Middleware
Structured logging with request/response tracking
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import structlog
import time
import uuid
from typing import Any, Dict, Iterable, Tuple

logger = structlog.get_logger()

SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one start and one completion event per request.

    Every event logged while the request runs carries its ``request_id``, taken
    from an incoming ``X-Request-ID`` header or generated, and echoed back on
    the response together with ``X-Process-Time``.
    """

    def __init__(self, app, exclude_paths: Iterable[str] = ("/health", "/favicon.ico"),
                 slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths)
        self.slow_request_threshold = slow_request_threshold  # seconds

    async def dispatch(self, request: Request, call_next):
        """Process request with request-scoped logging context"""
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            if request.url.path.startswith(self.exclude_paths):
                response = await call_next(request)
                response.headers["X-Request-ID"] = request_id
                return response

            request_info = self._extract_request_info(request)
            logger.info("Request started", **request_info, event_type="request_start")

            response = await call_next(request)

            process_time = time.time() - start_time
            response_info = self._extract_response_info(request, response, process_time)

            logger.log(
                self._determine_log_level(response.status_code),
                "Request completed",
                **request_info,
                **response_info,
                event_type="request_complete"
            )

            if process_time > self.slow_request_threshold:
                logger.warning(
                    "Slow request detected",
                    endpoint=f"{request.method} {request.url.path}",
                    process_time=round(process_time, 4),
                    event_type="slow_request"
                )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = str(round(process_time, 4))
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                client_ip=self._get_client_ip(request),
                process_time=round(time.time() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()

    def _extract_request_info(self, request: Request) -> Dict[str, Any]:
        info = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": self._get_client_ip(request),
            "headers": self._mask_headers(request.headers.items()),
        }
        if request.query_params:
            info["query_params"] = dict(request.query_params)
        return info

    def _extract_response_info(
        self, request: Request, response: Response, process_time: float
    ) -> Dict[str, Any]:
        info = {
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }
        # Set by get_current_user; only the id outlives the request session
        user_id = getattr(request.state, "user_id", None)
        if user_id is not None:
            info["user_id"] = user_id
        return info

    def _get_client_ip(self, request: Request) -> str:
        """Client address, honouring the first proxy hop"""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _mask_headers(self, headers: Iterable[Tuple[str, str]]) -> Dict[str, str]:
        return {
            key: "***MASKED***" if key.lower() in SENSITIVE_HEADERS else value
            for key, value in headers
        }

    @staticmethod
    def _determine_log_level(status_code: int) -> int:
        if status_code >= 500:
            return logging.ERROR
        if status_code >= 400:
            return logging.WARNING
        return logging.INFO
