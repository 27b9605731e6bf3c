"""
Recipe Catalog Timeout Middleware
Aborts requests that run longer than the configured limit
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import asyncio
import structlog

logger = structlog.get_logger()


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Answers 504 when a request exceeds ``timeout`` seconds; 0 disables the limit"""

    def __init__(self, app, timeout: float):
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next):
        if not self.timeout or self.timeout <= 0:
            return await call_next(request)

        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                "Request timed out",
                method=request.method,
                path=request.url.path,
                timeout=self.timeout
            )
            return JSONResponse(
                status_code=504,
                content={
                    "error": "TimeoutError",
                    "message": f"Request did not complete within {self.timeout:g} seconds"
                }
            )
