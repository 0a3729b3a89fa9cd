from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        message = f"{method} {path} -> {response.status_code} in {process_time:.4f}s"
        if response.status_code in (401, 403):
            logger.warning(f"Auth error: {message}")
        elif response.status_code == 409:
            logger.warning(f"Conflict: {message}")
        else:
            logger.info(message)

        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response
