import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from lead_scraper.middlewares.trace_id_middleware import current_trace_id
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request handled",
            extra={
                "trace_id": current_trace_id(),
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        return response
