import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

TRACE_ID_HEADER = "X-Trace-ID"

_trace_id: ContextVar[str] = ContextVar("trace_id", default="-")


class TraceIDMiddleware(BaseHTTPMiddleware):
    """Tags every request with a trace id and echoes it back in the response."""

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
        token = _trace_id.set(trace_id)
        request.state.trace_id = trace_id
        try:
            response = await call_next(request)
        finally:
            _trace_id.reset(token)
        response.headers[TRACE_ID_HEADER] = trace_id
        return response


def current_trace_id() -> str:
    return _trace_id.get()


def get_trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or current_trace_id()
