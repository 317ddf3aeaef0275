from __future__ import annotations

import uuid

import structlog
from fastapi import Request

TRACE_HEADER = "x-trace-id"


def make_trace_id() -> str:
    return uuid.uuid4().hex


async def trace_context_middleware(request: Request, call_next):
    """Tag the request, its log lines and its response with one trace id."""
    trace_id = request.headers.get(TRACE_HEADER) or make_trace_id()
    bound = structlog.contextvars.bind_contextvars(trace_id=trace_id)
    try:
        response = await call_next(request)
        response.headers[TRACE_HEADER] = trace_id
        return response
    finally:
        structlog.contextvars.reset_contextvars(**bound)
