from __future__ import annotations

import time

from fastapi import Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response

from omnirag.app.settings import settings

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)
CHAT_LATENCY = Histogram(
    "omnirag_chat_latency_seconds",
    "Retrieval plus generation latency per chat exchange",
)
GENERATION_FAILURES = Counter(
    "omnirag_generation_failures_total",
    "Chat exchanges answered with the fixed generation error",
)
RETRIEVAL_FALLBACKS = Counter(
    "omnirag_retrieval_fallbacks_total",
    "Retrievals where no document matched and recent documents were used instead",
)


async def metrics_middleware(request: Request, call_next):
    if not settings.metrics_enabled:
        return await call_next(request)
    path = request.url.path
    if path == "/metrics":
        return await call_next(request)
    start = time.monotonic()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        duration = time.monotonic() - start
        REQUEST_COUNT.labels(request.method, path, str(status)).inc()
        REQUEST_LATENCY.labels(request.method, path).observe(duration)


def record_exchange(latency_ms: int, failed: bool, fallback: bool) -> None:
    if not settings.metrics_enabled:
        return
    CHAT_LATENCY.observe(latency_ms / 1000)
    if failed:
        GENERATION_FAILURES.inc()
    if fallback:
        RETRIEVAL_FALLBACKS.inc()


def metrics_response() -> Response:
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
