from __future__ import annotations

import time

import structlog
from fastapi import Request
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from ewm.api.deps import client_ip
from ewm.core.config import settings
from ewm.redis_client import get_redis
from ewm.services.error_codes import ErrorCode

logger = structlog.get_logger(__name__)

_WINDOWS = {
    "sec": 1,
    "second": 1,
    "seconds": 1,
    "min": 60,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def parse_rate(rate: str) -> tuple[int, int]:
    """
    Parse "<limit>/<window>" such as "120/minute" or "10/second".
    Returns: (limit, window_seconds)
    """
    raw = rate.strip().lower()
    if "/" not in raw:
        raise ValueError(f"Invalid rate format: {rate}")

    limit_str, window_str = raw.split("/", 1)
    limit = int(limit_str)
    if limit <= 0:
        raise ValueError(f"Rate limit must be positive: {rate}")

    window = _WINDOWS.get(window_str.strip())
    if window is None:
        raise ValueError(f"Invalid rate window: {window_str}")
    return limit, window


def bucket_key(ip: str, method: str, path: str, window_seconds: int, now: int) -> tuple[str, int]:
    """Fixed-window counter key and the epoch second at which the window resets."""
    bucket = now // window_seconds
    return f"ewm:rl:{ip}:{method}:{path}:{window_seconds}:{bucket}", (bucket + 1) * window_seconds


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        if not settings.rate_limit_enabled or request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path
        if path in set(settings.rate_limit_exempt_paths):
            return await call_next(request)

        try:
            limit, window_seconds = parse_rate(settings.rate_limit_default)
        except ValueError:
            logger.warning("rate_limit_misconfigured", rate=settings.rate_limit_default)
            return await call_next(request)

        now = int(time.time())
        key, reset = bucket_key(client_ip(request), request.method, path, window_seconds, now)

        try:
            r = get_redis()
            count = int(r.incr(key))
            if count == 1:
                r.expire(key, window_seconds)
        except RedisError as exc:
            # Limiter store down: serve the request unthrottled
            logger.warning("rate_limit_unavailable", error=str(exc))
            return await call_next(request)

        if count > limit:
            return JSONResponse(
                status_code=429,
                content={
                    "detail": {
                        "code": ErrorCode.RATE_LIMITED.value,
                        "message": "rate limit exceeded",
                    }
                },
                headers={
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(reset),
                    "Retry-After": str(max(0, reset - now)),
                },
            )

        response = await call_next(request)
        response.headers.setdefault("X-RateLimit-Limit", str(limit))
        response.headers.setdefault("X-RateLimit-Remaining", str(max(0, limit - count)))
        response.headers.setdefault("X-RateLimit-Reset", str(reset))
        return response
