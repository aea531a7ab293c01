import time
import logging
from collections import defaultdict, deque
from typing import Deque, Dict, Iterable
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from gta_insights.utils.error_handler import format_error_response

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60

class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-IP sliding-window rate limit in front of the Gemini-backed endpoints.

    Every insights fetch and chat turn spends Gemini quota, so clients are
    throttled here before a request can reach the model. State is in memory.
    """

    def __init__(self, app, requests_per_minute: int = 60, exempt_paths: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = frozenset(exempt_paths)
        self.request_timestamps: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = time.monotonic()
        logger.info(f"Rate limit middleware initialized: {requests_per_minute} requests per minute")

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        now = time.monotonic()
        if now - self._last_sweep >= WINDOW_SECONDS:
            self._evict_idle(now)
        timestamps = self.request_timestamps[client_ip]

        # Drop timestamps that left the window
        while timestamps and now - timestamps[0] >= WINDOW_SECONDS:
            timestamps.popleft()

        if len(timestamps) >= self.requests_per_minute:
            retry_after = max(1, int(WINDOW_SECONDS - (now - timestamps[0])) + 1)
            logger.warning(f"Rate limit exceeded for IP: {client_ip}")
            return JSONResponse(
                content=format_error_response(
                    "Rate limit exceeded. Please try again in a moment.",
                    {"retryAfter": retry_after},
                ),
                status_code=HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)
        return await call_next(request)

    def _evict_idle(self, now: float) -> None:
        """Forget clients with no request inside the window."""
        idle = [ip for ip, timestamps in self.request_timestamps.items()
                if not timestamps or now - timestamps[-1] >= WINDOW_SECONDS]
        for ip in idle:
            del self.request_timestamps[ip]
        self._last_sweep = now
        if idle:
            logger.debug(f"Evicted {len(idle)} idle clients from the rate limiter")

    def _get_client_ip(self, request: Request) -> str:
        """
        Get the client IP address, handling proxies.
        """
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            # Return the first IP in the list (client IP)
            return forwarded.split(",")[0].strip()

        return request.client.host if request.client else "unknown"
