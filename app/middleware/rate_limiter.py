"""Rate limiting middleware for the critique API."""

import logging
import time
from collections import defaultdict, deque
from typing import Dict, Deque

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
IDLE_CLIENT_SECONDS = 300


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window limit on requests per client IP.

    Each critique or chat request is a full model round trip, so clients are
    capped at requests_per_minute.
    """

    def __init__(self, app, requests_per_minute: int = 30):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.request_history: Dict[str, Deque[float]] = defaultdict(deque)

    async def dispatch(self, request: Request, call_next):
        client_ip = self._get_client_ip(request)
        now = time.time()

        if not self._is_allowed(client_ip, now):
            logger.warning("Rate limit exceeded for %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={
                    "detail": f"Rate limit exceeded. Maximum {self.requests_per_minute} requests per minute allowed."
                },
            )

        self._record_request(client_ip, now)
        return await call_next(request)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from proxy headers or the connection."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # Take the first IP in the chain
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"

    def _is_allowed(self, client_ip: str, now: float) -> bool:
        ip_requests = self.request_history[client_ip]

        while ip_requests and ip_requests[0] < now - WINDOW_SECONDS:
            ip_requests.popleft()

        return len(ip_requests) < self.requests_per_minute

    def _record_request(self, client_ip: str, now: float):
        self.request_history[client_ip].append(now)
        self._cleanup_old_entries(now)

    def _cleanup_old_entries(self, now: float):
        """Forget clients that have been idle for a while."""
        idle_since = now - IDLE_CLIENT_SECONDS
        stale = [
            ip
            for ip, requests in self.request_history.items()
            if not requests or requests[-1] < idle_since
        ]
        for ip in stale:
            del self.request_history[ip]
