# citenet/web/security.py

from __future__ import annotations

import secrets
import time
from typing import Dict, Optional, Tuple

from fastapi import Header, HTTPException, Request, status

from citenet.config.settings import settings


# -------------------------------
# API key auth
# -------------------------------

def api_key_auth(x_api_key: Optional[str] = Header(default=None, alias="X-API-Key")) -> None:
    """
    Header-based API key auth. Disabled while settings.API_KEY is unset.
    """
    expected = settings.API_KEY.get_secret_value() if settings.API_KEY else None
    if expected is None:
        return

    if x_api_key is None or not secrets.compare_digest(x_api_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key.",
        )


# -------------------------------
# In-memory rate limiter
# -------------------------------

class RateLimiter:
    """
    Fixed-window request counter per client host, for a single process.
    """

    def __init__(self, max_requests: int, window_seconds: float) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        # client -> (window_start, count)
        self._state: Dict[str, Tuple[float, int]] = {}

    def hit(self, client: str, now: Optional[float] = None) -> bool:
        """
        Record one request; False when the client is over its limit.
        """
        now = time.monotonic() if now is None else now
        window_start, count = self._state.get(client, (now, 0))

        if now - window_start >= self.window_seconds:
            window_start, count = now, 0

        count += 1
        self._state[client] = (window_start, count)
        return count <= self.max_requests

    def reset(self) -> None:
        self._state.clear()

    def __call__(self, request: Request) -> None:
        client_host = request.client.host if request.client else "unknown"
        if not self.hit(client_host):
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Rate limit exceeded. Try again later.",
            )


rate_limiter = RateLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)
