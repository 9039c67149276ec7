"""Guards for the spreadsheet upload endpoint."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Deque, Dict, Iterable

from fastapi import HTTPException, Request

from restaurantiq.config.settings import get_settings

logger = logging.getLogger(__name__)


def client_address(request: Request) -> str:
    """First hop of ``X-Forwarded-For``, else the socket peer."""

    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client and request.client.host else "unknown"


def enforce_same_origin(request: Request, trusted_origins: Iterable[str] = ()) -> None:
    """Reject browser uploads sent from another site.

    Requests without an ``Origin`` header (scripts, curl) pass. Otherwise the
    origin must be trusted or match the scheme and host the request was sent to.
    """

    origin = request.headers.get("origin")
    if not origin:
        return
    origin = origin.rstrip("/").lower()
    allowed = set(trusted_origins)
    host = request.headers.get("host")
    if host:
        allowed.add(f"{request.url.scheme or 'http'}://{host}".lower())
    if origin not in allowed:
        logger.warning("Rejected upload from origin %s", origin)
        raise HTTPException(status_code=403, detail="Request origin is not allowed.")


class SlidingWindowLimiter:
    """Per-key request counter over a moving time window, held in memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits: Dict[str, Deque[float]] = {}

    def hit(self, key: str, limit: int, window_seconds: float) -> bool:
        now = time.monotonic()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] > window_seconds:
                hits.popleft()
            if len(hits) >= limit:
                return False
            hits.append(now)
            return True

    def clear(self) -> None:
        with self._lock:
            self._hits.clear()


_upload_limiter = SlidingWindowLimiter()


def upload_guard(request: Request) -> None:
    """FastAPI dependency applied to every upload."""

    settings = get_settings()
    enforce_same_origin(request, settings.trusted_origins)
    key = f"import:{client_address(request)}"
    if not _upload_limiter.hit(key, settings.upload_rate_limit, settings.upload_rate_window_seconds):
        raise HTTPException(status_code=429, detail="Too many requests. Try again later.")


def reset_rate_limits() -> None:
    _upload_limiter.clear()


__all__ = [
    "SlidingWindowLimiter",
    "client_address",
    "enforce_same_origin",
    "reset_rate_limits",
    "upload_guard",
]
