"""Translate analytics errors into HTTP responses."""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException

from restaurantiq.services.errors import AnalyticsError, UnknownMenuItemError


def status_for(exc: AnalyticsError) -> int:
    if isinstance(exc, UnknownMenuItemError):
        return 404
    return 400


def raise_analytics_error(exc: AnalyticsError) -> NoReturn:
    raise HTTPException(status_code=status_for(exc), detail=str(exc)) from exc


__all__ = ["raise_analytics_error", "status_for"]
