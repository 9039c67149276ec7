"""Exceptions raised by the analytics services."""


class AnalyticsError(ValueError):
    """Base error for inputs the analytics cannot work with."""


class DuplicatePeriodError(AnalyticsError):
    """Raised when a monthly series holds the same month twice."""


class UnknownMenuItemError(AnalyticsError):
    """Raised when a referenced menu item is not on the menu."""


class DataImportError(AnalyticsError):
    """Raised when an uploaded file cannot be turned into rows."""


__all__ = ["AnalyticsError", "DuplicatePeriodError", "UnknownMenuItemError", "DataImportError"]
