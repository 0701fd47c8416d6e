"""
Exception types shared by the normalizers, the loader, and the API layer.
"""
from __future__ import annotations


class DashboardError(Exception):
    """Base class for usage-dashboard errors."""


class HeaderNotFound(DashboardError):
    """No grid row carries a recognised header marker."""

    def __init__(self, markers: tuple[str, ...] = ()) -> None:
        self.markers = markers
        detail = ", ".join(repr(m) for m in markers) if markers else "any marker"
        super().__init__(f"No header row matching {detail}")


class RetrievalError(DashboardError):
    """The raw CSV could not be fetched. Never retried here."""

    def __init__(self, locator: str, reason: str) -> None:
        self.locator = locator
        self.reason = reason
        super().__init__(f"Failed to retrieve {locator}: {reason}")
