"""Rendered-page browser session for ngpull."""

from .session import PLAYWRIGHT_AVAILABLE, BrowserSession

__all__ = [
    "BrowserSession",
    "PLAYWRIGHT_AVAILABLE",
]
