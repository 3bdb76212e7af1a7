"""Exceptions raised at the document-source boundary."""

from __future__ import annotations

from typing import Optional


class NgpullError(Exception):
    """Base class for all ngpull errors."""


class FetchError(NgpullError):
    """
    A document could not be retrieved.

    Raised for non-success HTTP responses and failed browser navigations.
    Extraction never raises this; only the fetch/navigation boundary does.

    Attributes:
        url: The URL that was requested
        status_code: HTTP status code, or None if no response was received
        reason: Status text reported by the server
    """

    def __init__(self, url: str, status_code: Optional[int], reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        status = status_code if status_code is not None else "no response"
        super().__init__(f"Failed to fetch {url}: {status} {reason}".rstrip())


class BrowserUnavailableError(NgpullError, ImportError):
    """Playwright is not installed but a rendered document was requested."""

    def __init__(self) -> None:
        super().__init__(
            "Playwright is required for playlist extraction. Install with: pip install ngpull[js]"
        )
