"""Scoped browser session for script-rendered pages."""

from __future__ import annotations

import contextlib
import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any, Optional

from ..errors import BrowserUnavailableError, FetchError
from ..models.config import BrowserConfig

logger = logging.getLogger(__name__)

# Check for Playwright availability
PLAYWRIGHT_AVAILABLE = False
try:
    from playwright.async_api import async_playwright

    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    pass

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page, Playwright


class BrowserSession:
    """
    One headless browser with a single page, released on every exit path.

    Each extraction call opens its own session; nothing is shared between
    sessions.

    Example:
        async with BrowserSession(BrowserConfig()) as session:
            await session.navigate("https://www.newgrounds.com/playlist/user/mix")
            data = await session.evaluate("() => document.title")

    Requires: pip install ngpull[js]
    """

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        """
        Initialize the session.

        Args:
            config: Viewport, user agent, timeout and load-state settings
        """
        if not PLAYWRIGHT_AVAILABLE:
            raise BrowserUnavailableError()

        self._config = config or BrowserConfig()
        self._timeout = self._config.timeout * 1000  # Playwright uses milliseconds

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        """The session's page."""
        if self._page is None:
            raise RuntimeError("Browser session not started. Use 'async with' context.")
        return self._page

    async def __aenter__(self) -> BrowserSession:
        """Launch the browser and open a page."""
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self._config.headless)
            self._context = await self._browser.new_context(
                viewport={
                    "width": self._config.viewport_width,
                    "height": self._config.viewport_height,
                },
                user_agent=self._config.user_agent,
            )
            self._context.set_default_timeout(self._timeout)
            self._page = await self._context.new_page()
        except BaseException:
            await self.close()
            raise
        logger.debug("Browser session started")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close page, context, browser and Playwright."""
        await self.close()

    async def close(self) -> None:
        """Release every browser resource. Safe to call more than once."""
        if self._page is not None:
            with contextlib.suppress(Exception):
                await self._page.close()
            self._page = None

        if self._context is not None:
            with contextlib.suppress(Exception):
                await self._context.close()
            self._context = None

        if self._browser is not None:
            with contextlib.suppress(Exception):
                await self._browser.close()
            self._browser = None

        if self._playwright is not None:
            with contextlib.suppress(Exception):
                await self._playwright.stop()
            self._playwright = None
            logger.debug("Browser session closed")

    async def navigate(self, url: str) -> None:
        """
        Load ``url`` and wait for the configured load state.

        Raises:
            FetchError: If the navigation returns no response or a non-success status
            playwright.async_api.TimeoutError: If the page does not settle in time
        """
        response = await self.page.goto(
            url,
            wait_until=self._config.wait_until,
            timeout=self._timeout,
        )
        if response is None:
            raise FetchError(url, None)
        if response.status >= 400:
            raise FetchError(url, response.status, response.status_text)

    async def evaluate(self, expression: str) -> Any:
        """Evaluate a script in the page and return its result."""
        return await self.page.evaluate(expression)
