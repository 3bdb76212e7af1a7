"""Async HTTP client for fetching site pages."""

from __future__ import annotations

import logging
from types import TracebackType

import aiohttp
from charset_normalizer import from_bytes as detect_encoding

from ..models.config import DEFAULT_USER_AGENT
from .protocols import HttpResponse

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async HTTP client for single page fetches.

    One request at a time per call, no retries and no caching: a failed
    response is returned as-is and the caller decides whether it is fatal.

    Example:
        async with AsyncHttpClient() as client:
            response = await client.get("https://www.newgrounds.com/audio/listen/1")
            html = client.decode_content(response)
    """

    MAX_CONTENT_SIZE = 20 * 1024 * 1024  # 20 MB

    def __init__(
        self,
        user_agent: str | None = None,
        default_timeout: float = 30.0,
        max_content_size: int = MAX_CONTENT_SIZE,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            user_agent: Custom User-Agent string
            default_timeout: Default request timeout in seconds
            max_content_size: Maximum response size in bytes
        """
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._default_timeout = default_timeout
        self._max_content_size = max_content_size
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(headers={"User-Agent": self._user_agent})
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Perform an HTTP GET request.

        Args:
            url: The URL to fetch
            timeout: Request timeout in seconds (uses default if None)
            headers: Optional additional headers

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            aiohttp.ClientError: On network errors
            asyncio.TimeoutError: When the request exceeds the timeout
            ValueError: On content size exceeded
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        logger.debug(f"GET {url}")
        async with self._session.get(
            url,
            timeout=aiohttp.ClientTimeout(total=timeout or self._default_timeout),
            headers=headers,
            allow_redirects=True,
        ) as response:
            content = b""
            async for chunk in response.content.iter_chunked(8192):
                content += chunk
                if len(content) > self._max_content_size:
                    raise ValueError(f"Content size limit exceeded: >{self._max_content_size} bytes")

            return HttpResponse(
                status_code=response.status,
                content=content,
                content_type=response.headers.get("Content-Type", ""),
                url=str(response.url),
                reason=response.reason or "",
                headers=dict(response.headers),
            )

    def decode_content(self, response: HttpResponse) -> str:
        """
        Decode response content to string.

        Fallback chain:
        1. Content-Type header charset
        2. charset-normalizer detection
        3. UTF-8 with replacement

        Args:
            response: HttpResponse to decode

        Returns:
            Decoded string content
        """
        content = response.content

        encoding = None
        for part in response.content_type.split(";"):
            part = part.strip()
            if part.lower().startswith("charset="):
                encoding = part.split("=", 1)[1].strip().strip("\"'")
                break

        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared encoding: {encoding}")

        best_match = detect_encoding(content).best()
        if best_match is not None:
            return str(best_match)

        return content.decode("utf-8", errors="replace")
