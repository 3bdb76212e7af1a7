"""Client facade: fetch a page, extract it, assemble the record."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote, urlencode

from ..assembly import build_audio_detail, build_playlist, build_search_result
from ..browser import BrowserSession
from ..errors import FetchError
from ..extraction import RenderedDocumentExtractor, StaticDocumentExtractor
from ..extraction.protocols import RenderedExtractor, StaticExtractor
from ..http import AsyncHttpClient, HttpClient
from ..models.config import BrowserConfig, NgpullConfig
from ..models.records import (
    AudioDetailRecord,
    PlaylistRecord,
    SearchOptions,
    SearchResultRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Builds a rendered-page session; must be an async context manager with
# navigate(url) and evaluate(expression)
SessionFactory = Callable[[BrowserConfig], Any]


@dataclass(frozen=True)
class Audio:
    """An audio page record paired with the client that produced it."""

    client: NewgroundsClient = field(repr=False)
    data: AudioDetailRecord

    async def get_reviews(self) -> list[dict[str, Any]]:
        """
        Reviews of this audio.

        Review extraction is not implemented; this always returns an empty
        list. ``data.reviews_present`` reports whether a review block exists.
        """
        return []


@dataclass(frozen=True)
class Playlist:
    """A playlist record paired with the client that produced it."""

    client: NewgroundsClient = field(repr=False)
    data: PlaylistRecord


class NewgroundsClient:
    """
    Primary API: search audio, read audio pages and playlists.

    Search and audio pages are fetched as static markup; playlists are
    rendered in a headless browser because their items are client-side.

    Example:
        async with NewgroundsClient() as client:
            results = await client.search_audio("chiptune")
            audio = await client.get_audio(results[0].id)
            print(audio.data.info.listens)
    """

    def __init__(
        self,
        config: Optional[NgpullConfig] = None,
        http_client: Optional[HttpClient] = None,
        static_extractor: Optional[StaticExtractor] = None,
        rendered_extractor: Optional[RenderedExtractor] = None,
        session_factory: Optional[SessionFactory] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Network, browser and logging settings
            http_client: HTTP client to use instead of an owned AsyncHttpClient
            static_extractor: Extractor for search and audio pages
            rendered_extractor: Extractor for playlist pages
            session_factory: Builds a browser session (defaults to BrowserSession)
        """
        self.config = config or NgpullConfig()
        self._base_url = self.config.network.base_url.rstrip("/")
        self._static = static_extractor or StaticDocumentExtractor(base_url=self._base_url)
        self._rendered = rendered_extractor or RenderedDocumentExtractor()
        self._session_factory: SessionFactory = session_factory or BrowserSession

        self._owns_http_client = http_client is None
        self._http_client: Optional[HttpClient] = http_client
        self._owned_client: Optional[AsyncHttpClient] = None

    async def __aenter__(self) -> NewgroundsClient:
        """Enter async context and open the HTTP session if owned."""
        if self._owns_http_client:
            self._owned_client = AsyncHttpClient(
                user_agent=self.config.network.user_agent,
                default_timeout=self.config.network.timeout,
            )
            await self._owned_client.__aenter__()
            self._http_client = self._owned_client
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the owned HTTP session."""
        if self._owned_client is not None:
            await self._owned_client.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_client = None
            self._http_client = None

    # URLs

    def search_url(self, terms: str, options: Optional[SearchOptions] = None) -> str:
        options = options or SearchOptions()
        query = urlencode(
            {"terms": terms, "page": options.page, "sort": options.sort_by.value},
            quote_via=quote,
        )
        return f"{self._base_url}/search/conduct/audio?{query}"

    def audio_url(self, audio_id: str) -> str:
        return f"{self._base_url}/audio/listen/{audio_id}"

    def playlist_url(self, playlist_id: str) -> str:
        return f"{self._base_url}/playlist/{playlist_id}"

    # Operations

    async def _fetch_document(self, url: str) -> str:
        """
        Fetch page markup.

        Raises:
            FetchError: If the response status is not 2xx
        """
        if self._http_client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        response = await self._http_client.get(url)
        if not response.ok:
            logger.error(f"Fetch failed for {url}: {response.status_code} {response.reason}")
            raise FetchError(url, response.status_code, response.reason)
        return self._http_client.decode_content(response)

    async def search_audio(
        self,
        terms: str,
        options: Optional[SearchOptions] = None,
    ) -> list[SearchResultRecord]:
        """
        Search audio submissions.

        Args:
            terms: Search terms
            options: Page number and sort order

        Returns:
            Results of the requested page, in page order
        """
        html = await self._fetch_document(self.search_url(terms, options))
        listings = self._static.parse_search_results(html)
        return [build_search_result(listing) for listing in listings]

    async def get_audio(self, audio_id: str) -> Audio:
        """
        Read an audio listen page.

        Args:
            audio_id: Numeric audio id

        Returns:
            Audio wrapper holding the detail record
        """
        url = self.audio_url(audio_id)
        html = await self._fetch_document(url)
        fields = self._static.parse_audio_detail(html, url)
        return Audio(self, build_audio_detail(fields, audio_id, url))

    async def get_playlist(self, playlist_id: str) -> Playlist:
        """
        Read a playlist page in a browser session.

        The session is closed whether extraction succeeds or raises.

        Args:
            playlist_id: Playlist path, e.g. ``"someuser/chill-mix"``

        Returns:
            Playlist wrapper holding the playlist record
        """
        url = self.playlist_url(playlist_id)
        async with self._session_factory(self.config.browser) as session:
            await session.navigate(url)
            raw = await self._rendered.parse_playlist(session)
        return Playlist(self, build_playlist(raw, url))


def _run_blocking(
    name: str,
    operation: Callable[[NewgroundsClient], Awaitable[T]],
    config: Optional[NgpullConfig],
) -> T:
    # Detect if we're already in an async context
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError(f"{name}() called from async context. Use 'async with NewgroundsClient()' instead.")

    async def run() -> T:
        async with NewgroundsClient(config) as client:
            return await operation(client)

    return asyncio.run(run())


def search_audio_blocking(
    terms: str,
    options: Optional[SearchOptions] = None,
    config: Optional[NgpullConfig] = None,
) -> list[SearchResultRecord]:
    """
    Blocking audio search.

    WARNING: Do not call from within an existing event loop. Use the async
    NewgroundsClient API instead.
    """
    return _run_blocking("search_audio_blocking", lambda client: client.search_audio(terms, options), config)


def get_audio_blocking(audio_id: str, config: Optional[NgpullConfig] = None) -> AudioDetailRecord:
    """Blocking audio page read; returns the record itself."""

    async def operation(client: NewgroundsClient) -> AudioDetailRecord:
        return (await client.get_audio(audio_id)).data

    return _run_blocking("get_audio_blocking", operation, config)


def get_playlist_blocking(playlist_id: str, config: Optional[NgpullConfig] = None) -> PlaylistRecord:
    """Blocking playlist read; returns the record itself."""

    async def operation(client: NewgroundsClient) -> PlaylistRecord:
        return (await client.get_playlist(playlist_id)).data

    return _run_blocking("get_playlist_blocking", operation, config)
