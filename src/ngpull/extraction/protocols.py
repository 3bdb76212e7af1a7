"""Raw field shapes and protocol definitions shared by both extraction backends."""

from __future__ import annotations

from typing import Any, Optional, Protocol, TypedDict, Union

# Normalised label key -> raw value(s); None marks a label with no values
RawFieldMap = dict[str, Union[str, list[str], None]]


class RawListing(TypedDict, total=False):
    """
    One audio entry in a listing (search results or a playlist).

    Both backends emit this shape with values already coerced. Keys whose
    source text was empty are left out, except ``views`` and ``score``
    which are always present (None when unparsable).
    """

    id: str
    title: str
    url: str
    icon: str
    author: str
    description: str
    type: str
    genre: str
    views: Optional[int]
    score: Optional[float]


# Keys every RawListing carries regardless of backend
LISTING_REQUIRED_KEYS = frozenset({"id", "title", "url", "icon", "views", "score"})
LISTING_KEYS = frozenset(RawListing.__annotations__)


class RawPlaylist(TypedDict, total=False):
    """Playlist header fields plus its items, as produced by the rendered backend."""

    id: str
    title: str
    icon: str
    author_name: str
    author_url: str
    author_icon: str
    items: list[RawListing]


class ScriptEvaluator(Protocol):
    """
    Anything that can run a script in a rendered page.

    A Playwright ``Page`` and :class:`ngpull.browser.BrowserSession` both
    satisfy this.
    """

    async def evaluate(self, expression: str) -> Any:
        """Evaluate ``expression`` in the page and return its JSON-able result."""
        ...


class StaticExtractor(Protocol):
    """
    Protocol for extractors that work on markup fetched without scripts.
    """

    def parse_search_results(self, html: Union[str, bytes]) -> list[RawListing]:
        """
        Extract every result block from a search results page.

        Args:
            html: Raw page markup

        Returns:
            Listings in page order; blocks missing their anchor are skipped
        """
        ...

    def parse_audio_detail(self, html: Union[str, bytes], url: str) -> dict[str, Any]:
        """
        Extract the coerced fields of an audio page.

        Args:
            html: Raw page markup
            url: Page URL (used to resolve relative links)

        Returns:
            Nested field mapping; absent optional fields are left out
        """
        ...


class RenderedExtractor(Protocol):
    """
    Protocol for extractors that run inside a script-rendered page.
    """

    async def parse_playlist(self, evaluator: ScriptEvaluator) -> RawPlaylist:
        """
        Extract the playlist shown in a rendered page.

        Args:
            evaluator: Page (or session) positioned on the playlist URL

        Returns:
            Playlist header fields and its listings
        """
        ...
