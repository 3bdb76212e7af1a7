"""
ngpull - Extract audio, search and playlist records from Newgrounds pages.

Usage:
    from ngpull import NewgroundsClient, SearchOptions, SearchSort

    async with NewgroundsClient() as client:
        results = await client.search_audio(
            "chiptune",
            SearchOptions(page=1, sort_by=SearchSort.SCORE_DESC),
        )
        for result in results:
            print(result.to_dict())
"""

__version__ = "1.0.0"

from .core import (
    Audio,
    NewgroundsClient,
    Playlist,
    get_audio_blocking,
    get_playlist_blocking,
    search_audio_blocking,
)
from .errors import BrowserUnavailableError, FetchError, NgpullError
from .models import (
    AudioDetailRecord,
    BrowserConfig,
    NetworkConfig,
    NgpullConfig,
    PlaylistItem,
    PlaylistRecord,
    RelatedItem,
    SearchOptions,
    SearchResultRecord,
    SearchSort,
)

__all__ = [
    "__version__",
    # Core
    "NewgroundsClient",
    "Audio",
    "Playlist",
    "search_audio_blocking",
    "get_audio_blocking",
    "get_playlist_blocking",
    # Config
    "NgpullConfig",
    "NetworkConfig",
    "BrowserConfig",
    # Records
    "SearchOptions",
    "SearchSort",
    "SearchResultRecord",
    "AudioDetailRecord",
    "RelatedItem",
    "PlaylistRecord",
    "PlaylistItem",
    # Errors
    "NgpullError",
    "FetchError",
    "BrowserUnavailableError",
]
