"""ngpull configuration and record models."""

from .config import BrowserConfig, NetworkConfig, NgpullConfig
from .records import (
    Appearance,
    AudioDetailRecord,
    AudioInfo,
    AudioLinks,
    Credits,
    Faves,
    FileInfo,
    Frontpaged,
    Genre,
    PlaylistAuthor,
    PlaylistItem,
    PlaylistRecord,
    Record,
    RelatedItem,
    SearchOptions,
    SearchResultRecord,
    SearchSort,
)

__all__ = [
    # Config
    "BrowserConfig",
    "NetworkConfig",
    "NgpullConfig",
    # Search
    "SearchOptions",
    "SearchResultRecord",
    "SearchSort",
    # Audio
    "Appearance",
    "AudioDetailRecord",
    "AudioInfo",
    "AudioLinks",
    "Credits",
    "Faves",
    "FileInfo",
    "Frontpaged",
    "Genre",
    "RelatedItem",
    # Playlist
    "PlaylistAuthor",
    "PlaylistItem",
    "PlaylistRecord",
    "Record",
]
