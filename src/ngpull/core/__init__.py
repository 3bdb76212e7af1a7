"""Client facade and record wrappers."""

from .client import (
    Audio,
    NewgroundsClient,
    Playlist,
    get_audio_blocking,
    get_playlist_blocking,
    search_audio_blocking,
)

__all__ = [
    "Audio",
    "NewgroundsClient",
    "Playlist",
    "get_audio_blocking",
    "get_playlist_blocking",
    "search_audio_blocking",
]
