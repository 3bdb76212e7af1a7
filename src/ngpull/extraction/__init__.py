"""Extraction backends: static markup and script-rendered pages."""

from .fields import normalize_key, walk_definition_list, walk_definition_lists
from .protocols import (
    LISTING_KEYS,
    LISTING_REQUIRED_KEYS,
    RawFieldMap,
    RawListing,
    RawPlaylist,
    RenderedExtractor,
    ScriptEvaluator,
    StaticExtractor,
)
from .rendered import PLAYLIST_SCRIPT, RenderedDocumentExtractor, normalize_playlist
from .static import StaticDocumentExtractor

__all__ = [
    # Protocols and shapes
    "RawFieldMap",
    "RawListing",
    "RawPlaylist",
    "LISTING_KEYS",
    "LISTING_REQUIRED_KEYS",
    "ScriptEvaluator",
    "StaticExtractor",
    "RenderedExtractor",
    # Field walker
    "normalize_key",
    "walk_definition_list",
    "walk_definition_lists",
    # Implementations
    "StaticDocumentExtractor",
    "RenderedDocumentExtractor",
    "PLAYLIST_SCRIPT",
    "normalize_playlist",
]
