"""
Assemble extracted fields into records.

Required fields are always set (``""`` for text, ``None`` for numbers).
Optional fields are only set when there is a value, so they are absent
from ``Record.to_dict()`` rather than null.
"""

from __future__ import annotations

from typing import Any, Optional

from .extraction.protocols import RawListing, RawPlaylist
from .models.records import (
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
    RelatedItem,
    SearchResultRecord,
)


def _present(**fields: Any) -> dict[str, Any]:
    """Keep only the fields that carry a value."""
    return {key: value for key, value in fields.items() if value is not None and value != ""}


def build_search_result(listing: RawListing) -> SearchResultRecord:
    """Build a search result record from a raw listing."""
    return SearchResultRecord(
        title=listing.get("title") or "",
        link=listing.get("url") or "",
        id=listing.get("id") or "",
        thumbnail=listing.get("icon") or "",
        artist=listing.get("author") or "",
        short_description=listing.get("description") or "",
        score=listing.get("score"),
        views=listing.get("views"),
        **_present(type=listing.get("type"), genre=listing.get("genre")),
    )


def build_playlist_item(listing: RawListing) -> PlaylistItem:
    """Build a playlist item record from a raw listing."""
    return PlaylistItem(
        id=listing.get("id") or "",
        title=listing.get("title") or "",
        url=listing.get("url") or "",
        icon=listing.get("icon") or "",
        views=listing.get("views"),
        score=listing.get("score"),
        **_present(
            author=listing.get("author"),
            description=listing.get("description"),
            genre=listing.get("genre"),
        ),
    )


def build_playlist(playlist: RawPlaylist, url: str) -> PlaylistRecord:
    """
    Build a playlist record.

    Args:
        playlist: Raw playlist from the rendered extractor
        url: Canonical playlist URL
    """
    return PlaylistRecord(
        id=playlist.get("id") or "",
        url=url,
        thumbnail=playlist.get("icon") or "",
        author=PlaylistAuthor(
            **_present(
                name=playlist.get("author_name"),
                url=playlist.get("author_url"),
                icon=playlist.get("author_icon"),
            )
        ),
        items=[build_playlist_item(item) for item in playlist.get("items") or []],
        **_present(title=playlist.get("title")),
    )


def _build_info(info: dict[str, Any]) -> AudioInfo:
    nested: dict[str, Any] = {}

    faves = info.get("faves")
    if faves:
        nested["faves"] = Faves(**_present(count=faves.get("count"), view_url=faves.get("view_url")))

    genre = info.get("genre")
    if genre and genre.get("name"):
        nested["genre"] = Genre(
            name=genre["name"],
            **_present(id=genre.get("id"), browse_url=genre.get("browse_url")),
        )

    file_info = info.get("file_info")
    if file_info:
        nested["file_info"] = FileInfo(
            type=file_info.get("type") or "",
            size=file_info.get("size") or "",
            duration_seconds=file_info.get("duration_seconds"),
        )

    frontpaged = info.get("frontpaged")
    if frontpaged:
        nested["frontpaged"] = Frontpaged(time=frontpaged["time"], url=frontpaged["url"])

    return AudioInfo(
        **nested,
        **_present(
            listens=info.get("listens"),
            downloads=info.get("downloads"),
            votes=info.get("votes"),
            score=info.get("score"),
            tags=info.get("tags") or None,
            uploaded=info.get("uploaded"),
        ),
    )


def _build_appearance(appearance: Optional[dict[str, Any]]) -> dict[str, Any]:
    if not appearance or not appearance.get("label"):
        return {}
    return {"appearances": Appearance(label=appearance["label"], **_present(url=appearance.get("url")))}


def build_audio_detail(fields: dict[str, Any], audio_id: str, url: str) -> AudioDetailRecord:
    """
    Build an audio detail record.

    Args:
        fields: Output of ``StaticDocumentExtractor.parse_audio_detail``
        audio_id: Audio id the page was requested for
        url: Canonical audio page URL
    """
    credits = fields.get("credits") or {}
    audio = fields.get("audio") or {}

    return AudioDetailRecord(
        id=audio_id,
        url=url,
        credits=Credits(
            artist=credits.get("artist") or "",
            **_present(url=credits.get("url"), icon=credits.get("icon")),
        ),
        info=_build_info(fields.get("info") or {}),
        related=[
            RelatedItem(
                **_present(
                    id=item.get("id"),
                    title=item.get("title"),
                    url=item.get("url"),
                    artist=item.get("artist"),
                )
            )
            for item in fields.get("related") or []
        ],
        licensing_terms=fields.get("licensing_terms") or "",
        audio=AudioLinks(
            **_present(
                rating=audio.get("rating"),
                download_url=audio.get("download_url"),
                file_url=audio.get("file_url"),
                share_url=audio.get("share_url"),
            )
        ),
        reviews_present=bool(fields.get("reviews_present")),
        **_build_appearance(fields.get("appearances")),
        **_present(
            title=fields.get("title"),
            caption=fields.get("caption"),
            icon=fields.get("icon"),
            author_comments=fields.get("author_comments"),
        ),
    )
