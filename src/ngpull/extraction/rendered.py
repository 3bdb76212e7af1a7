"""Extraction from script-rendered playlist pages."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional
from urllib.parse import urlparse

from ..coercion import coerce_count, coerce_score
from .protocols import RawListing, RawPlaylist, ScriptEvaluator

logger = logging.getLogger(__name__)

_PLAYLIST_PATH_RE = re.compile(r"^/playlist/([^/]+/[^/]+)")

# Runs in the page. Returns raw strings only; coercion happens in Python.
PLAYLIST_SCRIPT = """
() => {
    const text = (root, selector) => {
        const el = root.querySelector(selector);
        return el && el.textContent ? el.textContent.trim() : "";
    };

    const result = {
        path: window.location.pathname,
        title: text(document, "#playlist_outer .pod-head h2"),
        icon: "",
        authorName: "",
        authorUrl: "",
        authorIcon: "",
        items: [],
    };

    const icon = document.querySelector("img.playlist-icon-large");
    if (icon) {
        result.icon = icon.src || "";
    }

    const author = document.querySelector("ul.authorlinks li div.item-user");
    if (author) {
        const link = author.querySelector("a.item-icon");
        if (link) {
            result.authorUrl = link.href || "";
            const img = link.querySelector("img");
            if (img) {
                result.authorIcon = img.src || "";
            } else {
                const svgImage = link.querySelector("svg image");
                if (svgImage) {
                    result.authorIcon =
                        svgImage.getAttribute("href") || svgImage.getAttribute("xlink:href") || "";
                }
            }
        }
        result.authorName = text(author, "h4 a");
    }

    const list = document.querySelector("#playlist_list");
    if (!list) {
        return result;
    }

    list.querySelectorAll("li").forEach((li) => {
        const wrapper = li.querySelector(".audio-wrapper");
        if (!wrapper) return;
        const link = wrapper.querySelector("a.item-audiosubmission");
        if (!link) return;

        const star = link.querySelector(".star-score");
        const itemIcon = link.querySelector(".item-icon img");
        result.items.push({
            url: link.href || "",
            title: link.getAttribute("title") || "",
            author: text(link, ".item-details-main .detail-title span strong"),
            description: text(link, ".detail-description"),
            viewsText: text(link, ".item-details-meta dl dd:nth-child(3)"),
            scoreText: star && star.title ? star.title : "",
            genre: text(link, ".item-details-meta dl dd:nth-child(2)"),
            icon: itemIcon ? itemIcon.src || "" : "",
        });
    });

    return result;
}
"""


def playlist_id_from_path(path: str) -> str:
    """
    Read the playlist id (``user/slug``) from a page path.

    ``/playlist/someuser/chill-mix`` gives ``someuser/chill-mix``.
    """
    match = _PLAYLIST_PATH_RE.match(path or "")
    return match.group(1) if match else ""


def item_id_from_url(url: str) -> str:
    """Return the fourth path segment of an item URL (``/audio/listen/<id>``)."""
    parts = urlparse(url).path.split("/")
    return parts[3] if len(parts) >= 4 else ""


def _score_from_title(title: str) -> Optional[float]:
    # "Score: 4.50 / 5.00"
    text = title.replace("Score:", "").strip()
    return coerce_score(text) if text else None


def normalize_item(raw: dict[str, Any]) -> Optional[RawListing]:
    """
    Coerce one raw item returned by :data:`PLAYLIST_SCRIPT`.

    Returns:
        The listing, or None if the item carries no URL
    """
    url = (raw.get("url") or "").strip()
    if not url:
        logger.warning("Playlist item without an audio link, skipping")
        return None

    views_text = (raw.get("viewsText") or "").strip()
    score_text = (raw.get("scoreText") or "").strip()

    listing: RawListing = {
        "id": item_id_from_url(url),
        "title": raw.get("title") or "",
        "url": url,
        "icon": raw.get("icon") or "",
        "views": coerce_count(views_text) if views_text else None,
        "score": _score_from_title(score_text) if score_text else None,
    }
    for key in ("author", "description", "genre"):
        value = (raw.get(key) or "").strip()
        if value:
            listing[key] = value  # type: ignore[literal-required]
    return listing


def normalize_playlist(raw: dict[str, Any]) -> RawPlaylist:
    """
    Coerce the raw mapping returned by :data:`PLAYLIST_SCRIPT`.

    Args:
        raw: Script result

    Returns:
        Playlist header fields and the items that had an audio link
    """
    items = []
    for raw_item in raw.get("items") or []:
        listing = normalize_item(raw_item)
        if listing is not None:
            items.append(listing)

    return {
        "id": playlist_id_from_path(raw.get("path") or ""),
        "title": raw.get("title") or "",
        "icon": raw.get("icon") or "",
        "author_name": raw.get("authorName") or "",
        "author_url": raw.get("authorUrl") or "",
        "author_icon": raw.get("authorIcon") or "",
        "items": items,
    }


class RenderedDocumentExtractor:
    """
    Extract a playlist from a page after its scripts have run.

    Playlist items are rendered client-side, so the extraction routine is
    evaluated inside the page rather than on fetched markup.

    Example:
        async with BrowserSession(config.browser) as session:
            await session.navigate(url)
            playlist = await RenderedDocumentExtractor().parse_playlist(session)
    """

    script = PLAYLIST_SCRIPT

    async def parse_playlist(self, evaluator: ScriptEvaluator) -> RawPlaylist:
        """
        Run the extraction routine in the page and coerce its result.

        Args:
            evaluator: Page or session positioned on the playlist URL

        Returns:
            Playlist header fields and its listings
        """
        raw = await evaluator.evaluate(self.script)
        if not isinstance(raw, dict):
            logger.warning(f"Playlist script returned {type(raw).__name__}, expected an object")
            raw = {}
        playlist = normalize_playlist(raw)
        logger.debug(f"Extracted {len(playlist['items'])} playlist items")
        return playlist
