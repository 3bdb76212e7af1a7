"""Extraction from statically fetched pages using BeautifulSoup."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Union
from urllib.parse import parse_qs, urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from ..coercion import coerce_count, coerce_duration, coerce_score, coerce_timestamp
from ..conversion import HtmlToText, MarkupConverter
from ..models.config import DEFAULT_BASE_URL
from .fields import TAGS_SEPARATOR, normalize_key, walk_definition_lists
from .protocols import RawFieldMap, RawListing

logger = logging.getLogger(__name__)

# Search results page
RESULT_BLOCK_SELECTOR = ".audio-wrapper"
RESULT_ANCHOR_SELECTOR = ".item-audiosubmission"

# Audio page
STATS_SELECTOR = "dl.sidestats"
FALLBACK_GENRE_LINK_SELECTOR = ".sidestats.flex-1 dd a[href]"
AUTHOR_LINK_SELECTOR = ".authorlinks .item-details-main h4 a"
AUTHOR_ICON_SELECTOR = ".authorlinks .user-icon-bordered image"
FAVES_LINK_SELECTOR = "#faves_load"
FRONTPAGE_LINK_SELECTOR = ".frontpage a"
APPEARANCE_SELECTOR = "ul.itemlist.alternating > li > span"
RELATED_SELECTOR = "div.pod-body.audio-view > ul > li"
LICENSE_SELECTOR = "div#creative_commons .pod-body.creative-commons"
AUTHOR_COMMENTS_SELECTOR = "div#author_comments"
RATING_SELECTOR = "div[itemprop='itemReviewed'] > h2"
REVIEWS_SELECTOR = "div > div .pod-body.review"

# "MP3 (3.2 MB 2:30)"
_FILE_INFO_RE = re.compile(
    r"^(?P<type>[^()]+?)\s*\(\s*(?P<size>[\d.,]+\s*[KMGT]?i?B)\s+(?P<duration>[^)]+?)\s*\)$",
    re.IGNORECASE,
)


def _text(element: Optional[Tag]) -> str:
    return element.get_text().strip() if element is not None else ""


def _attr(element: Optional[Tag], name: str) -> Optional[str]:
    if element is None:
        return None
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if value else None


def _scalar(value: Union[str, list[str], None]) -> Optional[str]:
    """Join multi-valued raw fields into one string."""
    if isinstance(value, list):
        return " ".join(value)
    return value


def _last_segment(url: str) -> str:
    return url[url.rfind("/") + 1 :]


def parse_star_score(title: Optional[str]) -> Optional[float]:
    """
    Read the value out of a star-score title such as ``"Score: 4.5/5"``.

    Args:
        title: The ``title`` attribute of the star-score element

    Returns:
        The score value, or None
    """
    if not title:
        return None
    _, _, rest = title.strip().partition(" ")
    return coerce_score(rest or title)


def split_file_info(raw: Union[str, list[str], None]) -> Optional[dict[str, Any]]:
    """
    Split the file-info field into type, size and duration.

    Accepts the three-value form ``["MP3", "3.2 MB", "2:30"]`` or the
    single-text form ``"MP3 (3.2 MB 2:30)"``.
    """
    if raw is None:
        return None

    if isinstance(raw, list):
        parts = list(raw)
    else:
        match = _FILE_INFO_RE.match(raw.strip())
        if match:
            parts = [match.group("type"), match.group("size"), match.group("duration")]
        else:
            logger.warning(f"Unrecognised file info: {raw!r}")
            parts = [raw.strip()]

    return {
        "type": parts[0],
        "size": parts[1] if len(parts) > 1 else "",
        "duration_seconds": coerce_duration(parts[2]) if len(parts) > 2 else None,
    }


class StaticDocumentExtractor:
    """
    Extract listings and audio details from static page markup.

    Example:
        extractor = StaticDocumentExtractor()
        listings = extractor.parse_search_results(html)
        fields = extractor.parse_audio_detail(html, "https://www.newgrounds.com/audio/listen/1")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        converter: Optional[MarkupConverter] = None,
        parser: str = "html.parser",
    ):
        """
        Initialize the extractor.

        Args:
            base_url: Site root for resolving root-relative links
            converter: Rich-text converter for comment/licensing blocks
            parser: BeautifulSoup parser backend
        """
        self._base_url = base_url
        self._converter = converter or HtmlToText()
        self._parser = parser

    def _soup(self, html: Union[str, bytes]) -> BeautifulSoup:
        return BeautifulSoup(html, self._parser)

    # Search results

    def parse_search_results(self, html: Union[str, bytes]) -> list[RawListing]:
        """
        Extract every result block from a search results page.

        Args:
            html: Raw page markup

        Returns:
            Listings in page order; blocks without their anchor are skipped
        """
        soup = self._soup(html)
        listings: list[RawListing] = []

        for index, block in enumerate(soup.select(RESULT_BLOCK_SELECTOR)):
            anchor = block.select_one(RESULT_ANCHOR_SELECTOR)
            if anchor is None:
                logger.warning(f"Search result {index} has no audio anchor, skipping")
                continue
            listings.append(self._parse_listing(anchor))

        logger.debug(f"Parsed {len(listings)} search results")
        return listings

    def _parse_listing(self, anchor: Tag) -> RawListing:
        link = _attr(anchor, "href") or ""
        listing: RawListing = {
            "id": _last_segment(link),
            "title": _attr(anchor, "title") or "",
            "url": link,
            "icon": _attr(anchor.select_one(".item-icon img"), "src") or "",
        }

        author = _text(anchor.select_one(".detail-title strong"))
        if author:
            listing["author"] = author
        description = _text(anchor.select_one(".detail-description"))
        if description:
            listing["description"] = description

        meta = anchor.select_one(".item-details-meta")
        listing["score"] = parse_star_score(_attr(meta.select_one(".star-score"), "title") if meta else None)

        values = meta.select("dl dd") if meta else []
        views_text = ""
        if len(values) == 1:
            views_text = _text(values[0])
        elif len(values) == 2:
            views_text = _text(values[1])
        elif len(values) >= 3:
            item_type = _text(values[0])
            genre = _text(values[1])
            if item_type:
                listing["type"] = item_type
            if genre:
                listing["genre"] = genre
            views_text = _text(values[2])
        listing["views"] = coerce_count(views_text) if views_text else None

        return listing

    # Audio page

    def parse_audio_detail(self, html: Union[str, bytes], url: str) -> dict[str, Any]:
        """
        Extract the fields of an audio listen page.

        Args:
            html: Raw page markup
            url: Page URL

        Returns:
            Field mapping with coerced values; missing values are None
        """
        soup = self._soup(html)
        raw = walk_definition_lists(soup.select(STATS_SELECTOR) or soup.find_all("dl"))

        author_link = soup.select_one(AUTHOR_LINK_SELECTOR)
        author_icon = soup.select_one(AUTHOR_ICON_SELECTOR)

        return {
            "title": self._meta(soup, "og:title"),
            "caption": self._meta(soup, "og:description"),
            "icon": self._meta(soup, "og:image"),
            "credits": {
                "artist": _text(author_link),
                "url": _attr(author_link, "href"),
                "icon": _attr(author_icon, "href") or _attr(author_icon, "xlink:href"),
            },
            "info": self._parse_info(raw, soup),
            "appearances": self._parse_appearance(soup),
            "related": self._parse_related(soup),
            "licensing_terms": self._convert(soup.select_one(LICENSE_SELECTOR)),
            "audio": {
                "rating": self._parse_rating(soup),
                "download_url": _attr(soup.select_one("a.icon-download"), "href"),
                "file_url": self._meta(soup, "og:audio"),
                "share_url": _attr(soup.select_one("a.icon-share"), "href"),
            },
            "author_comments": self._convert(soup.select_one(AUTHOR_COMMENTS_SELECTOR)),
            "reviews_present": soup.select_one(REVIEWS_SELECTOR) is not None,
        }

    def _meta(self, soup: BeautifulSoup, prop: str) -> Optional[str]:
        return _attr(soup.find("meta", attrs={"property": prop}), "content")

    def _convert(self, element: Optional[Tag]) -> str:
        if element is None:
            return ""
        return self._converter.convert(element.decode_contents())

    def _parse_info(self, raw: RawFieldMap, soup: BeautifulSoup) -> dict[str, Any]:
        info: dict[str, Any] = {}

        for key in ("listens", "downloads", "votes"):
            if raw.get(key):
                info[key] = coerce_count(_scalar(raw[key]))

        if raw.get("faves"):
            info["faves"] = {
                "count": coerce_count(_scalar(raw["faves"])),
                "view_url": _attr(soup.select_one(FAVES_LINK_SELECTOR), "href"),
            }

        score_text = _scalar(raw.get("score"))
        if score_text:
            score = coerce_score(score_text)
            info["score"] = score if score is not None else score_text

        if raw.get("uploaded"):
            info["uploaded"] = coerce_timestamp(raw["uploaded"])

        genre_name = _scalar(raw.get("genre"))
        if genre_name:
            info["genre"] = self._parse_genre(genre_name, soup)

        file_info = raw.get("file_info") or raw.get("file")
        if file_info:
            info["file_info"] = split_file_info(file_info)

        tags = _scalar(raw.get("tags"))
        if tags:
            info["tags"] = tags.split(TAGS_SEPARATOR)

        frontpage = soup.select_one(FRONTPAGE_LINK_SELECTOR)
        if frontpage is not None:
            info["frontpaged"] = self._parse_frontpaged(frontpage)

        return info

    def _genre_link(self, soup: BeautifulSoup) -> Optional[Tag]:
        for label in soup.find_all("dt"):
            if normalize_key(label.get_text()) != "genre":
                continue
            value = label.find_next_sibling("dd")
            if value is not None:
                anchor = value.find("a", href=True)
                if anchor is not None:
                    return anchor
        return soup.select_one(FALLBACK_GENRE_LINK_SELECTOR)

    def _parse_genre(self, name: str, soup: BeautifulSoup) -> dict[str, Any]:
        browse_url = _attr(self._genre_link(soup), "href")
        genre_id = None
        if browse_url:
            genre_id = parse_qs(urlparse(browse_url).query).get("genre", [None])[0]
        return {"id": genre_id, "name": name, "browse_url": browse_url}

    def _parse_frontpaged(self, link: Tag) -> Optional[dict[str, str]]:
        time = coerce_timestamp(_text(link))
        href = _attr(link, "href")
        if time is None or not href:
            logger.warning("Frontpage link present but its date or URL is unusable")
            return None
        return {"time": time, "url": urljoin(self._base_url, href)}

    def _parse_appearance(self, soup: BeautifulSoup) -> Optional[dict[str, Any]]:
        label = _text(soup.select_one(APPEARANCE_SELECTOR))
        if not label:
            return None
        return {
            "label": label,
            "url": _attr(soup.select_one(f"{APPEARANCE_SELECTOR} > a"), "href"),
        }

    def _parse_related(self, soup: BeautifulSoup) -> list[dict[str, Any]]:
        related = []
        for entry in soup.select(RELATED_SELECTOR):
            url = _attr(entry.select_one("a.item-link"), "href")
            related.append(
                {
                    "id": _last_segment(url) if url else None,
                    "title": _text(entry.select_one("a.item-link > h4 > span")),
                    "url": url,
                    "artist": _text(entry.select_one("a.item-link > h4 span strong")),
                }
            )
        return related

    def _parse_rating(self, soup: BeautifulSoup) -> Optional[str]:
        heading = soup.select_one(RATING_SELECTOR)
        if heading is None:
            return None
        for css_class in heading.get("class") or []:
            prefix, _, rating = css_class.partition("-")
            if prefix == "rated" and rating:
                return rating.upper()
        return None
