"""
Record models returned to callers.

Records are frozen pydantic models. Attributes are snake_case; ``to_dict()``
emits the camelCase shape and leaves out optional fields that were never
set, so "absent" and "null" stay distinguishable.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SearchSort(str, Enum):
    """Sort orders accepted by the audio search page."""

    RELEVANCE = "relevance"
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    SCORE_DESC = "score-desc"
    SCORE_ASC = "score-asc"
    VIEWS_DESC = "views-desc"
    VIEWS_ASC = "views-asc"


class SearchOptions(BaseModel):
    """Options for a single audio search request."""

    page: int = Field(1, ge=1, description="Result page to request")
    sort_by: SearchSort = Field(SearchSort.RELEVANCE, description="Result ordering")

    model_config = ConfigDict(extra="forbid")


class Record(BaseModel):
    """Base for all immutable records."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to the camelCase mapping, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class SearchResultRecord(Record):
    """One entry on an audio search results page."""

    title: str
    link: str
    id: str
    thumbnail: str
    artist: str
    short_description: str
    score: Optional[float]
    type: Optional[str] = None
    genre: Optional[str] = None
    views: Optional[int]


class Credits(Record):
    artist: str
    url: Optional[str] = None
    icon: Optional[str] = None


class Faves(Record):
    count: Optional[int] = None
    view_url: Optional[str] = None


class Genre(Record):
    id: Optional[str] = None
    name: str
    browse_url: Optional[str] = None


class FileInfo(Record):
    type: str
    size: str
    duration_seconds: Optional[int]


class Frontpaged(Record):
    time: str
    url: str


class AudioInfo(Record):
    """
    Statistics block of an audio page.

    Counters are left unset when the page text cannot be parsed.
    """

    listens: Optional[int] = None
    faves: Optional[Faves] = None
    downloads: Optional[int] = None
    votes: Optional[int] = None
    score: Optional[Union[float, str]] = None
    tags: Optional[list[str]] = None
    uploaded: Optional[str] = None
    genre: Optional[Genre] = None
    file_info: Optional[FileInfo] = None
    frontpaged: Optional[Frontpaged] = None


class Appearance(Record):
    label: str
    url: Optional[str] = None


class RelatedItem(Record):
    id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    artist: Optional[str] = None


class AudioLinks(Record):
    rating: Optional[str] = None
    download_url: Optional[str] = None
    file_url: Optional[str] = None
    share_url: Optional[str] = None


class AudioDetailRecord(Record):
    """Everything extracted from an audio listen page."""

    id: str
    title: Optional[str] = None
    caption: Optional[str] = None
    url: str
    icon: Optional[str] = None
    credits: Credits
    info: AudioInfo
    appearances: Optional[Appearance] = None
    related: list[RelatedItem]
    licensing_terms: str
    audio: AudioLinks
    author_comments: Optional[str] = None
    reviews_present: bool


class PlaylistAuthor(Record):
    name: Optional[str] = None
    url: Optional[str] = None
    icon: Optional[str] = None


class PlaylistItem(Record):
    id: str
    title: str
    author: Optional[str] = None
    description: Optional[str] = None
    url: str
    views: Optional[int]
    score: Optional[float]
    genre: Optional[str] = None
    icon: str


class PlaylistRecord(Record):
    """A playlist page and its ordered items."""

    id: str
    title: Optional[str] = None
    url: str
    thumbnail: str
    author: PlaylistAuthor
    items: list[PlaylistItem]
