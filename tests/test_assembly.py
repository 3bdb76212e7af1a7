"""Tests for record assembly."""

import pytest
from pydantic import ValidationError

from ngpull.assembly import (
    build_audio_detail,
    build_playlist,
    build_playlist_item,
    build_search_result,
)
from ngpull.extraction import StaticDocumentExtractor

from test_static_extractor import AUDIO_HTML, AUDIO_URL, MINIMAL_AUDIO_HTML

LISTING = {
    "id": "111",
    "title": "Song One",
    "url": "https://www.newgrounds.com/audio/listen/111",
    "icon": "https://aicon.ngfiles.com/111.png",
    "author": "ArtistA",
    "description": "A short tune",
    "views": 1234,
    "score": 4.52,
}


class TestBuildSearchResult:
    """Tests for build_search_result."""

    def test_maps_listing_keys(self):
        """Test the listing to record key mapping."""
        assert build_search_result(LISTING).to_dict() == {
            "title": "Song One",
            "link": "https://www.newgrounds.com/audio/listen/111",
            "id": "111",
            "thumbnail": "https://aicon.ngfiles.com/111.png",
            "artist": "ArtistA",
            "shortDescription": "A short tune",
            "score": 4.52,
            "views": 1234,
        }

    def test_absent_type_and_genre_are_omitted(self):
        """Test that unset optional keys do not appear at all."""
        record = build_search_result(LISTING).to_dict()
        assert "type" not in record
        assert "genre" not in record

    def test_type_and_genre_present(self):
        """Test that type and genre are emitted when known."""
        record = build_search_result(dict(LISTING, type="Song", genre="Techno")).to_dict()
        assert record["type"] == "Song"
        assert record["genre"] == "Techno"

    def test_unparsable_numbers_are_null(self):
        """Test that required numeric keys are present and null."""
        record = build_search_result(dict(LISTING, views=None, score=None)).to_dict()
        assert record["views"] is None
        assert record["score"] is None

    def test_missing_author_is_empty_string(self):
        """Test that required text keys default to the empty string."""
        listing = {key: value for key, value in LISTING.items() if key not in ("author", "description")}
        record = build_search_result(listing)
        assert record.artist == ""
        assert record.short_description == ""

    def test_records_are_immutable(self):
        """Test that records cannot be modified."""
        record = build_search_result(LISTING)
        with pytest.raises(ValidationError):
            record.title = "changed"


class TestBuildPlaylist:
    """Tests for build_playlist and build_playlist_item."""

    def test_item_optional_keys(self):
        """Test that empty optional item fields are absent."""
        item = build_playlist_item(dict(LISTING, author="", description="")).to_dict()
        assert "author" not in item
        assert "description" not in item
        assert "genre" not in item
        assert item["views"] == 1234

    def test_playlist(self):
        """Test header mapping and item order."""
        raw = {
            "id": "someuser/chill-mix",
            "title": "Chill Mix",
            "icon": "https://img.ngfiles.com/playlists/1.png",
            "author_name": "someuser",
            "author_url": "https://someuser.newgrounds.com",
            "author_icon": "",
            "items": [LISTING, dict(LISTING, id="112")],
        }
        record = build_playlist(raw, "https://www.newgrounds.com/playlist/someuser/chill-mix").to_dict()
        assert record["id"] == "someuser/chill-mix"
        assert record["url"] == "https://www.newgrounds.com/playlist/someuser/chill-mix"
        assert record["thumbnail"] == "https://img.ngfiles.com/playlists/1.png"
        assert record["title"] == "Chill Mix"
        assert record["author"] == {"name": "someuser", "url": "https://someuser.newgrounds.com"}
        assert [item["id"] for item in record["items"]] == ["111", "112"]

    def test_playlist_without_title(self):
        """Test that a missing title is omitted."""
        record = build_playlist({"id": "a/b", "title": "", "items": []}, "https://x/playlist/a/b").to_dict()
        assert "title" not in record
        assert record["items"] == []


class TestBuildAudioDetail:
    """Tests for build_audio_detail."""

    @pytest.fixture
    def extractor(self):
        return StaticDocumentExtractor()

    def test_full_page(self, extractor):
        """Test the camelCase record of a complete page."""
        fields = extractor.parse_audio_detail(AUDIO_HTML, AUDIO_URL)
        record = build_audio_detail(fields, "1234567", AUDIO_URL).to_dict()

        assert record["id"] == "1234567"
        assert record["url"] == AUDIO_URL
        assert record["title"] == "Night Drive"
        assert record["credits"]["artist"] == "SomeArtist"
        assert record["info"]["listens"] == 12345
        assert record["info"]["faves"] == {"count": 87, "viewUrl": "/audio/favorites/1234567"}
        assert record["info"]["fileInfo"] == {"type": "Song", "size": "3.2 MB", "durationSeconds": 150}
        assert record["info"]["genre"]["browseUrl"].endswith("?genre=42")
        assert record["info"]["frontpaged"]["time"] == "2023-07-01T00:00:00.000Z"
        assert record["appearances"]["label"] == "Appears in Synthwave Picks"
        assert record["related"][0]["artist"] == "Other"
        assert record["audio"]["rating"] == "T"
        assert record["audio"]["fileUrl"].endswith(".mp3")
        assert record["authorComments"].startswith("Made with")
        assert record["licensingTerms"].startswith("You may")
        assert record["reviewsPresent"] is True

    def test_minimal_page_omits_absent_fields(self, extractor):
        """Test that optional fields not on the page are absent, not null."""
        fields = extractor.parse_audio_detail(MINIMAL_AUDIO_HTML, AUDIO_URL)
        record = build_audio_detail(fields, "1234567", AUDIO_URL).to_dict()

        for key in ("title", "caption", "icon", "appearances", "authorComments"):
            assert key not in record
        assert record["credits"] == {"artist": ""}
        assert record["info"] == {
            "listens": 12345,
            "fileInfo": {"type": "MP3", "size": "3.2 MB", "durationSeconds": 150},
        }
        assert record["related"] == []
        assert record["licensingTerms"] == ""
        assert record["audio"] == {}
        assert record["reviewsPresent"] is False

    def test_unparsable_counter_is_left_out(self):
        """Test that a counter that failed to parse is not emitted."""
        record = build_audio_detail({"info": {"listens": None, "votes": 3}}, "1", "https://x/audio/listen/1")
        assert record.to_dict()["info"] == {"votes": 3}

    def test_dropped_frontpage_is_absent(self):
        """Test that an unusable frontpage entry does not appear."""
        record = build_audio_detail({"info": {"frontpaged": None}}, "1", "https://x/audio/listen/1")
        assert "frontpaged" not in record.to_dict()["info"]
