"""Unit tests for film cover and logo selection."""

from festgrid.services.images import resolve_cover, resolve_logo

GALLERY = ["https://img/0.jpg", "https://img/1.jpg", "https://img/2.jpg"]
POSTER = "https://img/poster.jpg"


class TestResolveCover:
    def test_cover_index_in_range(self) -> None:
        assert resolve_cover(GALLERY, 2, POSTER) == "https://img/2.jpg"

    def test_index_beyond_shrunk_gallery_uses_poster(self) -> None:
        assert resolve_cover(GALLERY[:1], 2, POSTER) == POSTER

    def test_no_index_uses_poster(self) -> None:
        assert resolve_cover(GALLERY, None, POSTER) == POSTER

    def test_no_poster_uses_first_gallery_image(self) -> None:
        assert resolve_cover(GALLERY, None, None) == "https://img/0.jpg"

    def test_negative_index_is_out_of_range(self) -> None:
        assert resolve_cover(GALLERY, -1, None) == "https://img/0.jpg"

    def test_blank_gallery_entry_counts_as_missing(self) -> None:
        assert resolve_cover(["", "https://img/1.jpg"], 0, POSTER) == POSTER

    def test_blank_poster_is_skipped(self) -> None:
        assert resolve_cover(GALLERY, None, "  ") == "https://img/0.jpg"

    def test_nothing_available(self) -> None:
        assert resolve_cover([], None, None) is None
        assert resolve_cover(None, 0, None) is None


class TestResolveLogo:
    def test_logo_index_in_range(self) -> None:
        assert resolve_logo(GALLERY, 1) == "https://img/1.jpg"

    def test_out_of_range_has_no_fallback(self) -> None:
        assert resolve_logo(GALLERY, 5) is None

    def test_no_index(self) -> None:
        assert resolve_logo(GALLERY, None) is None
