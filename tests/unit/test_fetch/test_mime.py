"""Unit tests for MIME lookup helpers."""

import pytest

from src.fetch.mime import guess_content_type, resolve_content_type, url_lookup_path


class TestGuessContentType:
    """Tests for guess_content_type."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("cat.png", "image/png"),
            ("/tmp/report.pdf", "application/pdf"),
            ("notes.txt", "text/plain"),
            ("data.json", "application/json"),
        ],
    )
    def test_known_extensions(self, path: str, expected: str) -> None:
        """Common extensions resolve from the standard registry."""
        assert guess_content_type(path) == expected

    def test_unknown_extension(self) -> None:
        """Unknown extensions return None."""
        assert guess_content_type("blob.unknownext") is None


class TestUrlLookupPath:
    """Tests for url_lookup_path."""

    def test_strips_query_and_fragment(self) -> None:
        """Only the path is used for extension lookup."""
        url = "https://storage.test/object/bucket/a.png?download=1#frag"

        assert url_lookup_path(url) == "/object/bucket/a.png"


class TestResolveContentType:
    """Tests for resolve_content_type."""

    def test_lookup_hit(self) -> None:
        """A lookup hit is returned as-is."""
        assert resolve_content_type(lambda _p: "image/gif", "x.gif") == "image/gif"

    def test_lookup_miss_falls_back(self) -> None:
        """A lookup miss falls back to octet-stream."""
        assert resolve_content_type(lambda _p: None, "x") == "application/octet-stream"

    def test_lookup_error_propagates(self) -> None:
        """Lookup exceptions are left for the caller to handle."""

        def broken(_path: str) -> str | None:
            msg = "bad media type"
            raise ValueError(msg)

        with pytest.raises(ValueError, match="bad media type"):
            resolve_content_type(broken, "x.png")
