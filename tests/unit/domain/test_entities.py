"""Unit tests for domain entities."""

import pytest

from noticon.domain.entities import SUFFIXES, IconSettings, PixelBuffer, RawImage, SearchPath


class TestSearchPath:
    """Tests for SearchPath directory splitting."""

    def test_directories_in_order(self) -> None:
        """Test directories are yielded in configuration order."""
        search_path = SearchPath("/a:/b:/c")
        assert list(search_path.directories()) == ["/a", "/b", "/c"]

    def test_single_directory(self) -> None:
        """Test a path without colons is a single directory."""
        assert list(SearchPath("/usr/share/icons").directories()) == ["/usr/share/icons"]

    def test_trailing_colon_yields_empty_entry(self) -> None:
        """Test a trailing colon produces an empty directory entry, like str.split."""
        value = "/a:/b:"
        assert list(SearchPath(value).directories()) == value.split(":")
        assert list(SearchPath(value).directories())[-1] == ""

    def test_empty_search_path(self) -> None:
        """Test an empty search path still yields one (empty) directory."""
        assert list(SearchPath("").directories()) == [""]

    def test_directories_are_lazy(self) -> None:
        """Test directories are produced one at a time."""
        directories = SearchPath("/a:/b").directories()
        assert next(directories) == "/a"
        assert next(directories) == "/b"
        with pytest.raises(StopIteration):
            next(directories)


class TestPixelBuffer:
    """Tests for PixelBuffer validation."""

    def test_valid_rgba_buffer(self) -> None:
        """Test a well-formed RGBA buffer."""
        buffer = PixelBuffer(width=2, height=3, channels=4, data=bytes(24))
        assert buffer.has_alpha is True
        assert buffer.mode == "RGBA"
        assert buffer.stride == 8

    def test_valid_rgb_buffer(self) -> None:
        """Test a well-formed RGB buffer."""
        buffer = PixelBuffer(width=2, height=3, channels=3, data=bytes(18))
        assert buffer.has_alpha is False
        assert buffer.mode == "RGB"

    def test_rejects_short_data(self) -> None:
        """Test a buffer whose data does not cover every pixel is rejected."""
        with pytest.raises(ValueError, match="length mismatch"):
            PixelBuffer(width=2, height=2, channels=3, data=bytes(11))

    def test_rejects_unknown_channel_count(self) -> None:
        """Test only RGB and RGBA layouts are accepted."""
        with pytest.raises(ValueError, match="channels"):
            PixelBuffer(width=1, height=1, channels=2, data=bytes(2))

    def test_zero_sized_buffer(self) -> None:
        """Test an empty buffer is representable."""
        buffer = PixelBuffer(width=0, height=5, channels=4, data=b"")
        assert buffer.width == 0


class TestIconSettings:
    """Tests for IconSettings."""

    def test_defaults(self) -> None:
        """Test default settings are unlimited with an empty search path."""
        settings = IconSettings()
        assert settings.max_icon_size == 0
        assert settings.search_path == SearchPath("")

    def test_rejects_negative_size(self) -> None:
        """Test a negative size limit is rejected."""
        with pytest.raises(ValueError, match="max_icon_size"):
            IconSettings(max_icon_size=-1)


def test_raw_image_channels() -> None:
    """Test RawImage reports 4 channels with alpha and 3 without."""
    assert RawImage(1, 1, 4, 8, True, bytes(4)).channels == 4
    assert RawImage(1, 1, 3, 8, False, bytes(3)).channels == 3


def test_suffix_order() -> None:
    """Test icon suffixes are tried as svg, png, xpm."""
    assert SUFFIXES == (".svg", ".png", ".xpm")
