"""Unit tests for the Pillow pixel decoder."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from noticon.adapters.decoding import PillowDecoder
from noticon.domain.entities import RawImage
from noticon.domain.exceptions import DecodeFailed


@pytest.fixture
def decoder() -> PillowDecoder:
    """Create a PillowDecoder instance for testing."""
    return PillowDecoder()


class TestDecodeFile:
    """Tests for decoding icon files."""

    def test_png_with_alpha(self, decoder: PillowDecoder, tmp_path: Path, write_png) -> None:
        """Test an RGBA PNG keeps its dimensions and alpha channel."""
        path = write_png(tmp_path / "bell.png", size=(40, 20), color=(200, 40, 10, 128))

        buffer = decoder.decode_file(str(path))

        assert (buffer.width, buffer.height, buffer.channels) == (40, 20, 4)
        assert buffer.data[:4] == bytes((200, 40, 10, 128))

    def test_png_without_alpha(self, decoder: PillowDecoder, tmp_path: Path, write_png) -> None:
        """Test an RGB PNG decodes to a 3-channel buffer."""
        path = write_png(tmp_path / "bell.png", size=(8, 6), mode="RGB", color=(1, 2, 3))

        buffer = decoder.decode_file(str(path))

        assert (buffer.width, buffer.height, buffer.channels) == (8, 6, 3)
        assert buffer.data[:3] == bytes((1, 2, 3))

    def test_sixteen_bit_grey_png(self, decoder: PillowDecoder, tmp_path: Path) -> None:
        """Test 16-bit greyscale samples are rescaled to 8 bits rather than clipped."""
        samples = np.full((4, 4), 0x8000, dtype=np.uint16)
        samples[0, 1] = 0x0100
        samples[0, 2] = 0xFFFF
        path = tmp_path / "grey16.png"
        Image.fromarray(samples).save(path, format="PNG")

        buffer = decoder.decode_file(str(path))

        assert (buffer.width, buffer.height, buffer.channels) == (4, 4, 3)
        pixels = np.frombuffer(buffer.data, dtype=np.uint8).reshape(4, 4, 3)
        assert 127 <= pixels[0, 0, 0] <= 129
        assert tuple(pixels[0, 0]) == (pixels[0, 0, 0],) * 3
        assert pixels[0, 1, 0] <= 2
        assert pixels[0, 2, 0] == 255

    def test_xpm_with_transparent_colour(
        self, decoder: PillowDecoder, tmp_path: Path, write_xpm
    ) -> None:
        """Test an XPM with a "None" colour decodes with alpha."""
        buffer = decoder.decode_file(str(write_xpm(tmp_path / "bell.xpm")))

        assert (buffer.width, buffer.height, buffer.channels) == (4, 2, 4)
        pixels = np.frombuffer(buffer.data, dtype=np.uint8).reshape(2, 4, 4)
        assert tuple(pixels[0, 0]) == (255, 0, 0, 255)
        assert pixels[0, 2, 3] == 0

    def test_svg_rendered_at_intrinsic_size(
        self, decoder: PillowDecoder, tmp_path: Path, write_svg
    ) -> None:
        """Test an SVG is rasterised at its declared width and height."""
        buffer = decoder.decode_file(str(write_svg(tmp_path / "bell.svg", width=24, height=16)))

        assert (buffer.width, buffer.height) == (24, 16)
        assert buffer.has_alpha

    def test_tilde_is_expanded(
        self, decoder: PillowDecoder, tmp_path: Path, write_png, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test ~ paths are resolved against the home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))
        write_png(tmp_path / "icons" / "bell.png", size=(5, 7))

        buffer = decoder.decode_file("~/icons/bell.png")

        assert (buffer.width, buffer.height) == (5, 7)

    def test_missing_file(self, decoder: PillowDecoder, tmp_path: Path) -> None:
        """Test a missing file raises DecodeFailed naming the path."""
        path = str(tmp_path / "missing.png")
        with pytest.raises(DecodeFailed, match="missing.png"):
            decoder.decode_file(path)

    def test_corrupt_file(self, decoder: PillowDecoder, tmp_path: Path) -> None:
        """Test a file that is not an image raises DecodeFailed."""
        path = tmp_path / "corrupt.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(DecodeFailed):
            decoder.decode_file(str(path))

    def test_corrupt_svg(self, decoder: PillowDecoder, tmp_path: Path) -> None:
        """Test a malformed SVG raises DecodeFailed."""
        path = tmp_path / "broken.svg"
        path.write_text("<svg")
        with pytest.raises(DecodeFailed):
            decoder.decode_file(str(path))


class TestDecodeRaw:
    """Tests for decoding inline pixel data."""

    def test_tight_rows(self, decoder: PillowDecoder) -> None:
        """Test data without row padding is copied unchanged."""
        data = bytes(range(24))
        raw = RawImage(width=2, height=3, rowstride=8, bits_per_sample=8, has_alpha=True, data=data)

        buffer = decoder.decode_raw(raw)

        assert (buffer.width, buffer.height, buffer.channels) == (2, 3, 4)
        assert buffer.data == data

    def test_row_padding_is_dropped(self, decoder: PillowDecoder) -> None:
        """Test bytes past width * channels in each row are discarded."""
        rows = [bytes((1, 2, 3, 4, 5, 6)) + b"\xee\xee", bytes((7, 8, 9, 10, 11, 12)) + b"\xee\xee"]
        raw = RawImage(
            width=2, height=2, rowstride=8, bits_per_sample=8, has_alpha=False, data=b"".join(rows)
        )

        buffer = decoder.decode_raw(raw)

        assert buffer.channels == 3
        assert buffer.data == bytes(range(1, 13))

    def test_short_last_row(self, decoder: PillowDecoder) -> None:
        """Test a final row without trailing padding is accepted."""
        data = bytes((1, 2, 3)) + b"\x00" + bytes((4, 5, 6))
        raw = RawImage(width=1, height=2, rowstride=4, bits_per_sample=8, has_alpha=False, data=data)

        buffer = decoder.decode_raw(raw)

        assert buffer.data == bytes((1, 2, 3, 4, 5, 6))

    def test_sixteen_bit_samples(self, decoder: PillowDecoder) -> None:
        """Test 16-bit samples keep their most significant byte."""
        samples = np.array([0x1234, 0xABCD, 0xFF00], dtype=np.dtype("=u2"))
        raw = RawImage(
            width=1,
            height=1,
            rowstride=6,
            bits_per_sample=16,
            has_alpha=False,
            data=samples.tobytes(),
        )

        buffer = decoder.decode_raw(raw)

        assert buffer.data == bytes((0x12, 0xAB, 0xFF))
