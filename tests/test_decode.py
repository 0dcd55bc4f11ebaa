from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from framy.decode import decode_image, read_orientation
from framy.errors import DecodeError


def test_decode_rgb_png(make_image) -> None:
    path = make_image("a.png", (30, 20))

    img = decode_image(path)

    assert img.size == (30, 20)
    assert img.mode == "RGB"


def test_decode_keeps_alpha(make_image) -> None:
    path = make_image("a.png", (5, 5), color=(1, 2, 3, 4), mode="RGBA")

    assert decode_image(path).mode == "RGBA"


def test_grayscale_becomes_rgb(make_image) -> None:
    path = make_image("gray.png", (5, 5), color=128, mode="L")

    img = decode_image(path)

    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == (128, 128, 128)


def test_palette_with_transparency_becomes_rgba(tmp_path: Path) -> None:
    path = tmp_path / "pal.gif"
    img = Image.new("P", (4, 4), 0)
    img.putpalette([0, 0, 0, 255, 255, 255] + [0] * 762)
    img.save(path, transparency=0)

    assert decode_image(path).mode == "RGBA"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DecodeError, match="missing.jpg"):
        decode_image(tmp_path / "missing.jpg")


def test_not_an_image(tmp_path: Path) -> None:
    path = tmp_path / "notes.jpg"
    path.write_text("not really a photo", encoding="utf-8")

    with pytest.raises(DecodeError, match="not a recognized image format"):
        decode_image(path)


def test_truncated_file(tmp_path: Path) -> None:
    full = tmp_path / "full.png"
    Image.linear_gradient("L").resize((512, 512)).rotate(30).save(full)
    path = tmp_path / "cut.png"
    data = full.read_bytes()
    path.write_bytes(data[: len(data) // 2])

    with pytest.raises(DecodeError):
        decode_image(path)


def test_orientation_is_read_from_exif(make_image) -> None:
    path = make_image("rot.jpg", (20, 10), orientation=8)

    assert read_orientation(path) == 8


def test_missing_exif_is_not_an_error(make_image) -> None:
    assert read_orientation(make_image("plain.png", (4, 4))) is None
    assert read_orientation(make_image("plain.jpg", (4, 4))) is None


def test_orientation_of_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DecodeError):
        read_orientation(tmp_path / "gone.png")


def test_colour_key_transparency_becomes_alpha(tmp_path: Path) -> None:
    path = tmp_path / "keyed.png"
    img = Image.new("RGB", (4, 4), (255, 0, 0))
    img.putpixel((0, 0), (0, 0, 255))
    img.save(path, transparency=(255, 0, 0))

    decoded = decode_image(path)

    assert decoded.mode == "RGBA"
    assert decoded.getpixel((1, 1))[3] == 0
    assert decoded.getpixel((0, 0)) == (0, 0, 255, 255)


def test_oversized_image_is_a_decode_error(make_image, monkeypatch) -> None:
    path = make_image("huge.png", (40, 40))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(DecodeError, match="huge.png"):
        decode_image(path)
    with pytest.raises(DecodeError, match="huge.png"):
        read_orientation(path)
