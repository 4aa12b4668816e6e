"""Tests for rendering system artwork as text."""

import os
import sys

from PIL import Image

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from ui.system_art import CHAR_RAMP, image_to_text, render_art


def test_white_image_uses_brightest_char():
    art = image_to_text(Image.new("RGB", (40, 20), (255, 255, 255)), width=4, height=2)

    assert art == "\n".join([CHAR_RAMP[-1] * 4] * 2)


def test_transparent_image_is_blank():
    art = image_to_text(Image.new("RGBA", (40, 20), (255, 255, 255, 0)), width=4, height=2)

    assert art == ""


def test_output_dimensions():
    image = Image.new("L", (100, 30), 128)

    lines = image_to_text(image, width=10, height=3).split("\n")

    assert len(lines) == 3
    assert all(len(line) == 10 for line in lines)


def test_render_art_reads_png(tmp_path):
    Image.new("RGB", (72, 12), (255, 255, 255)).save(str(tmp_path / "Lynx.png"))

    art = render_art("Lynx", str(tmp_path))

    assert art
    assert set(art.replace("\n", "")) == {CHAR_RAMP[-1]}


def test_render_art_missing_or_broken(tmp_path):
    with open(str(tmp_path / "Broken.png"), "wb") as f:
        f.write(b"not an image")

    assert render_art("Nothing Here", str(tmp_path)) == ""
    assert render_art("Broken", str(tmp_path)) == ""
    assert render_art(None, str(tmp_path)) == ""
