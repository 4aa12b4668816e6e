"""
System artwork rendering for retroterm.
Converts a system logo image into plain text for the header banner.
"""

import os
from typing import Optional

from PIL import Image, UnidentifiedImageError

from constants import ASSETS_DIR, ART_WIDTH, ART_HEIGHT

# Dark to light
CHAR_RAMP = " .:-=+*#%@"

_cache = {}


def art_path_for_system(system: str, assets_dir: str = ASSETS_DIR) -> str:
    return os.path.join(assets_dir, f"{system}.png")


def image_to_text(image: Image.Image, width: int = ART_WIDTH, height: int = ART_HEIGHT) -> str:
    """
    Map an image onto a width x height grid of characters.

    Transparent pixels render as spaces.

    Args:
        image: Source image
        width: Output columns
        height: Output rows

    Returns:
        Text art, one line per row, trailing whitespace stripped
    """
    rgba = image.convert("RGBA").resize((width, height), Image.LANCZOS)
    grey = rgba.convert("L")
    alpha = rgba.getchannel("A")

    lines = []
    for y in range(height):
        row = []
        for x in range(width):
            if alpha.getpixel((x, y)) < 64:
                row.append(" ")
                continue
            level = grey.getpixel((x, y)) * (len(CHAR_RAMP) - 1) // 255
            row.append(CHAR_RAMP[level])
        lines.append("".join(row).rstrip())

    return "\n".join(lines).rstrip()


def render_art(system: Optional[str], assets_dir: str = ASSETS_DIR) -> str:
    """
    Render the artwork for a system, if any is installed.

    Returns:
        Text art, or an empty string when no usable image exists
    """
    if not system:
        return ""

    path = art_path_for_system(system, assets_dir)
    if path in _cache:
        return _cache[path]

    art = ""
    if os.path.exists(path):
        try:
            with Image.open(path) as image:
                art = image_to_text(image)
        except (OSError, UnidentifiedImageError):
            art = ""

    _cache[path] = art
    return art
