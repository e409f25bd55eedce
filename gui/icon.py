"""
Application icon - loaded from ICON_FILE or drawn on the fly
"""
import logging
from pathlib import Path

from PIL import Image, ImageDraw

_LOGGER = logging.getLogger(__name__)

ICON_BG = (245, 245, 250, 255)
ICON_HEADER = (231, 76, 60, 255)
ICON_GRID = (120, 120, 135, 255)


def render_app_icon(size: int = 64) -> Image.Image:
    """Draw a small tear-off calendar page"""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    margin = max(size // 16, 1)
    radius = max(size // 8, 2)
    header_h = size // 4

    draw.rounded_rectangle([margin, margin, size - margin, size - margin],
                           radius=radius, fill=ICON_BG)
    draw.rounded_rectangle([margin, margin, size - margin, margin + header_h],
                           radius=radius, fill=ICON_HEADER)
    draw.rectangle([margin, margin + header_h // 2, size - margin, margin + header_h],
                   fill=ICON_HEADER)

    # 4 x 3 day dots
    top = margin + header_h + size // 10
    step_x = (size - margin * 2) // 5
    step_y = (size - top - margin) // 4
    r = max(size // 32, 1)
    for row in range(3):
        for col in range(4):
            cx = margin + step_x * (col + 1)
            cy = top + step_y * row + step_y // 2
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=ICON_GRID)

    return img


def load_app_icon(path: Path, size: int = 64) -> Image.Image:
    """Open the icon file, falling back to a drawn icon"""
    if path.exists():
        try:
            img = Image.open(path).convert("RGBA")
            img.thumbnail((size, size), Image.Resampling.LANCZOS)
            return img
        except OSError as e:
            _LOGGER.warning("Could not open icon %s: %s", path, e)
    return render_app_icon(size)
