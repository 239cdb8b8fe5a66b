"""
Glyph Arc Layout

Places the characters of a single-line string along a circle and
rasterizes them into a diameter x diameter RGBA image.

Geometry:
- Inward-facing text (not flipped) sits on the upper arc with glyph tops
  pointing away from the center; characters are drawn in reverse so the
  string reads left to right.
- Outward-facing text (flipped) sits on the lower arc, upright, in order.
- Glyph angular width: (advance + kerning) / radius, where
  radius = diameter / 2 - line height. The string is centered on the
  vertical axis of the circle by a pre-scan over all advances.
"""

from typing import Callable, Optional, TYPE_CHECKING
import logging
import math

from PIL import Image

from .metrics import FontMetrics, default_metrics
from .surface import DrawingSurface, PillowSurface

if TYPE_CHECKING:
    from ..core.shapes import FontSpec, StrokeSpec

logger = logging.getLogger(__name__)

# Drawn instead of text too short to lay out
PLACEHOLDER_TEXT = "You don't set empty value in curved text"

# Per-glyph rotation direction; -1 advances counter-clockwise on screen
CLOCKWISE = -1


def place_text_on_arc(text: str, diameter: float, kerning: float, flipped: bool,
                      font: 'FontSpec', fill: str,
                      stroke: Optional['StrokeSpec'] = None,
                      metrics: Optional[FontMetrics] = None,
                      surface_factory: Callable[[int, int], DrawingSurface] = PillowSurface
                      ) -> Image.Image:
    """
    Rasterize text along a circular arc.

    Args:
        text: Single-line text; one character or less is replaced by
            PLACEHOLDER_TEXT
        diameter: Circle diameter in pixels; also the raster size
        kerning: Extra spacing between consecutive glyphs, in pixels
            along the arc
        flipped: True for outward-facing text on the lower arc
        font: Font descriptor
        fill: Fill color
        stroke: Optional outline, drawn under the fill of each glyph
        metrics: Font metrics (defaults to Pillow metrics)
        surface_factory: Creates the drawing surface for a given size

    Returns:
        RGBA image of diameter x diameter pixels, or a 1x1 blank image if
        the font could not be measured at all
    """
    if len(text.strip()) <= 1:
        text = PLACEHOLDER_TEXT
    metrics = metrics or default_metrics()
    size = max(int(round(diameter)), 1)
    inward = not flipped

    try:
        text_height = metrics.line_height(font, text)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not measure line height for {font.declaration()}: {e}")
        text_height = float(font.size)

    # Reading direction
    start_angle = math.radians(180 if flipped else 0)
    chars = list(reversed(text)) if inward else list(text)
    if not inward:
        # outward baseline is mirrored below the center
        start_angle += math.pi

    try:
        widths = [metrics.char_width(font, ch) for ch in chars]
    except (OSError, ValueError) as e:
        logger.error(f"Could not measure glyphs for {font.declaration()}: {e}")
        return Image.new("RGBA", (1, 1), (0, 0, 0, 0))

    radius = max(size / 2 - text_height, 1.0)

    # Pre-scan: rotate back by half the total arc so the string is centered.
    # Kerning only separates glyphs, so the last glyph adds none.
    last = len(chars) - 1
    for idx, char_width in enumerate(widths):
        gap = kerning if idx < last else 0
        start_angle += ((char_width + gap) / radius / 2) * -CLOCKWISE

    surface = surface_factory(size, size)
    surface.translate(size / 2, size / 2)
    surface.rotate(start_angle)

    baseline = (1 if inward else -1) * (text_height / 2 - size / 2)
    draw_stroke = stroke is not None and stroke.visible

    for char, char_width in zip(chars, widths):
        surface.rotate((char_width / 2 / radius) * CLOCKWISE)
        if draw_stroke:
            surface.stroke_glyph(char, 0, baseline, font, stroke.color, stroke.width)
        surface.fill_glyph(char, 0, baseline, font, fill)
        surface.rotate(((char_width / 2 + kerning) / radius) * CLOCKWISE)

    logger.debug(f"Placed {len(chars)} glyphs on a {size}px circle "
                 f"(radius {radius:.1f}, {'outward' if flipped else 'inward'})")
    return surface.to_image()
