"""
Drawing surfaces for ArcType

A DrawingSurface is an off-screen RGBA raster with a canvas-style
current transform (translate + rotate) onto which single glyphs are
stroked and filled. PillowSurface implements it with Pillow; glyphs are
drawn upright on a small tile, rotated and composited in place.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, TYPE_CHECKING
import math

from PIL import Image, ImageDraw

from .metrics import FontResolver, get_font_resolver

if TYPE_CHECKING:
    from ..core.shapes import FontSpec


class DrawingSurface(ABC):
    """
    Drawing-surface capability used by the glyph layout.

    Coordinates passed to the glyph methods are in the current
    transformed frame; positive rotation turns clockwise on screen
    (y axis pointing down).
    """

    def __init__(self, width: int, height: int):
        self.width = max(int(width), 1)
        self.height = max(int(height), 1)
        self.origin: Tuple[float, float] = (0.0, 0.0)
        self.angle: float = 0.0  # radians

    def translate(self, dx: float, dy: float) -> None:
        """Move the origin by (dx, dy) in the current frame."""
        ox, oy = self.to_device(dx, dy)
        self.origin = (ox, oy)

    def rotate(self, angle: float) -> None:
        """Rotate the current frame by angle radians."""
        self.angle += angle

    def to_device(self, x: float, y: float) -> Tuple[float, float]:
        """Map a point of the current frame to raster pixels."""
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)
        return (
            self.origin[0] + x * cos_a - y * sin_a,
            self.origin[1] + x * sin_a + y * cos_a
        )

    @abstractmethod
    def fill_glyph(self, char: str, x: float, y: float,
                   font: 'FontSpec', color: str) -> None:
        """Fill a glyph centered on (x, y) of the current frame."""
        pass

    @abstractmethod
    def stroke_glyph(self, char: str, x: float, y: float,
                     font: 'FontSpec', color: str, width: float) -> None:
        """Stroke a glyph outline centered on (x, y) of the current frame."""
        pass

    @abstractmethod
    def to_image(self) -> Image.Image:
        """Return the raster as an RGBA image."""
        pass


class PillowSurface(DrawingSurface):
    """DrawingSurface backed by a Pillow RGBA image."""

    def __init__(self, width: int, height: int,
                 resolver: Optional[FontResolver] = None):
        super().__init__(width, height)
        self.resolver = resolver or get_font_resolver()
        self.image = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))

    def fill_glyph(self, char, x, y, font, color):
        self._draw_glyph(char, x, y, font, color, stroke_width=0)

    def stroke_glyph(self, char, x, y, font, color, width):
        # A canvas stroke is centered on the outline; only the outer half shows
        self._draw_glyph(char, x, y, font, color,
                         stroke_width=max(int(math.ceil(width / 2)), 1))

    def to_image(self) -> Image.Image:
        return self.image

    def _draw_glyph(self, char: str, x: float, y: float, font: 'FontSpec',
                    color: str, stroke_width: int) -> None:
        pil_font = self.resolver.load(font)
        probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        left, top, right, bottom = probe.textbbox(
            (0, 0), char, font=pil_font, anchor="mm", stroke_width=stroke_width
        )
        half = int(math.ceil(max(abs(left), abs(top), abs(right), abs(bottom)))) + 2
        tile = Image.new("RGBA", (2 * half, 2 * half), (0, 0, 0, 0))
        draw = ImageDraw.Draw(tile)
        if stroke_width:
            draw.text((half, half), char, font=pil_font, anchor="mm", fill=color,
                      stroke_width=stroke_width, stroke_fill=color)
        else:
            draw.text((half, half), char, font=pil_font, anchor="mm", fill=color)

        # Image.rotate turns counter-clockwise
        rotated = tile.rotate(-math.degrees(self.angle), resample=Image.BICUBIC,
                              expand=True)
        cx, cy = self.to_device(x, y)
        composite_clipped(self.image, rotated,
                          int(round(cx - rotated.width / 2)),
                          int(round(cy - rotated.height / 2)))


def composite_clipped(target: Image.Image, source: Image.Image,
                      x: int, y: int) -> None:
    """Alpha-composite source onto target at (x, y), clipping to target bounds."""
    left = max(x, 0)
    top = max(y, 0)
    right = min(x + source.width, target.width)
    bottom = min(y + source.height, target.height)
    if right <= left or bottom <= top:
        return
    target.alpha_composite(
        source, dest=(left, top),
        source=(left - x, top - y, right - x, bottom - y)
    )


def blit(source: Image.Image, target: Image.Image, center_x: float,
         center_y: float, width: float, height: float) -> None:
    """
    Draw source onto target, scaled to width x height and centered on a point.

    Args:
        source: RGBA raster to draw
        target: RGBA raster drawn onto (modified in place)
        center_x: Target x of the source center
        center_y: Target y of the source center
        width: Drawn width in pixels (floored at 1)
        height: Drawn height in pixels (floored at 1)
    """
    size = (max(int(round(width)), 1), max(int(round(height)), 1))
    if source.size != size:
        source = source.resize(size, Image.LANCZOS)
    composite_clipped(target, source,
                      int(round(center_x - size[0] / 2)),
                      int(round(center_y - size[1] / 2)))
