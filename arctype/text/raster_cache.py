"""
Raster cache for curved text

Each curved text element owns one RasterCache. The cache is a two-state
machine (CLEAN / DIRTY, initially DIRTY) with an independent refresh
flag:

- DIRTY: the next render regenerates the glyph raster, trims it to its
  opaque pixels and updates the element's width/height.
- refresh: the next render rebuilds paint-only layers (the drop shadow)
  from the stored raster without regenerating glyphs.
- CLEAN without refresh: the stored raster is reused as is.
"""

from enum import Enum
from typing import Callable, Optional, Tuple, TYPE_CHECKING
import logging
import math

import numpy as np
from PIL import Image, ImageColor, ImageFilter

from .arc_layout import place_text_on_arc
from .surface import blit

if TYPE_CHECKING:
    from ..core.shapes import CurvedTextElement, Shadow

logger = logging.getLogger(__name__)


class CacheState(Enum):
    """Whether the cached raster matches the element's parameters."""
    CLEAN = "clean"
    DIRTY = "dirty"


def trim_raster(image: Image.Image) -> Tuple[Image.Image, bool]:
    """
    Crop an RGBA image to the bounding rectangle of its non-transparent pixels.

    Args:
        image: RGBA image to trim

    Returns:
        Tuple of (image, trimmed). When no pixel has non-zero alpha the
        input image is returned unchanged with trimmed=False.
    """
    alpha = np.asarray(image.getchannel("A"))
    ys, xs = np.nonzero(alpha)
    if xs.size == 0:
        logger.warning(f"Trim failed: no opaque pixel in {image.width}x{image.height} raster")
        return image, False

    box = (int(xs.min()), int(ys.min()), int(xs.max()) + 1, int(ys.max()) + 1)
    return image.crop(box), True


def build_shadow_layer(raster: Image.Image, shadow: Optional['Shadow']
                       ) -> Optional[Image.Image]:
    """
    Build a blurred, colored silhouette of a raster.

    The layer is padded on every side by the blur margin, so it is
    centered on the raster before the shadow offset is applied.
    """
    if shadow is None:
        return None

    red, green, blue, alpha = ImageColor.getcolor(shadow.color, "RGBA")
    margin = int(math.ceil(shadow.blur * 2))
    mask = raster.getchannel("A").point(lambda value: value * alpha // 255)

    layer = Image.new("RGBA", (raster.width + 2 * margin, raster.height + 2 * margin),
                      (red, green, blue, 0))
    silhouette = Image.new("L", layer.size, 0)
    silhouette.paste(mask, (margin, margin))
    if shadow.blur > 0:
        silhouette = silhouette.filter(ImageFilter.GaussianBlur(shadow.blur))
    layer.putalpha(silhouette)
    return layer


class RasterCache:
    """
    Cached glyph raster of one curved text element.

    Args:
        placer: Layout function with the signature of place_text_on_arc
    """

    def __init__(self, placer: Optional[Callable[..., Image.Image]] = None):
        self.state = CacheState.DIRTY
        self.refresh = True
        self.raster: Optional[Image.Image] = None
        self.shadow_layer: Optional[Image.Image] = None
        self._placer = placer or place_text_on_arc

    @property
    def is_dirty(self) -> bool:
        return self.state is CacheState.DIRTY

    def invalidate(self) -> None:
        """Mark the raster stale; the next render regenerates it."""
        if self.state is not CacheState.DIRTY:
            logger.debug("Raster cache -> dirty")
        self.state = CacheState.DIRTY

    def request_refresh(self) -> None:
        """Re-blit the stored raster on the next render without regenerating it."""
        self.refresh = True

    def render(self, element: 'CurvedTextElement') -> Image.Image:
        """
        Bring the cache up to date with the element and return the raster.

        Args:
            element: The owning element

        Returns:
            The trimmed glyph raster
        """
        if self.state is CacheState.DIRTY or self.raster is None:
            try:
                raster = self._placer(
                    element.text, element.diameter, element.kerning, element.flipped,
                    element.font, element.fill, element.stroke
                )
            except ValueError as e:
                # Bad colors are reported once; the element is retried
                # after its next layout change
                logger.error(f"Could not render curved text {element.id}: {e}")
                if self.raster is None:
                    self.raster = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
            else:
                raster, trimmed = trim_raster(raster)
                if trimmed:
                    element.width, element.height = raster.size
                self.raster = raster
                logger.debug(f"Raster regenerated: {raster.width}x{raster.height}")
            self.state = CacheState.CLEAN
            self.refresh = True

        if self.refresh:
            try:
                self.shadow_layer = build_shadow_layer(self.raster, element.shadow)
            except ValueError as e:
                logger.error(f"Could not build shadow for {element.id}: {e}")
                self.shadow_layer = None
            self.refresh = False

        return self.raster

    def blit(self, element: 'CurvedTextElement', target: Image.Image) -> None:
        """
        Paint the element onto target, centered on its position.

        The raster is drawn at the element's width/height times its
        residual scale factors, with the shadow (if any) underneath.
        """
        raster = self.render(element)
        width = max(element.width * abs(element.scale_x), 1)
        height = max(element.height * abs(element.scale_y), 1)
        cx, cy = element.position.x, element.position.y

        if self.shadow_layer is not None:
            shadow = element.shadow
            sx = width / raster.width
            sy = height / raster.height
            blit(self.shadow_layer, target,
                 cx + shadow.offset_x, cy + shadow.offset_y,
                 self.shadow_layer.width * sx, self.shadow_layer.height * sy)

        blit(raster, target, cx, cy, width, height)
