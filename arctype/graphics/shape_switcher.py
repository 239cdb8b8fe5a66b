"""
Flat/curved text switching

A logical text object is represented either by a TextElement (flat) or
by a CurvedTextElement. The pure functions below build one
representation from the other and keep the logical id, so references by
id survive the switch. ShapeSwitcher swaps the representation inside a
layer without changing its stacking index.
"""

from typing import Optional
import logging
import warnings

from ..core.layer import Layer
from ..core.shapes import CurvedTextElement, Point, Shape, TextElement
from ..exceptions import ConversionWarning
from ..text.curve_mapping import round_half_away
from .transform import absorb_scale

logger = logging.getLogger(__name__)


def kerning_from_char_spacing(char_spacing: float) -> int:
    """Arc kerning derived from a flat element's letter spacing (never below -1)."""
    return max(round_half_away(int(char_spacing) / 100 * 3), -1)


def char_spacing_from_kerning(kerning: float) -> int:
    """Best-effort inverse of kerning_from_char_spacing."""
    return round_half_away(kerning / 3 * 100)


def curved_from_flat(flat: TextElement, diameter: float,
                     percentage: int) -> CurvedTextElement:
    """
    Build the curved representation of a flat text element.

    Args:
        flat: Source element
        diameter: Circle diameter for the glyphs
        percentage: Nonzero curvature percentage (its sign sets the direction)

    Returns:
        A new CurvedTextElement carrying the flat element's id
    """
    curved = CurvedTextElement(
        flat.text,
        diameter=diameter,
        kerning=kerning_from_char_spacing(flat.char_spacing),
        flipped=percentage < 0,
        font=flat.font,
        fill=flat.fill,
        stroke=flat.stroke,
        shadow=flat.shadow,
        percentage=percentage,
        x=flat.position.x,
        y=flat.position.y,
    )
    _carry_identity(flat, curved)
    curved.scale_x = flat.scale_x
    curved.scale_y = flat.scale_y
    return curved


def flat_from_curved(curved: CurvedTextElement) -> TextElement:
    """
    Build the flat representation of a curved text element.

    Args:
        curved: Source element

    Returns:
        A new TextElement carrying the curved element's id
    """
    flat = TextElement(
        curved.position.x, curved.position.y, curved.text,
        font=curved.font,
        fill=curved.fill,
        stroke=curved.stroke,
        char_spacing=char_spacing_from_kerning(curved.kerning),
        shadow=curved.shadow,
    )
    _carry_identity(curved, flat)
    return flat


def _carry_identity(source: Shape, target: Shape) -> None:
    target.id = source.id
    target.name = source.name
    target.visible = source.visible
    target.locked = source.locked
    target.rotation = source.rotation
    target.position = Point(source.position.x, source.position.y)


class ShapeSwitcher:
    """
    Replaces one representation of a text object with the other in a layer.

    The replacement takes the stacking index of the element it replaces
    and becomes the active element. If the source is no longer in the
    layer, the replacement is appended on top and a ConversionWarning is
    issued.
    """

    def __init__(self, layer: Layer):
        self.layer = layer

    def to_curved(self, flat: TextElement, diameter: float,
                  percentage: int) -> CurvedTextElement:
        """
        Convert a flat element to curved text in place.

        Args:
            flat: Element to convert
            diameter: Circle diameter for the glyphs
            percentage: Nonzero curvature percentage

        Returns:
            The inserted CurvedTextElement
        """
        curved = curved_from_flat(flat, diameter, percentage)
        absorb_scale(curved)
        self._swap(flat, curved)
        # Size the element from its first raster
        curved.cache.render(curved)
        logger.info(f"Converted text {flat.id} to curved ({percentage}%)")
        return curved

    def to_flat(self, curved: CurvedTextElement) -> TextElement:
        """
        Convert curved text back to a flat element in place.

        Args:
            curved: Element to convert

        Returns:
            The inserted TextElement
        """
        flat = flat_from_curved(curved)
        self._swap(curved, flat)
        logger.info(f"Converted text {curved.id} to flat")
        return flat

    def _swap(self, old: Shape, new: Shape) -> Optional[int]:
        index = self.layer.index_of(old)
        if index is None:
            message = (f"Element {old.id} is no longer in layer '{self.layer.name}'; "
                       f"appending its replacement on top")
            logger.warning(message)
            warnings.warn(message, ConversionWarning, stacklevel=3)
            self.layer.add_shape(new)
        else:
            self.layer.remove_shape(old)
            self.layer.insert_at(index, new)
        self.layer.set_active(new)
        return index
