"""
ArcType Core Shapes Module

Defines the fundamental shape classes: Point, BoundingBox, the paint
specifications (font, stroke, shadow) and the flat and curved text elements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4
import math

from ..text.curve_mapping import (
    CurveState, angle_from_percentage, clamp_percentage
)
from ..text.raster_cache import RasterCache

if TYPE_CHECKING:
    from PIL import Image


@dataclass
class Point:
    """A 2D point."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def contains(self, point: Point) -> bool:
        """Check if point is inside bounding box."""
        return (self.min_x <= point.x <= self.max_x and
                self.min_y <= point.y <= self.max_y)

    def intersects(self, other: 'BoundingBox') -> bool:
        """Check if two bounding boxes overlap."""
        return not (self.max_x < other.min_x or
                   self.min_x > other.max_x or
                   self.max_y < other.min_y or
                   self.min_y > other.max_y)


@dataclass(frozen=True)
class FontSpec:
    """
    Font descriptor shared by flat and curved text.

    Attributes:
        family: Font family name or path to a .ttf/.otf file
        size: Font size in pixels
        weight: CSS-style weight ("normal", "bold" or a number)
        style: CSS-style style ("normal", "italic", "oblique")
    """
    family: str = "Arial"
    size: float = 40.0
    weight: str = "normal"
    style: str = "normal"

    @property
    def is_bold(self) -> bool:
        weight = str(self.weight).lower()
        if weight.isdigit():
            return int(weight) >= 600
        return weight in ("bold", "bolder")

    @property
    def is_italic(self) -> bool:
        return str(self.style).lower() in ("italic", "oblique")

    def declaration(self) -> str:
        """Return the font as a single CSS-like declaration string."""
        return f"{self.style} {self.weight} {self.size:g}px {self.family}"

    def scaled(self, factor: float) -> 'FontSpec':
        """Return a copy with the size multiplied by factor."""
        return replace(self, size=self.size * factor)


@dataclass(frozen=True)
class StrokeSpec:
    """Outline drawn around each glyph before its fill."""
    color: Optional[str] = None
    width: float = 0.0

    @property
    def visible(self) -> bool:
        return bool(self.color) and self.width > 0


@dataclass(frozen=True)
class Shadow:
    """Drop shadow applied when the element is blitted."""
    color: str = "#00000080"
    blur: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0


class Shape(ABC):
    """
    Abstract base class for all document elements.

    Every shape must implement:
    - get_bounding_box(): Return axis-aligned bounding box
    - clone(): Create a copy with a fresh id
    - contains_point(): Check if point is inside shape
    """

    def __init__(self):
        self.id: UUID = uuid4()
        self.name: str = ""
        self.visible: bool = True
        self.locked: bool = False

        # Transform properties
        self.position: Point = Point(0, 0)
        self.rotation: float = 0.0  # radians
        self.scale_x: float = 1.0
        self.scale_y: float = 1.0

    @abstractmethod
    def get_bounding_box(self) -> BoundingBox:
        """Return the axis-aligned bounding box."""
        pass

    @abstractmethod
    def clone(self) -> 'Shape':
        """Create a copy of this shape."""
        pass

    def contains_point(self, point: Point) -> bool:
        """Check if point is inside the shape's bounding box."""
        return self.get_bounding_box().contains(point)

    def _centered_box(self, width: float, height: float) -> BoundingBox:
        """Bounding box of a width x height area centered on position."""
        half_w = width * abs(self.scale_x) / 2
        half_h = height * abs(self.scale_y) / 2
        return BoundingBox(
            min_x=self.position.x - half_w,
            min_y=self.position.y - half_h,
            max_x=self.position.x + half_w,
            max_y=self.position.y + half_h
        )


class TextElement(Shape):
    """
    An ordinary straight-baseline text element.

    Flat text keeps interactive scaling as scale_x/scale_y factors.
    Its curvature percentage is always 0; bending it turns it into a
    CurvedTextElement (see graphics.shape_switcher).
    """

    def __init__(self, x: float, y: float, text: str,
                 font: Optional[FontSpec] = None, fill: str = "#000000",
                 stroke: Optional[StrokeSpec] = None, char_spacing: float = 0.0,
                 shadow: Optional[Shadow] = None):
        """
        Create a flat text element.

        Args:
            x: X position (center)
            y: Y position (center)
            text: Text content
            font: Font descriptor
            fill: Fill color
            stroke: Optional outline
            char_spacing: Letter spacing in thousandths of an em
            shadow: Optional drop shadow
        """
        super().__init__()
        self.position = Point(x, y)
        self.text = text
        self.font = font or FontSpec()
        self.fill = fill
        self.stroke = stroke or StrokeSpec()
        self.char_spacing = char_spacing
        self.shadow = shadow
        self.percentage = 0

    def measure(self) -> tuple:
        """Return the (width, height) of the single text line."""
        from ..text.metrics import default_metrics

        metrics = default_metrics()
        spacing = self.font.size * self.char_spacing / 1000
        width = sum(metrics.char_width(self.font, ch) for ch in self.text)
        width += spacing * max(len(self.text) - 1, 0)
        return max(width, 1.0), max(metrics.line_height(self.font, self.text), 1.0)

    def get_bounding_box(self) -> BoundingBox:
        width, height = self.measure()
        return self._centered_box(width, height)

    def clone(self) -> 'TextElement':
        t = TextElement(
            self.position.x, self.position.y, self.text,
            self.font, self.fill, self.stroke, self.char_spacing, self.shadow
        )
        t.rotation = self.rotation
        t.scale_x = self.scale_x
        t.scale_y = self.scale_y
        return t


# Assigning one of these regenerates the glyph raster
LAYOUT_ATTRIBUTES = frozenset({
    "text", "diameter", "kerning", "flipped", "font", "fill", "stroke"
})
# Assigning one of these only re-blits the cached raster
PAINT_ATTRIBUTES = frozenset({"shadow"})


class CurvedTextElement(Shape):
    """
    A text element whose glyphs are rendered along a circular arc.

    The glyph raster is regenerated from font metrics rather than
    stretched, so every attribute assignment is routed through one place:
    layout attributes mark the raster cache dirty, paint attributes only
    request a refresh. Font, stroke and shadow are immutable values and
    must be replaced, not mutated, for the cache to notice.

    width and height follow the trimmed raster after each regeneration.
    """

    def __init__(self, text: str, diameter: float = 250.0, kerning: float = 0.0,
                 flipped: bool = False, font: Optional[FontSpec] = None,
                 fill: str = "#000000", stroke: Optional[StrokeSpec] = None,
                 shadow: Optional[Shadow] = None, percentage: int = 0,
                 x: float = 0.0, y: float = 0.0):
        # The cache is attached last so construction does not churn it
        super().__init__()
        self.position = Point(x, y)
        self.text = text or ""
        self.diameter = diameter
        self.kerning = kerning
        self.flipped = flipped
        self.font = font or FontSpec()
        self.fill = fill
        self.stroke = stroke or StrokeSpec()
        self.shadow = shadow
        self.angle = 0
        if percentage:
            self.percentage = percentage
        else:
            self.__dict__["percentage"] = 0
        self.width = self.diameter
        self.height = self.diameter
        self.cache = RasterCache()

    def __setattr__(self, name, value):
        if name == "diameter":
            value = max(float(value), 1.0)
        elif name == "percentage":
            value = clamp_percentage(int(value))
        elif name == "flipped":
            value = bool(value)

        super().__setattr__(name, value)

        if name == "percentage":
            # Direction and display angle follow the sign of the curvature
            self.angle = angle_from_percentage(value)
            if self.flipped != (value < 0):
                self.flipped = value < 0
            return

        if name == "flipped":
            # Facing a curved element the other way mirrors its curvature
            percentage = self.__dict__.get("percentage", 0)
            if percentage and (percentage < 0) != value:
                self.__dict__["percentage"] = -percentage
                self.angle = angle_from_percentage(-percentage)

        cache = self.__dict__.get("cache")
        if cache is None:
            return
        if name in LAYOUT_ATTRIBUTES:
            cache.invalidate()
        elif name in PAINT_ATTRIBUTES:
            cache.request_refresh()

    def apply_curve(self, state: CurveState) -> None:
        """Update diameter and direction from a normalized curve state."""
        self.diameter = state.diameter
        self.percentage = state.percentage

    def render(self, target: 'Image.Image') -> None:
        """Paint callback: blit the (re)generated raster onto target."""
        self.cache.blit(self, target)

    def get_bounding_box(self) -> BoundingBox:
        return self._centered_box(self.width, self.height)

    def clone(self) -> 'CurvedTextElement':
        c = CurvedTextElement(
            self.text, self.diameter, self.kerning, self.flipped,
            self.font, self.fill, self.stroke, self.shadow,
            self.percentage, self.position.x, self.position.y
        )
        c.rotation = self.rotation
        c.scale_x = self.scale_x
        c.scale_y = self.scale_y
        return c
