"""
Transform Operations for ArcType

Handles interactive scaling of elements. Flat elements keep the drag
as scale_x/scale_y factors. Curved text cannot be stretched by a matrix
(its raster is regenerated from font metrics), so the horizontal factor
is folded into font size and diameter and the vertical factor into the
drawn height, leaving both scale factors at 1.
"""

from typing import List, Optional
import logging

from ..core.shapes import CurvedTextElement, Point, Shape

logger = logging.getLogger(__name__)


def absorb_scale_x(element: CurvedTextElement, scale_x: float) -> None:
    """
    Fold a horizontal scale factor into font size, diameter and width.

    Args:
        element: Curved text being resized
        scale_x: Horizontal factor reported by the resize
    """
    if scale_x <= 0:
        logger.warning(f"Ignoring non-positive horizontal scale {scale_x}")
        element.scale_x = 1.0
        return
    element.font = element.font.scaled(scale_x)
    element.diameter = element.diameter * scale_x
    element.width = max(element.width * scale_x, 1)
    element.scale_x = 1.0
    element.cache.invalidate()


def absorb_scale_y(element: CurvedTextElement, scale_y: float) -> None:
    """
    Fold a vertical scale factor into the drawn height.

    Args:
        element: Curved text being resized
        scale_y: Vertical factor reported by the resize
    """
    if scale_y <= 0:
        logger.warning(f"Ignoring non-positive vertical scale {scale_y}")
        element.scale_y = 1.0
        return
    element.height = max(element.height * scale_y, 1)
    element.scale_y = 1.0
    element.cache.invalidate()


def absorb_scale(element: CurvedTextElement) -> None:
    """Absorb whatever residual scale factors the element carries."""
    absorb_scale_x(element, element.scale_x)
    absorb_scale_y(element, element.scale_y)


def apply_scale(shape: Shape, scale_x: float, scale_y: float) -> None:
    """Scale one element in place, the way its kind supports."""
    if isinstance(shape, CurvedTextElement):
        absorb_scale_x(shape, scale_x)
        absorb_scale_y(shape, scale_y)
    else:
        shape.scale_x *= scale_x
        shape.scale_y *= scale_y


class TransformManager:
    """
    Turns handle drags into per-frame scale steps on selected elements.

    Each update applies the scale relative to the previous handle
    position, so curved text absorbs every step immediately.
    """

    def __init__(self):
        self._shapes: List[Shape] = []
        self._transform_start_pos: Optional[Point] = None
        self._transform_center: Optional[Point] = None
        self._is_transforming = False

    @property
    def is_transforming(self) -> bool:
        return self._is_transforming

    def start_transform(self, shapes: List[Shape], handle_pos: Point,
                        center: Optional[Point] = None) -> None:
        """
        Start a scaling operation.

        Args:
            shapes: Elements to transform
            handle_pos: Initial position of the handle
            center: Transform center (defaults to the selection center)
        """
        if not shapes:
            return

        self._shapes = list(shapes)
        self._is_transforming = True
        self._transform_start_pos = handle_pos

        if center is None:
            boxes = [shape.get_bounding_box() for shape in self._shapes]
            center = Point(
                (min(b.min_x for b in boxes) + max(b.max_x for b in boxes)) / 2,
                (min(b.min_y for b in boxes) + max(b.max_y for b in boxes)) / 2
            )
        self._transform_center = center

    def update_transform(self, current_pos: Point, handle_type: str = "corner") -> bool:
        """
        Apply the scale implied by moving the handle to current_pos.

        Args:
            current_pos: Current handle position
            handle_type: "corner" scales both axes, "edge" only the
                dominant axis of the handle

        Returns:
            True if a scale step was applied
        """
        if not self._is_transforming or not self._shapes:
            return False

        center = self._transform_center
        start_delta = self._transform_start_pos - center
        current_delta = current_pos - center

        if handle_type == "corner":
            if abs(start_delta.x) < 0.001 or abs(start_delta.y) < 0.001:
                return False
            scale_x = current_delta.x / start_delta.x
            scale_y = current_delta.y / start_delta.y
        elif handle_type == "edge":
            if abs(start_delta.y) > abs(start_delta.x):
                if abs(start_delta.y) < 0.001:
                    return False
                scale_x, scale_y = 1.0, current_delta.y / start_delta.y
            else:
                if abs(start_delta.x) < 0.001:
                    return False
                scale_x, scale_y = current_delta.x / start_delta.x, 1.0
        else:
            return False

        for shape in self._shapes:
            apply_scale(shape, scale_x, scale_y)
            # Keep the element's offset from the transform center proportional
            shape.position = Point(
                center.x + (shape.position.x - center.x) * scale_x,
                center.y + (shape.position.y - center.y) * scale_y
            )

        self._transform_start_pos = current_pos
        return True

    def end_transform(self) -> None:
        """Finish the current operation."""
        self._shapes = []
        self._transform_start_pos = None
        self._transform_center = None
        self._is_transforming = False
