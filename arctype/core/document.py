"""
ArcType Document Model

A Document is the canvas: its pixel size, background and the stack of
layers painted bottom to top.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional
from uuid import UUID, uuid4
import logging

from PIL import Image

from .layer import Layer
from .shapes import BoundingBox, CurvedTextElement, Shape

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """
    Canvas holding the layer stack.

    Layers are painted in list order; within a layer, shapes are
    painted in their stacking order. Project files store one Document.
    """
    id: UUID = field(default_factory=uuid4)
    name: str = "Untitled"
    width: float = 1080.0     # px
    height: float = 1080.0    # px
    background: Optional[str] = None
    layers: List[Layer] = field(default_factory=list)

    # Metadata
    created_at: str = ""
    modified_at: str = ""

    def add_layer(self, layer: Layer) -> None:
        self.layers.append(layer)

    def remove_layer(self, layer: Layer) -> None:
        if layer in self.layers:
            self.layers.remove(layer)

    def iter_shapes(self, visible_only: bool = False) -> Iterator[Shape]:
        """Yield shapes in paint order, optionally skipping hidden ones."""
        for layer in self.layers:
            if visible_only and not layer.visible:
                continue
            for shape in layer.shapes:
                if visible_only and not shape.visible:
                    continue
                yield shape

    def get_all_shapes(self) -> List[Shape]:
        return list(self.iter_shapes())

    def get_layer_by_name(self, name: str) -> Optional[Layer]:
        return next((layer for layer in self.layers if layer.name == name), None)

    def find_layer_of(self, shape: Shape) -> Optional[Layer]:
        """Return the layer holding this exact shape object."""
        return next(
            (layer for layer in self.layers if layer.index_of(shape) is not None),
            None
        )

    def find_shape(self, shape_id: UUID) -> Optional[Shape]:
        """
        Look up a shape by its logical id.

        The id survives flat/curved switches, so this finds whichever
        representation is currently in the document.
        """
        for layer in self.layers:
            shape = layer.get_shape_by_id(shape_id)
            if shape is not None:
                return shape
        return None

    def get_design_bounds(self) -> Optional[BoundingBox]:
        """
        Calculate the bounding box of all visible shapes in the document.

        Returns:
            BoundingBox of all visible shapes, or None if no visible shapes
        """
        boxes = [shape.get_bounding_box() for shape in self.iter_shapes(visible_only=True)]
        if not boxes:
            return None
        return BoundingBox(
            min_x=min(b.min_x for b in boxes),
            min_y=min(b.min_y for b in boxes),
            max_x=max(b.max_x for b in boxes),
            max_y=max(b.max_y for b in boxes)
        )

    def paint(self, target: Optional[Image.Image] = None) -> Image.Image:
        """
        Run one paint pass over the visible curved text.

        Args:
            target: RGBA image to paint onto; a new canvas filled with
                the background color is created when omitted

        Returns:
            The painted image
        """
        if target is None:
            size = (max(int(self.width), 1), max(int(self.height), 1))
            target = Image.new("RGBA", size, self.background or (0, 0, 0, 0))

        painted = 0
        for shape in self.iter_shapes(visible_only=True):
            if isinstance(shape, CurvedTextElement):
                shape.render(target)
                painted += 1

        logger.debug(f"Painted {painted} curved text element(s) on {target.width}x{target.height}")
        return target
