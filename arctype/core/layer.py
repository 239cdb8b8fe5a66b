"""
ArcType Layer System

An ordered collection of elements. List order is paint order:
index 0 is painted first (bottom of the stack).
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID, uuid4

from .shapes import Shape


@dataclass
class Layer:
    """
    The parent object collection of a group of elements.

    Besides the stacking order, a layer tracks which element is
    active (selected) so curvature and resize input know their target.
    """
    id: UUID = field(default_factory=uuid4)
    name: str = "Layer"
    visible: bool = True
    locked: bool = False

    # Shapes in paint order
    shapes: List[Shape] = field(default_factory=list)

    # Currently selected element
    active: Optional[Shape] = None

    def add_shape(self, shape: Shape) -> None:
        """Add a shape on top of the stack."""
        self.shapes.append(shape)

    def insert_at(self, index: int, shape: Shape) -> None:
        """Insert a shape at a stacking index (clamped to the valid range)."""
        index = max(0, min(index, len(self.shapes)))
        self.shapes.insert(index, shape)

    def remove_shape(self, shape: Shape) -> None:
        """Remove a shape from this layer."""
        idx = self.index_of(shape)
        if idx is None:
            return
        del self.shapes[idx]
        if self.active is shape:
            self.active = None

    def index_of(self, shape: Shape) -> Optional[int]:
        """Return the stacking index of this exact object, or None."""
        for idx, candidate in enumerate(self.shapes):
            if candidate is shape:
                return idx
        return None

    def set_active(self, shape: Optional[Shape]) -> None:
        """Select a shape (None clears the selection)."""
        self.active = shape

    def get_shape_by_id(self, shape_id: UUID) -> Optional[Shape]:
        """Find a shape by its ID."""
        for shape in self.shapes:
            if shape.id == shape_id:
                return shape
        return None
