"""
ArcType Core Module

Contains the core data structures:
- Document: Root container for all design data
- Layer: Ordered element collection with the active selection
- Shapes: Flat and curved text elements and their paint settings
"""

# Import order matters - shapes first, then layer, then document
from .shapes import (
    Point, BoundingBox, FontSpec, StrokeSpec, Shadow, Shape,
    TextElement, CurvedTextElement
)
from .layer import Layer
from .document import Document

__all__ = [
    'Point', 'BoundingBox', 'FontSpec', 'StrokeSpec', 'Shadow', 'Shape',
    'TextElement', 'CurvedTextElement',
    'Layer',
    'Document'
]
