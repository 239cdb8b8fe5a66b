"""
Project File I/O for ArcType

Handles saving and loading .arct project files (JSON). Curved text is
stored by its parameters only; rasters are regenerated after loading.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime
from typing import Dict, Any, Optional
from uuid import UUID, uuid4

from ..core.document import Document
from ..core.layer import Layer
from ..core.shapes import (
    Shape, TextElement, CurvedTextElement,
    Point, FontSpec, StrokeSpec, Shadow
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = '1.0'


def save_project(document: Document, filepath: str) -> bool:
    """
    Save a document to a project file.

    Args:
        document: The document to save
        filepath: Path to save the file

    Returns:
        True if successful, False otherwise
    """
    try:
        doc_dict = document_to_dict(document)

        # Add metadata
        doc_dict['version'] = FORMAT_VERSION
        doc_dict['saved_at'] = datetime.now().isoformat()
        document.modified_at = doc_dict['saved_at']

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(doc_dict, f, indent=2, ensure_ascii=False)

        return True
    except (OSError, TypeError, ValueError) as e:
        logger.exception(f"Error saving project to {filepath}: {e}")
        return False


def load_project(filepath: str) -> Optional[Document]:
    """
    Load a document from a project file.

    Args:
        filepath: Path to the project file

    Returns:
        Document object if successful, None otherwise
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            doc_dict = json.load(f)
        return dict_to_document(doc_dict)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.exception(f"Error loading project from {filepath}: {e}")
        return None


def _parse_uuid(value: Any) -> UUID:
    """Parse a UUID, generating a fresh one for missing or bad values."""
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        return uuid4()


def document_to_dict(document: Document) -> Dict[str, Any]:
    """Convert Document to dictionary."""
    return {
        'id': str(document.id),
        'name': document.name,
        'width': document.width,
        'height': document.height,
        'background': document.background,
        'created_at': document.created_at,
        'modified_at': document.modified_at,
        'layers': [layer_to_dict(layer) for layer in document.layers]
    }


def dict_to_document(doc_dict: Dict[str, Any]) -> Document:
    """Convert dictionary to Document."""
    document = Document(
        id=_parse_uuid(doc_dict.get('id')),
        name=doc_dict.get('name', 'Untitled'),
        width=doc_dict.get('width', 1080.0),
        height=doc_dict.get('height', 1080.0),
        background=doc_dict.get('background'),
        created_at=doc_dict.get('created_at', ''),
        modified_at=doc_dict.get('modified_at', '')
    )

    for layer_dict in doc_dict.get('layers', []):
        document.add_layer(dict_to_layer(layer_dict))

    return document


def layer_to_dict(layer: Layer) -> Dict[str, Any]:
    """Convert Layer to dictionary."""
    active_index = layer.index_of(layer.active) if layer.active is not None else None
    return {
        'id': str(layer.id),
        'name': layer.name,
        'visible': layer.visible,
        'locked': layer.locked,
        'active_index': active_index,
        'shapes': [shape_to_dict(shape) for shape in layer.shapes]
    }


def dict_to_layer(layer_dict: Dict[str, Any]) -> Layer:
    """Convert dictionary to Layer."""
    layer = Layer(
        id=_parse_uuid(layer_dict.get('id')),
        name=layer_dict.get('name', 'Layer'),
        visible=layer_dict.get('visible', True),
        locked=layer_dict.get('locked', False)
    )

    for shape_dict in layer_dict.get('shapes', []):
        shape = dict_to_shape(shape_dict)
        if shape:
            layer.add_shape(shape)
        else:
            logger.warning(f"Skipping unknown shape type: {shape_dict.get('type')}")

    active_index = layer_dict.get('active_index')
    if active_index is not None and 0 <= active_index < len(layer.shapes):
        layer.set_active(layer.shapes[active_index])

    return layer


def shape_to_dict(shape: Shape) -> Dict[str, Any]:
    """Convert Shape to dictionary."""
    base_dict = {
        'type': shape.__class__.__name__,
        'id': str(shape.id),
        'name': shape.name,
        'visible': shape.visible,
        'locked': shape.locked,
        'position': {'x': shape.position.x, 'y': shape.position.y},
        'rotation': shape.rotation,
        'scale_x': shape.scale_x,
        'scale_y': shape.scale_y,
    }

    if isinstance(shape, (TextElement, CurvedTextElement)):
        base_dict.update({
            'text': shape.text,
            'font': asdict(shape.font),
            'fill': shape.fill,
            'stroke': asdict(shape.stroke),
            'shadow': asdict(shape.shadow) if shape.shadow else None,
            'percentage': shape.percentage,
        })

    if isinstance(shape, TextElement):
        base_dict['char_spacing'] = shape.char_spacing
    elif isinstance(shape, CurvedTextElement):
        base_dict.update({
            'diameter': shape.diameter,
            'kerning': shape.kerning,
            'flipped': shape.flipped,
            'angle': shape.angle,
            'width': shape.width,
            'height': shape.height,
        })

    return base_dict


def dict_to_shape(shape_dict: Dict[str, Any]) -> Optional[Shape]:
    """Convert dictionary to Shape (None for unknown types)."""
    shape_type = shape_dict.get('type')
    position = shape_dict.get('position', {})
    x, y = position.get('x', 0.0), position.get('y', 0.0)

    font = FontSpec(**shape_dict.get('font', {}))
    stroke = StrokeSpec(**shape_dict.get('stroke', {}))
    shadow_dict = shape_dict.get('shadow')
    shadow = Shadow(**shadow_dict) if shadow_dict else None

    if shape_type == 'TextElement':
        shape = TextElement(
            x, y, shape_dict.get('text', ''),
            font=font,
            fill=shape_dict.get('fill', '#000000'),
            stroke=stroke,
            char_spacing=shape_dict.get('char_spacing', 0.0),
            shadow=shadow
        )
    elif shape_type == 'CurvedTextElement':
        shape = CurvedTextElement(
            shape_dict.get('text', ''),
            diameter=shape_dict.get('diameter', 250.0),
            kerning=shape_dict.get('kerning', 0.0),
            flipped=shape_dict.get('flipped', False),
            font=font,
            fill=shape_dict.get('fill', '#000000'),
            stroke=stroke,
            shadow=shadow,
            percentage=shape_dict.get('percentage', 0),
            x=x, y=y
        )
        shape.width = shape_dict.get('width', shape.diameter)
        shape.height = shape_dict.get('height', shape.diameter)
    else:
        return None

    shape.id = _parse_uuid(shape_dict.get('id'))
    shape.name = shape_dict.get('name', '')
    shape.visible = shape_dict.get('visible', True)
    shape.locked = shape_dict.get('locked', False)
    shape.position = Point(x, y)
    shape.rotation = shape_dict.get('rotation', 0.0)
    shape.scale_x = shape_dict.get('scale_x', 1.0)
    shape.scale_y = shape_dict.get('scale_y', 1.0)
    return shape
