"""
ArcType I/O Module

Handles project file saving and loading.
"""

from .project_io import (
    save_project, load_project,
    document_to_dict, dict_to_document, shape_to_dict, dict_to_shape
)

__all__ = [
    'save_project',
    'load_project',
    'document_to_dict',
    'dict_to_document',
    'shape_to_dict',
    'dict_to_shape',
]
