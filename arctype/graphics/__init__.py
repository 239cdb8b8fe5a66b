"""
ArcType Graphics Module

Contains the interactive editing components:
- Transform: resize handling and scale absorption for curved text
- Shape switcher: flat/curved representation swaps
- Curve controller: slider/angle input and change notifications
"""

from .transform import (
    TransformManager, absorb_scale_x, absorb_scale_y, absorb_scale, apply_scale
)
from .shape_switcher import (
    ShapeSwitcher, curved_from_flat, flat_from_curved,
    kerning_from_char_spacing, char_spacing_from_kerning
)
from .curve_controller import CurveController

__all__ = [
    # Transform
    'TransformManager',
    'absorb_scale_x',
    'absorb_scale_y',
    'absorb_scale',
    'apply_scale',
    # Switching
    'ShapeSwitcher',
    'curved_from_flat',
    'flat_from_curved',
    'kerning_from_char_spacing',
    'char_spacing_from_kerning',
    # Curvature input
    'CurveController',
]
