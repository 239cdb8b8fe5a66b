"""
ArcType Text Module

Contains the curved-text engine:
- Curve mapping between slider, percentage, angle and diameter
- Font metrics and drawing surfaces
- Glyph placement along an arc
- Per-element raster cache with trimming
"""

from .curve_mapping import (
    CurveSettings, CurveState, DEFAULT_SETTINGS,
    percentage_from_slider, slider_from_percentage, angle_from_percentage,
    percentage_from_angle, normalize_slider, is_flipped, clamp_percentage,
    diameter_from_percentage, curve_state_from_slider,
    curve_state_from_percentage, curve_state_from_angle
)
from .metrics import (
    FontResolver, FontMetrics, PillowFontMetrics,
    get_font_resolver, default_metrics
)
from .surface import DrawingSurface, PillowSurface, blit
from .arc_layout import place_text_on_arc, PLACEHOLDER_TEXT
from .raster_cache import CacheState, RasterCache, trim_raster

__all__ = [
    # Curve mapping
    'CurveSettings',
    'CurveState',
    'DEFAULT_SETTINGS',
    'percentage_from_slider',
    'slider_from_percentage',
    'angle_from_percentage',
    'percentage_from_angle',
    'normalize_slider',
    'is_flipped',
    'clamp_percentage',
    'diameter_from_percentage',
    'curve_state_from_slider',
    'curve_state_from_percentage',
    'curve_state_from_angle',
    # Metrics and surfaces
    'FontResolver',
    'FontMetrics',
    'PillowFontMetrics',
    'get_font_resolver',
    'default_metrics',
    'DrawingSurface',
    'PillowSurface',
    'blit',
    # Layout and caching
    'place_text_on_arc',
    'PLACEHOLDER_TEXT',
    'CacheState',
    'RasterCache',
    'trim_raster',
]
