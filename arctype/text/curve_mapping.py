"""
Curve Parameter Mapping

Converts between the three user-facing representations of curvature:

- slider: integer range control centered on 2500 (flat)
- percentage: signed integer in [-90, 90]; negative curves face outward
- angle: signed display angle, round(percentage * 3.6)

and derives the circle diameter the glyphs are placed on. The diameter
shrinks as |percentage| grows: 2500 when flat, 250 at the tightest bend.
"""

from dataclasses import dataclass
from typing import Tuple
import math


@dataclass(frozen=True)
class CurveSettings:
    """
    Tunable constants of the curvature controls.

    Attributes:
        slider_center: Slider value meaning "no curvature"
        slider_step: Slider units per percentage point
        max_percentage: Absolute bound on the percentage
        angle_factor: Degrees per percentage point
        max_angle: Absolute bound accepted by the angle entry
        max_diameter: Diameter at percentage 0
        min_diameter: Diameter at |percentage| == max_percentage
    """
    slider_center: int = 2500
    slider_step: int = 25
    max_percentage: int = 90
    angle_factor: float = 3.6
    max_angle: int = 360
    max_diameter: float = 2500.0
    min_diameter: float = 250.0

    def validate(self) -> Tuple[bool, str]:
        """
        Validate the settings.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.slider_step <= 0:
            return False, "Slider step must be positive"
        if self.max_percentage <= 0:
            return False, "Max percentage must be positive"
        if self.min_diameter <= 0:
            return False, "Min diameter must be positive"
        if self.max_diameter <= self.min_diameter:
            return False, "Max diameter must exceed min diameter"
        return True, ""


DEFAULT_SETTINGS = CurveSettings()


@dataclass(frozen=True)
class CurveState:
    """A consistent snapshot of every curvature representation."""
    percentage: int
    slider: int
    angle: int
    flipped: bool
    diameter: float

    @property
    def is_curved(self) -> bool:
        return self.percentage != 0


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    rounded = int(math.floor(abs(value) + 0.5))
    return -rounded if value < 0 else rounded


def clamp_percentage(percentage: int,
                     settings: CurveSettings = DEFAULT_SETTINGS) -> int:
    """Clamp a percentage to [-max_percentage, max_percentage]."""
    bound = settings.max_percentage
    return max(-bound, min(bound, percentage))


def _raw_percentage_from_slider(value: float, settings: CurveSettings) -> int:
    center, step = settings.slider_center, settings.slider_step
    if value >= center:
        percentage = round_half_away((value - center) / step)
    else:
        percentage = -round_half_away((center - value) / step)
    # no negative zero
    return percentage or 0


def percentage_from_slider(value: float,
                           settings: CurveSettings = DEFAULT_SETTINGS) -> int:
    """Slider value -> clamped curvature percentage."""
    return clamp_percentage(_raw_percentage_from_slider(value, settings), settings)


def slider_from_percentage(percentage: float,
                           settings: CurveSettings = DEFAULT_SETTINGS) -> int:
    """Curvature percentage -> slider value."""
    percentage = int(percentage)
    if percentage > 0:
        return settings.slider_center + percentage * settings.slider_step
    if percentage < 0:
        return settings.slider_center - abs(percentage) * settings.slider_step
    return settings.slider_center


def angle_from_percentage(percentage: float,
                          settings: CurveSettings = DEFAULT_SETTINGS) -> int:
    """Curvature percentage -> signed display angle in degrees."""
    return round_half_away(percentage * settings.angle_factor) or 0


def percentage_from_angle(angle: float,
                          settings: CurveSettings = DEFAULT_SETTINGS) -> int:
    """
    Display angle (as typed into the angle box) -> clamped percentage.

    The fractional part is dropped, so 100 degrees gives 27 rather than 28.
    """
    angle = max(-settings.max_angle, min(settings.max_angle, angle))
    percentage = int(angle * 100 / settings.max_angle)
    return clamp_percentage(percentage, settings)


def normalize_slider(value: float,
                     settings: CurveSettings = DEFAULT_SETTINGS) -> Tuple[int, int]:
    """
    Resolve a raw slider value into a consistent (percentage, slider) pair.

    When the percentage had to be clamped the slider is recomputed from
    the clamped percentage, so the control snaps back into range.
    """
    raw = _raw_percentage_from_slider(value, settings)
    percentage = clamp_percentage(raw, settings)
    if percentage != raw:
        return percentage, slider_from_percentage(percentage, settings)
    return percentage, int(value)


def is_flipped(percentage: int) -> bool:
    """Negative curvature means glyphs face outward."""
    return percentage < 0


def diameter_from_percentage(percentage: int,
                             settings: CurveSettings = DEFAULT_SETTINGS) -> float:
    """Diameter of the glyph circle; monotonically decreasing in |percentage|."""
    magnitude = min(abs(percentage), settings.max_percentage)
    span = settings.max_diameter - settings.min_diameter
    return settings.max_diameter - magnitude * span / settings.max_percentage


def curve_state_from_percentage(percentage: int,
                                settings: CurveSettings = DEFAULT_SETTINGS) -> CurveState:
    """Build every representation from a percentage."""
    percentage = clamp_percentage(int(percentage), settings)
    return CurveState(
        percentage=percentage,
        slider=slider_from_percentage(percentage, settings),
        angle=angle_from_percentage(percentage, settings),
        flipped=is_flipped(percentage),
        diameter=diameter_from_percentage(percentage, settings),
    )


def curve_state_from_slider(value: float,
                            settings: CurveSettings = DEFAULT_SETTINGS) -> CurveState:
    """Build every representation from a raw slider value."""
    percentage, slider = normalize_slider(value, settings)
    return CurveState(
        percentage=percentage,
        slider=slider,
        angle=angle_from_percentage(percentage, settings),
        flipped=is_flipped(percentage),
        diameter=diameter_from_percentage(percentage, settings),
    )


def curve_state_from_angle(angle: float,
                           settings: CurveSettings = DEFAULT_SETTINGS) -> CurveState:
    """Build every representation from a typed display angle."""
    return curve_state_from_percentage(percentage_from_angle(angle, settings), settings)
