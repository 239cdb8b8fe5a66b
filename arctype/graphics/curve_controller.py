"""
Curvature input handling

Applies slider or angle input to the active text element of a layer:
curvature 0 -> nonzero converts flat text to curved text, nonzero -> 0
converts it back, and nonzero -> nonzero updates the curved element in
place. Every applied change is broadcast so property panels stay in sync.
"""

from typing import Optional
import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..core.layer import Layer
from ..core.shapes import CurvedTextElement, TextElement
from ..text.curve_mapping import (
    CurveSettings, CurveState, DEFAULT_SETTINGS,
    curve_state_from_angle, curve_state_from_percentage, curve_state_from_slider
)
from .shape_switcher import ShapeSwitcher
from .transform import absorb_scale

logger = logging.getLogger(__name__)


class CurveController(QObject):
    """
    Routes curvature input to the active element of a layer.

    Slider drags can be coalesced: queue_slider() only records the latest
    value and flush() applies it, typically once per painted frame.
    """

    # percentage, angle
    curve_changed = pyqtSignal(int, int)

    def __init__(self, layer: Layer, settings: CurveSettings = DEFAULT_SETTINGS,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.layer = layer
        self.settings = settings
        self.switcher = ShapeSwitcher(layer)
        self._pending_slider: Optional[float] = None

    def apply_slider(self, value: float) -> int:
        """
        Apply a slider value to the active element.

        Returns:
            The display angle, or 0 if no text element is active
        """
        return self._apply(curve_state_from_slider(value, self.settings))

    def apply_percentage(self, percentage: int) -> int:
        """Apply a curvature percentage to the active element."""
        return self._apply(curve_state_from_percentage(percentage, self.settings))

    def apply_angle(self, angle: float) -> int:
        """Apply an angle typed into the angle box to the active element."""
        return self._apply(curve_state_from_angle(angle, self.settings))

    def queue_slider(self, value: float) -> None:
        """Record a slider value; only the latest one is applied on flush()."""
        self._pending_slider = value

    def flush(self) -> Optional[int]:
        """
        Apply the latest queued slider value, if any.

        Returns:
            The display angle, or None if nothing was queued
        """
        if self._pending_slider is None:
            return None
        value, self._pending_slider = self._pending_slider, None
        return self.apply_slider(value)

    def current_state(self) -> Optional[CurveState]:
        """Curve state of the active element, for initializing the controls."""
        obj = self.layer.active
        if isinstance(obj, (TextElement, CurvedTextElement)):
            return curve_state_from_percentage(obj.percentage, self.settings)
        return None

    def _apply(self, state: CurveState) -> int:
        obj = self.layer.active
        if not isinstance(obj, (TextElement, CurvedTextElement)):
            logger.debug("Curve input ignored: no active text element")
            return 0

        if state.is_curved and isinstance(obj, TextElement):
            self.switcher.to_curved(obj, state.diameter, state.percentage)
        elif not state.is_curved and isinstance(obj, CurvedTextElement):
            self.switcher.to_flat(obj)
        elif state.is_curved:
            obj.apply_curve(state)
            absorb_scale(obj)

        self.curve_changed.emit(state.percentage, state.angle)
        return state.angle
