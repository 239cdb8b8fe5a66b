"""
Tests for the curvature parameter mapping.

Covers the slider/percentage/angle conversions, clamping and the
diameter derived from the curvature.
"""

import unittest
from arctype.text.curve_mapping import (
    CurveSettings, DEFAULT_SETTINGS,
    percentage_from_slider, slider_from_percentage, angle_from_percentage,
    percentage_from_angle, normalize_slider, is_flipped, clamp_percentage,
    diameter_from_percentage, curve_state_from_slider,
    curve_state_from_percentage, curve_state_from_angle, round_half_away
)


class TestSliderPercentage(unittest.TestCase):
    """Test slider <-> percentage conversions."""

    def test_center_is_flat(self):
        """The slider center maps to zero curvature and zero angle."""
        self.assertEqual(percentage_from_slider(2500), 0)
        self.assertEqual(angle_from_percentage(0), 0)
        self.assertEqual(slider_from_percentage(0), 2500)

    def test_round_trip_is_stable(self):
        """slider(percentage(slider(p))) is stable for every valid p."""
        for p in range(-90, 91):
            slider = slider_from_percentage(p)
            self.assertEqual(percentage_from_slider(slider), p)
            again = slider_from_percentage(percentage_from_slider(slider))
            self.assertEqual(again, slider)

    def test_known_values(self):
        self.assertEqual(slider_from_percentage(40), 3500)
        self.assertEqual(slider_from_percentage(-40), 1500)
        self.assertEqual(percentage_from_slider(3500), 40)
        self.assertEqual(percentage_from_slider(1500), -40)

    def test_rounding_near_center(self):
        """Values within half a step of the center stay flat, never -0."""
        self.assertEqual(percentage_from_slider(2512), 0)
        self.assertEqual(percentage_from_slider(2513), 1)
        self.assertEqual(percentage_from_slider(2487), -1)
        result = percentage_from_slider(2488)
        self.assertEqual(result, 0)
        self.assertEqual(str(result), "0")

    def test_ties_round_away_from_zero(self):
        self.assertEqual(percentage_from_slider(2512.5), 1)
        self.assertEqual(percentage_from_slider(2487.5), -1)
        self.assertEqual(round_half_away(2.5), 3)
        self.assertEqual(round_half_away(-2.5), -3)

    def test_clamps_high(self):
        """5000 would be 100%, which clamps to 90 and snaps the slider to 4750."""
        self.assertEqual(percentage_from_slider(5000), 90)
        self.assertEqual(slider_from_percentage(90), 4750)
        self.assertEqual(normalize_slider(5000), (90, 4750))

    def test_clamps_low(self):
        self.assertEqual(percentage_from_slider(0), -90)
        self.assertEqual(normalize_slider(0), (-90, 250))

    def test_normalize_keeps_in_range_value(self):
        self.assertEqual(normalize_slider(3000), (20, 3000))

    def test_clamp_percentage(self):
        self.assertEqual(clamp_percentage(120), 90)
        self.assertEqual(clamp_percentage(-120), -90)
        self.assertEqual(clamp_percentage(12), 12)


class TestAngle(unittest.TestCase):
    """Test percentage <-> angle conversions."""

    def test_angle_from_percentage(self):
        self.assertEqual(angle_from_percentage(50), 180)
        self.assertEqual(angle_from_percentage(-25), -90)
        self.assertEqual(angle_from_percentage(1), 4)
        self.assertEqual(angle_from_percentage(-1), -4)
        self.assertEqual(angle_from_percentage(90), 324)

    def test_percentage_from_angle(self):
        self.assertEqual(percentage_from_angle(180), 50)
        self.assertEqual(percentage_from_angle(-36), -10)
        self.assertEqual(percentage_from_angle(0), 0)

    def test_percentage_from_angle_clamps(self):
        """Angles beyond 360 are clamped, then the percentage to 90."""
        self.assertEqual(percentage_from_angle(400), 90)
        self.assertEqual(percentage_from_angle(-1000), -90)

    def test_percentage_from_angle_truncates(self):
        """Typed angles drop the fractional percentage toward zero."""
        self.assertEqual(percentage_from_angle(100), 27)
        self.assertEqual(percentage_from_angle(-100), -27)
        self.assertEqual(percentage_from_angle(3), 0)
        self.assertEqual(percentage_from_angle(-3), 0)

    def test_angle_round_trip(self):
        """Angles that are whole multiples of 18 degrees map back exactly."""
        for p in range(-90, 91, 5):
            self.assertEqual(percentage_from_angle(angle_from_percentage(p)), p)


class TestDirectionAndDiameter(unittest.TestCase):
    """Test the sign rule and the diameter derivation."""

    def test_flipped_follows_sign(self):
        for p in range(-90, 91):
            if p == 0:
                continue
            self.assertEqual(is_flipped(p), p < 0)

    def test_diameter_endpoints(self):
        self.assertEqual(diameter_from_percentage(0), 2500.0)
        self.assertEqual(diameter_from_percentage(90), 250.0)
        self.assertEqual(diameter_from_percentage(-90), 250.0)

    def test_diameter_decreases_with_curvature(self):
        previous = diameter_from_percentage(0)
        for p in range(1, 91):
            current = diameter_from_percentage(p)
            self.assertLess(current, previous)
            self.assertEqual(current, diameter_from_percentage(-p))
            previous = current

    def test_diameter_matches_reflected_slider(self):
        """The diameter equals the slider value mirrored around the center."""
        for p in range(-90, 91):
            slider = slider_from_percentage(p)
            reflected = 2500 - abs(slider - 2500)
            self.assertEqual(diameter_from_percentage(p), reflected)


class TestCurveState(unittest.TestCase):
    """Test the combined curve state builders."""

    def test_state_from_clamped_slider(self):
        state = curve_state_from_slider(5000)
        self.assertEqual(state.percentage, 90)
        self.assertEqual(state.slider, 4750)
        self.assertEqual(state.angle, 324)
        self.assertFalse(state.flipped)
        self.assertEqual(state.diameter, 250.0)
        self.assertTrue(state.is_curved)

    def test_state_from_negative_percentage(self):
        state = curve_state_from_percentage(-40)
        self.assertTrue(state.flipped)
        self.assertEqual(state.slider, 1500)
        self.assertEqual(state.angle, -144)
        self.assertEqual(state.diameter, 1500.0)

    def test_flat_state(self):
        state = curve_state_from_slider(2500)
        self.assertFalse(state.is_curved)
        self.assertFalse(state.flipped)

    def test_state_from_angle(self):
        state = curve_state_from_angle(-180)
        self.assertEqual(state.percentage, -50)
        self.assertTrue(state.flipped)


class TestCurveSettings(unittest.TestCase):
    """Test settings validation and custom constants."""

    def test_defaults_valid(self):
        is_valid, error = DEFAULT_SETTINGS.validate()
        self.assertTrue(is_valid)
        self.assertEqual(error, "")

    def test_invalid_diameters(self):
        is_valid, error = CurveSettings(min_diameter=0).validate()
        self.assertFalse(is_valid)
        self.assertIn("positive", error.lower())

        is_valid, _ = CurveSettings(max_diameter=100, min_diameter=200).validate()
        self.assertFalse(is_valid)

    def test_custom_diameter_range(self):
        settings = CurveSettings(max_diameter=1000.0, min_diameter=100.0)
        self.assertEqual(diameter_from_percentage(0, settings), 1000.0)
        self.assertEqual(diameter_from_percentage(45, settings), 550.0)
        self.assertEqual(diameter_from_percentage(90, settings), 100.0)


if __name__ == '__main__':
    unittest.main()
