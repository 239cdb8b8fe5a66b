"""
Tests for the curved text raster cache.

Covers the CLEAN/DIRTY transitions, refresh-only re-blits, trimming
and blitting onto a target image.
"""

import unittest
from unittest import mock

import numpy as np
from PIL import Image, ImageDraw

from arctype.core.document import Document
from arctype.core.layer import Layer
from arctype.core.shapes import CurvedTextElement, FontSpec, Shadow, StrokeSpec
from arctype.text.arc_layout import place_text_on_arc
from arctype.text.raster_cache import (
    CacheState, RasterCache, trim_raster, build_shadow_layer
)


def blank_placer(text, diameter, *args, **kwargs):
    """Placer that draws nothing."""
    size = int(diameter)
    return Image.new("RGBA", (size, size), (0, 0, 0, 0))


def box_placer(text, diameter, *args, **kwargs):
    """Placer that draws a 20x10 box regardless of the text."""
    size = int(diameter)
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    ImageDraw.Draw(image).rectangle((30, 40, 49, 49), fill=(0, 0, 0, 255))
    return image


class TestTrimRaster(unittest.TestCase):
    """Test cropping to opaque pixels."""

    def test_trims_to_inclusive_box(self):
        image = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        ImageDraw.Draw(image).rectangle((10, 20, 29, 39), fill=(255, 0, 0, 255))
        trimmed, ok = trim_raster(image)
        self.assertTrue(ok)
        self.assertEqual(trimmed.size, (20, 20))

    def test_single_pixel(self):
        image = Image.new("RGBA", (50, 50), (0, 0, 0, 0))
        image.putpixel((7, 9), (0, 0, 0, 1))
        trimmed, ok = trim_raster(image)
        self.assertTrue(ok)
        self.assertEqual(trimmed.size, (1, 1))

    def test_blank_image_is_returned_unchanged(self):
        image = Image.new("RGBA", (64, 32), (0, 0, 0, 0))
        with self.assertLogs("arctype.text.raster_cache", level="WARNING"):
            trimmed, ok = trim_raster(image)
        self.assertFalse(ok)
        self.assertIs(trimmed, image)


class TestCacheStates(unittest.TestCase):
    """Test invalidation and regeneration."""

    def setUp(self):
        self.element = CurvedTextElement("AB", diameter=250,
                                         font=FontSpec(family="DejaVuSans", size=40))
        self.placer = mock.Mock(wraps=place_text_on_arc)
        self.element.cache = RasterCache(placer=self.placer)

    def test_initially_dirty(self):
        self.assertTrue(RasterCache().is_dirty)
        self.assertTrue(self.element.cache.is_dirty)

    def test_render_cleans_and_sizes_element(self):
        raster = self.element.cache.render(self.element)
        self.assertEqual(self.element.cache.state, CacheState.CLEAN)
        self.assertEqual(self.placer.call_count, 1)
        self.assertEqual((self.element.width, self.element.height), raster.size)
        self.assertTrue(raster.width < 250 or raster.height < 250)

    def test_clean_render_does_not_regenerate(self):
        first = self.element.cache.render(self.element)
        second = self.element.cache.render(self.element)
        self.assertIs(first, second)
        self.assertEqual(self.placer.call_count, 1)

    def test_text_change_regenerates_once(self):
        self.element.cache.render(self.element)
        self.placer.reset_mock()

        self.element.text = "ABC"
        self.assertEqual(self.element.cache.state, CacheState.DIRTY)

        self.element.cache.render(self.element)
        self.assertEqual(self.placer.call_count, 1)
        self.assertEqual(self.element.cache.state, CacheState.CLEAN)
        self.assertEqual(self.placer.call_args[0][0], "ABC")

    def test_every_layout_attribute_invalidates(self):
        changes = {
            "text": "Other",
            "diameter": 300,
            "kerning": 2,
            "flipped": True,
            "font": FontSpec(family="DejaVuSans", size=30),
            "fill": "#ff0000",
            "stroke": StrokeSpec("#00ff00", 2),
        }
        for name, value in changes.items():
            self.element.cache.render(self.element)
            self.assertFalse(self.element.cache.is_dirty)
            setattr(self.element, name, value)
            self.assertTrue(self.element.cache.is_dirty, name)

    def test_shadow_only_refreshes(self):
        self.element.cache.render(self.element)
        self.assertFalse(self.element.cache.refresh)
        self.assertIsNone(self.element.cache.shadow_layer)
        self.placer.reset_mock()

        self.element.shadow = Shadow("#00000080", blur=2, offset_x=3, offset_y=3)
        self.assertEqual(self.element.cache.state, CacheState.CLEAN)
        self.assertTrue(self.element.cache.refresh)

        self.element.cache.render(self.element)
        self.placer.assert_not_called()
        self.assertFalse(self.element.cache.refresh)
        self.assertIsNotNone(self.element.cache.shadow_layer)

    def test_position_change_keeps_cache(self):
        self.element.cache.render(self.element)
        self.element.rotation = 0.5
        self.element.scale_x = 2.0
        self.assertFalse(self.element.cache.is_dirty)


class TestTrimFailure(unittest.TestCase):
    """Test that a blank raster never zeroes the element size."""

    def test_size_unchanged_on_blank_raster(self):
        element = CurvedTextElement("AB", diameter=120)
        element.cache = RasterCache(placer=blank_placer)
        with self.assertLogs("arctype.text.raster_cache", level="WARNING"):
            raster = element.cache.render(element)
        self.assertEqual(raster.size, (120, 120))
        self.assertEqual(element.width, 120)
        self.assertEqual(element.height, 120)
        self.assertFalse(element.cache.is_dirty)


class TestInvalidColors(unittest.TestCase):
    """Test that bad colors are logged and never stop a paint pass."""

    def test_bad_fill_keeps_last_raster(self):
        element = CurvedTextElement("AB", diameter=250,
                                    font=FontSpec(family="DejaVuSans", size=40))
        good = element.cache.render(element)
        size = (element.width, element.height)

        element.fill = "not-a-color"
        with self.assertLogs("arctype.text.raster_cache", level="ERROR"):
            raster = element.cache.render(element)
        self.assertIs(raster, good)
        self.assertEqual((element.width, element.height), size)
        self.assertFalse(element.cache.is_dirty)

    def test_bad_fill_on_first_render(self):
        element = CurvedTextElement("AB", diameter=120, fill="not-a-color")
        with self.assertLogs("arctype.text.raster_cache", level="ERROR"):
            raster = element.cache.render(element)
        self.assertEqual(raster.size, (1, 1))
        self.assertEqual(element.width, 120)

    def test_bad_shadow_color(self):
        element = CurvedTextElement("AB", diameter=100, x=50, y=50)
        element.cache = RasterCache(placer=box_placer)
        element.shadow = Shadow("not-a-color", blur=2)
        target = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        with self.assertLogs("arctype.text.raster_cache", level="ERROR"):
            element.render(target)
        self.assertIsNone(element.cache.shadow_layer)
        self.assertIsNotNone(target.getbbox())

    def test_paint_pass_continues_after_bad_element(self):
        broken = CurvedTextElement("Broken", diameter=100, fill="not-a-color",
                                   percentage=80, x=50, y=50)
        healthy = CurvedTextElement("Healthy", diameter=100, percentage=80,
                                    x=150, y=50)
        healthy.cache = RasterCache(placer=box_placer)
        layer = Layer()
        layer.add_shape(broken)
        layer.add_shape(healthy)
        document = Document(width=200, height=100)
        document.add_layer(layer)

        with self.assertLogs("arctype.text.raster_cache", level="ERROR"):
            image = document.paint()
        self.assertFalse(healthy.cache.is_dirty)
        self.assertGreaterEqual(image.getbbox()[0], 100)


class TestBlit(unittest.TestCase):
    """Test painting onto a target image."""

    def test_blit_centered_on_position(self):
        element = CurvedTextElement("AB", diameter=100, x=50, y=60)
        element.cache = RasterCache(placer=box_placer)
        target = Image.new("RGBA", (100, 120), (0, 0, 0, 0))
        element.render(target)

        ys, xs = np.nonzero(np.asarray(target.getchannel("A")))
        self.assertEqual((element.width, element.height), (20, 10))
        self.assertEqual((xs.min(), xs.max()), (40, 59))
        self.assertEqual((ys.min(), ys.max()), (55, 64))

    def test_blit_uses_absorbed_height(self):
        element = CurvedTextElement("AB", diameter=100, x=50, y=50)
        element.cache = RasterCache(placer=box_placer)
        element.cache.render(element)
        element.height = 20
        target = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        element.render(target)

        ys, _ = np.nonzero(np.asarray(target.getchannel("A")))
        self.assertEqual(ys.max() - ys.min() + 1, 20)

    def test_shadow_drawn_under_text(self):
        element = CurvedTextElement("AB", diameter=100, x=50, y=50)
        element.cache = RasterCache(placer=box_placer)
        element.shadow = Shadow("#0000ffff", blur=0, offset_x=0, offset_y=10)
        target = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        element.render(target)

        pixels = np.asarray(target)
        # text covers rows 45..54, shadow shows below it
        self.assertEqual(tuple(pixels[50, 50]), (0, 0, 0, 255))
        self.assertEqual(tuple(pixels[60, 50]), (0, 0, 255, 255))

    def test_build_shadow_layer_none(self):
        self.assertIsNone(build_shadow_layer(Image.new("RGBA", (5, 5)), None))


if __name__ == '__main__':
    unittest.main()
