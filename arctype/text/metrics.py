"""
Font resolution and metrics for ArcType

Resolves FontSpec descriptors to Pillow fonts (bundled, registered
or system fonts) and measures line heights and glyph advances.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING
import logging

from PIL import ImageFont

if TYPE_CHECKING:
    from ..core.shapes import FontSpec

logger = logging.getLogger(__name__)

# Tried in order when the requested family cannot be found
FALLBACK_FONT_FILES = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf")

# Loaded fonts kept per resolver; resize drags produce a new size every frame
FONT_CACHE_SIZE = 64

_STYLE_SUFFIXES = {
    (False, False): ("", "-Regular", " Regular"),
    (True, False): ("-Bold", " Bold", "bd"),
    (False, True): ("-Italic", " Italic", "-Oblique", "i"),
    (True, True): ("-BoldItalic", " Bold Italic", "-BoldOblique", "bi"),
}


class FontResolver:
    """
    Maps font descriptors to loaded Pillow fonts.

    Features:
    - Loads bundled fonts from a resources/fonts directory
    - Allows registering custom font files at runtime
    - Falls back to system and built-in fonts, so resolution never fails
    - Keeps the most recently used fonts in a bounded cache

    Args:
        cache_size: Maximum number of loaded fonts kept in memory
    """

    def __init__(self, cache_size: int = FONT_CACHE_SIZE):
        self._registered: Dict[Tuple[str, bool, bool], str] = {}
        self._cache: 'OrderedDict[Tuple[str, float, bool, bool], ImageFont.FreeTypeFont]' = OrderedDict()
        self.cache_size = max(int(cache_size), 1)

    @property
    def cached_font_count(self) -> int:
        return len(self._cache)

    def load_bundled_fonts(self, fonts_dir: Optional[Path] = None) -> int:
        """
        Register every font file in a directory.

        Args:
            fonts_dir: Directory to scan (defaults to resources/fonts
                next to the package)

        Returns:
            Number of fonts successfully registered
        """
        if fonts_dir is None:
            fonts_dir = Path(__file__).parent.parent / "resources" / "fonts"
        fonts_dir = Path(fonts_dir)

        if not fonts_dir.exists():
            logger.info(f"Fonts directory not found at {fonts_dir}. Skipping bundled fonts.")
            return 0

        loaded_count = 0
        for pattern in ("*.ttf", "*.otf"):
            for font_file in sorted(fonts_dir.glob(pattern)):
                if self.register_font_file(str(font_file)):
                    loaded_count += 1

        logger.info(f"Loaded {loaded_count} bundled fonts from {fonts_dir}")
        return loaded_count

    def register_font_file(self, font_path: str) -> bool:
        """
        Register a font file under the family and style it declares.

        Args:
            font_path: Path to font file (.ttf or .otf)

        Returns:
            True if the file could be read as a font
        """
        try:
            font = ImageFont.truetype(font_path, 12)
        except OSError as e:
            logger.warning(f"Failed to load font from {font_path}: {e}")
            return False

        family, style = font.getname()
        style = (style or "").lower()
        key = (family.lower(), "bold" in style, "italic" in style or "oblique" in style)
        self._registered[key] = font_path
        logger.debug(f"Loaded font: {family} {style} from {font_path}")
        return True

    def get_registered_families(self) -> List[str]:
        """Get list of registered font families."""
        return sorted({family for family, _, _ in self._registered})

    def load(self, font: 'FontSpec') -> ImageFont.FreeTypeFont:
        """
        Resolve a font descriptor to a Pillow font of the right size.

        Args:
            font: Font descriptor

        Returns:
            A loaded font; the built-in font if nothing else matches
        """
        size = max(float(font.size), 1.0)
        key = (font.family.lower(), round(size, 2), font.is_bold, font.is_italic)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        loaded = None
        for candidate in self._candidates(font):
            try:
                loaded = ImageFont.truetype(candidate, size)
                break
            except OSError:
                continue

        if loaded is None:
            logger.debug(f"No font file for {font.declaration()}, using built-in font")
            loaded = ImageFont.load_default(size=size)

        self._cache[key] = loaded
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return loaded

    def _candidates(self, font: 'FontSpec') -> List[str]:
        """Font files to try for a descriptor, best match first."""
        family = font.family
        style_key = (font.is_bold, font.is_italic)
        candidates = []

        if family.lower().endswith((".ttf", ".otf")):
            candidates.append(family)

        registered = self._registered.get((family.lower(),) + style_key)
        if registered is None:
            registered = self._registered.get((family.lower(), False, False))
        if registered is not None:
            candidates.append(registered)

        compact = family.replace(" ", "")
        for suffix in _STYLE_SUFFIXES[style_key]:
            candidates.append(f"{family}{suffix}.ttf")
            candidates.append(f"{compact}{suffix.replace(' ', '')}.ttf")
            candidates.append(f"{compact.lower()}{suffix.replace(' ', '').lower()}.ttf")

        candidates.extend(FALLBACK_FONT_FILES)
        # preserve order, drop duplicates
        return list(dict.fromkeys(candidates))


class FontMetrics(ABC):
    """Font-metrics capability used by the glyph layout."""

    @abstractmethod
    def line_height(self, font: 'FontSpec', text: str) -> float:
        """Rendered height of a single line of text."""
        pass

    @abstractmethod
    def char_width(self, font: 'FontSpec', char: str) -> float:
        """Advance width of one character."""
        pass


class PillowFontMetrics(FontMetrics):
    """Font metrics backed by Pillow/FreeType."""

    def __init__(self, resolver: Optional[FontResolver] = None):
        self.resolver = resolver or get_font_resolver()

    def line_height(self, font: 'FontSpec', text: str) -> float:
        ascent, descent = self.resolver.load(font).getmetrics()
        return float(ascent + descent)

    def char_width(self, font: 'FontSpec', char: str) -> float:
        return float(self.resolver.load(font).getlength(char))


# Global instances
_font_resolver: Optional[FontResolver] = None
_default_metrics: Optional[PillowFontMetrics] = None


def get_font_resolver() -> FontResolver:
    """
    Get the global font resolver instance.

    Returns:
        FontResolver instance
    """
    global _font_resolver
    if _font_resolver is None:
        _font_resolver = FontResolver()
        # Auto-load bundled fonts on first access
        _font_resolver.load_bundled_fonts()
    return _font_resolver


def default_metrics() -> PillowFontMetrics:
    """Get the metrics instance used when none is supplied."""
    global _default_metrics
    if _default_metrics is None:
        _default_metrics = PillowFontMetrics()
    return _default_metrics
