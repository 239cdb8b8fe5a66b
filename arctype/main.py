#!/usr/bin/env python3
"""
ArcType - Command line renderer

Renders a single curved string to a PNG file.
Run with: python -m arctype.main "Hello world" --percentage 45 -o out.png
"""

import argparse
import logging
import sys
from typing import List, Optional

from PIL import Image

from .core.shapes import CurvedTextElement, FontSpec, Shadow, StrokeSpec
from .text.curve_mapping import curve_state_from_angle, curve_state_from_percentage

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arctype",
        description="Render text along a circular arc to a PNG image."
    )
    parser.add_argument("text", help="Text to render")
    curve = parser.add_mutually_exclusive_group()
    curve.add_argument("--percentage", type=int, default=50,
                       help="Curvature in [-90, 90]; negative faces outward (default: 50)")
    curve.add_argument("--angle", type=float,
                       help="Curvature as a display angle in [-360, 360]")
    parser.add_argument("--diameter", type=float,
                        help="Override the diameter derived from the curvature")
    parser.add_argument("--font", default="Arial", help="Font family or font file")
    parser.add_argument("--font-size", type=float, default=40.0)
    parser.add_argument("--bold", action="store_true")
    parser.add_argument("--italic", action="store_true")
    parser.add_argument("--fill", default="#000000")
    parser.add_argument("--stroke", help="Stroke color")
    parser.add_argument("--stroke-width", type=float, default=0.0)
    parser.add_argument("--kerning", type=float, default=0.0)
    parser.add_argument("--shadow", help="Shadow color (enables a drop shadow)")
    parser.add_argument("--background", help="Background color (default: transparent)")
    parser.add_argument("--margin", type=int, default=10,
                        help="Padding around the text in pixels")
    parser.add_argument("-o", "--output", default="curved-text.png")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the ArcType renderer."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.angle is not None:
        state = curve_state_from_angle(args.angle)
    else:
        state = curve_state_from_percentage(args.percentage)
    if not state.is_curved:
        logger.error("Curvature must be nonzero to render curved text")
        return 2

    element = CurvedTextElement(
        args.text,
        diameter=args.diameter or state.diameter,
        kerning=args.kerning,
        font=FontSpec(
            family=args.font,
            size=args.font_size,
            weight="bold" if args.bold else "normal",
            style="italic" if args.italic else "normal",
        ),
        fill=args.fill,
        stroke=StrokeSpec(args.stroke, args.stroke_width),
        shadow=Shadow(color=args.shadow, blur=4.0, offset_x=3.0, offset_y=3.0)
        if args.shadow else None,
        percentage=state.percentage,
    )

    element.cache.render(element)
    width = int(element.width) + 2 * args.margin
    height = int(element.height) + 2 * args.margin
    canvas = Image.new("RGBA", (width, height), args.background or (0, 0, 0, 0))
    element.position.x, element.position.y = width / 2, height / 2
    element.render(canvas)

    try:
        canvas.save(args.output)
    except OSError as e:
        logger.error(f"Could not write {args.output}: {e}")
        return 1

    logger.info(f"Wrote {width}x{height} image to {args.output} "
                f"({state.percentage}%, {state.angle} deg)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
