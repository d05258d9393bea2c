"""
SVG icon import.

Reads SVG outlines with svgpathtools and draws them into TrueType glyphs,
scaled and positioned in font units.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from fontTools.misc.transform import Transform
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.transformPen import TransformPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib.tables._g_l_y_f import Glyph as TTGlyph
from svgpathtools import Arc, CubicBezier, Document, Line, QuadraticBezier
from svgpathtools import Path as SvgPath

from iconfont_builder.config.options import IconFontOptions

NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Max deviation in font units when converting cubics to quadratics
CU2QU_MAX_ERR = 1.0


@dataclass(frozen=True)
class ViewBox:
    """SVG user-space frame of an icon."""

    min_x: float
    min_y: float
    width: float
    height: float


@dataclass
class GlyphOutline:
    """A drawn TrueType glyph and its advance width."""

    glyph: TTGlyph
    advance: int


def parse_length(value: str | None) -> float | None:
    """Parse an SVG length attribute, ignoring units and percentages."""
    if not value or value.strip().endswith("%"):
        return None
    match = NUMBER.match(value.strip())
    return float(match.group()) if match else None


def paths_bounds(paths: list[SvgPath]) -> tuple[float, float, float, float] | None:
    """Union bounding box (xmin, xmax, ymin, ymax) of non-empty paths."""
    boxes = [p.bbox() for p in paths if len(p)]
    if not boxes:
        return None
    return (
        min(b[0] for b in boxes),
        max(b[1] for b in boxes),
        min(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def read_view_box(
    attributes: dict[str, str],
    bounds: tuple[float, float, float, float] | None,
    fallback_size: float,
) -> ViewBox:
    """
    Determine the icon frame.

    Uses viewBox, then width/height, then the outline bounds, then a
    square of fallback_size.
    """
    view_box = attributes.get("viewBox")
    if view_box:
        values = [float(v) for v in NUMBER.findall(view_box)]
        if len(values) == 4 and values[2] > 0 and values[3] > 0:
            return ViewBox(*values)

    width = parse_length(attributes.get("width"))
    height = parse_length(attributes.get("height"))
    if width and height:
        return ViewBox(0.0, 0.0, width, height)

    if bounds is not None:
        xmin, xmax, ymin, ymax = bounds
        if xmax > xmin and ymax > ymin:
            return ViewBox(xmin, ymin, xmax - xmin, ymax - ymin)

    return ViewBox(0.0, 0.0, fallback_size, fallback_size)


def load_svg(path: Path) -> tuple[list[SvgPath], dict[str, str]]:
    """
    Load all drawable elements of an SVG file as paths.

    Shapes (rect, circle, ellipse, line, polyline, polygon) are converted
    and group transforms applied.

    Returns:
        (paths, root element attributes)
    """
    document = Document(str(path))
    return document.paths(), dict(document.root.attrib)


def _point(value: complex) -> tuple[float, float]:
    return (value.real, value.imag)


def draw_svg_path(path: SvgPath, pen) -> None:
    """
    Draw svgpathtools segments into a fontTools pen.

    Every subpath is closed; icon outlines are filled shapes.
    """
    start = None
    current = None

    for segment in path:
        seg_start = _point(segment.start)
        end = _point(segment.end)

        if current is None or seg_start != current:
            if start is not None:
                pen.closePath()
            pen.moveTo(seg_start)
            start = seg_start

        if isinstance(segment, Line):
            if end != seg_start and end != start:
                pen.lineTo(end)
        elif isinstance(segment, QuadraticBezier):
            pen.qCurveTo(_point(segment.control), end)
        elif isinstance(segment, CubicBezier):
            pen.curveTo(_point(segment.control1), _point(segment.control2), end)
        elif isinstance(segment, Arc):
            for cubic in segment.as_cubic_curves():
                pen.curveTo(
                    _point(cubic.control1), _point(cubic.control2), _point(cubic.end)
                )
        else:
            raise ValueError(f"Unknown segment type: {type(segment).__name__}")

        current = end
        if end == start:
            pen.closePath()
            start = None
            current = None

    if start is not None:
        pen.closePath()


def glyph_transform(
    view_box: ViewBox,
    bounds: tuple[float, float, float, float] | None,
    options: IconFontOptions,
) -> tuple[Transform, int]:
    """
    Map SVG user space to font units.

    With normalize, the frame height is scaled to font_height. The y axis is
    flipped so the top of the frame lands on the ascender and the bottom on
    the baseline. With center_horizontally, the outline bounds are centred
    in the advance width.

    Returns:
        (transform, advance width)
    """
    scale = options.font_height / view_box.height if options.normalize else 1.0
    advance = round(view_box.width * scale)

    dx = -view_box.min_x * scale
    if options.center_horizontally and bounds is not None:
        xmin, xmax, _, _ = bounds
        dx = (advance - (xmax - xmin) * scale) / 2 - xmin * scale

    dy = (view_box.min_y + view_box.height) * scale
    return Transform(scale, 0, 0, -scale, dx, dy), advance


def import_svg(path: Path, options: IconFontOptions) -> GlyphOutline:
    """
    Import one SVG icon as a TrueType glyph.

    Args:
        path: SVG file
        options: Build options (normalize, font_height, center_horizontally)

    Returns:
        Drawn glyph and advance width
    """
    paths, attributes = load_svg(path)
    bounds = paths_bounds(paths)
    view_box = read_view_box(attributes, bounds, options.font_height)
    transform, advance = glyph_transform(view_box, bounds, options)

    tt_pen = TTGlyphPen(None)
    cu2qu_pen = Cu2QuPen(tt_pen, max_err=CU2QU_MAX_ERR, reverse_direction=False)
    pen = TransformPen(cu2qu_pen, transform)
    for svg_path in paths:
        draw_svg_path(svg_path, pen)

    return GlyphOutline(tt_pen.glyph(), advance)
