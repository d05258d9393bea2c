"""
Font I/O utilities for collecting sources, assembling and saving icon fonts.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from iconfont_builder.config.options import FontFormat, IconFontOptions
from iconfont_builder.core.eot import build_eot
from iconfont_builder.core.glyphs import Glyph
from iconfont_builder.core.naming import FontNaming
from iconfont_builder.core.svg import GlyphOutline

NOTDEF = ".notdef"

# .notdef box, as a fraction of the em
NOTDEF_WIDTH = 0.5
NOTDEF_STROKE = 0.05


def iter_sources(directory: Path, pattern: str = "*.svg") -> Iterator[Path]:
    """
    Iterate over source files matching pattern, sorted by name.

    Args:
        directory: Directory to search
        pattern: Glob pattern to match

    Yields:
        Paths to matching files

    Raises:
        FileNotFoundError: If directory does not exist
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Source directory not found: {directory}")
    return iter(sorted(directory.glob(pattern)))


def draw_notdef(units_per_em: int) -> GlyphOutline:
    """Hollow rectangle used for the .notdef glyph."""
    width = round(units_per_em * NOTDEF_WIDTH)
    stroke = round(units_per_em * NOTDEF_STROKE)
    height = units_per_em

    pen = TTGlyphPen(None)
    # Outer contour clockwise
    pen.moveTo((0, 0))
    pen.lineTo((0, height))
    pen.lineTo((width, height))
    pen.lineTo((width, 0))
    pen.closePath()
    # Inner contour counter-clockwise
    pen.moveTo((stroke, stroke))
    pen.lineTo((width - stroke, stroke))
    pen.lineTo((width - stroke, height - stroke))
    pen.lineTo((stroke, height - stroke))
    pen.closePath()

    return GlyphOutline(pen.glyph(), width)


def build_font(
    glyphs: list[Glyph],
    outlines: dict[str, GlyphOutline],
    options: IconFontOptions,
) -> TTFont:
    """
    Assemble a TrueType icon font.

    Args:
        glyphs: Glyph descriptors, in the order they go into the font
        outlines: Drawn outlines keyed by glyph name
        options: Build options

    Returns:
        TTFont ready to save
    """
    upm = options.font_height
    notdef = draw_notdef(upm)

    glyph_order = [NOTDEF]
    tt_glyphs = {NOTDEF: notdef.glyph}
    metrics = {NOTDEF: (notdef.advance, 0)}
    cmap = {}

    for glyph in glyphs:
        name = glyph.glyph_name(options.append_unicode)
        outline = outlines[glyph.name]
        glyph_order.append(name)
        tt_glyphs[name] = outline.glyph
        metrics[name] = (outline.advance, 0)
        cmap[glyph.codepoint] = name

    fb = FontBuilder(upm, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(tt_glyphs)

    # Left side bearings follow the outlines
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {
            name: (advance, getattr(glyf[name], "xMin", 0))
            for name, (advance, _) in metrics.items()
        }
    )
    fb.setupHorizontalHeader(ascent=upm, descent=0)
    fb.setupNameTable(FontNaming(options.font_name).as_name_strings())
    fb.setupOS2(
        sTypoAscender=upm,
        sTypoDescender=0,
        sTypoLineGap=0,
        usWinAscent=upm,
        usWinDescent=0,
    )
    fb.setupPost()
    fb.setupMaxp()
    return fb.font


def compile_font(font: TTFont) -> bytes:
    """Compile a font to TrueType bytes."""
    buffer = BytesIO()
    font.save(buffer)
    return buffer.getvalue()


def save_font(
    font: TTFont,
    output_dir: Path,
    font_name: str,
    formats: tuple[FontFormat, ...],
) -> list[Path]:
    """
    Write the font once per requested format.

    Args:
        font: Assembled TrueType font
        output_dir: Destination directory
        font_name: Output file stem
        formats: Formats to write

    Returns:
        Written file paths, in format order
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    ttf_data = compile_font(font)

    written = []
    for fmt in formats:
        target = output_dir / f"{font_name}.{fmt.value}"
        if fmt is FontFormat.TTF:
            target.write_bytes(ttf_data)
        elif fmt is FontFormat.EOT:
            target.write_bytes(build_eot(ttf_data))
        else:
            with open_font(BytesIO(ttf_data)) as web_font:
                web_font.flavor = fmt.value
                web_font.save(target)
        written.append(target)

    return written


@contextmanager
def open_font(source) -> Iterator[TTFont]:
    """
    Context manager that closes the font on exit.

    Args:
        source: Path or file object of any format TTFont reads

    Yields:
        TTFont instance
    """
    font = TTFont(source)
    try:
        yield font
    finally:
        font.close()


def get_font_size_kb(path: Path) -> float:
    """Get font file size in kilobytes."""
    return path.stat().st_size / 1024
