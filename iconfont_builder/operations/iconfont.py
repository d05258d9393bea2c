"""
Icon font build operations.

Font generation collects glyphs from SVG sources and writes the font files.
As soon as the glyphs have codepoints, the manifest is delivered through a
one-shot Future; stylesheet rendering consumes it.
"""

import time
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path

from iconfont_builder.config.deployments import Deployment
from iconfont_builder.config.options import IconFontOptions
from iconfont_builder.config.paths import SVG_PATTERN
from iconfont_builder.core.font_io import (
    build_font,
    get_font_size_kb,
    iter_sources,
    save_font,
)
from iconfont_builder.core.glyphs import Glyph, assign_codepoints, embed_codepoints
from iconfont_builder.core.stylesheet import StylesheetContext, write_stylesheet
from iconfont_builder.core.svg import GlyphOutline, import_svg
from iconfont_builder.utils.logging import logger


@dataclass(frozen=True)
class GlyphManifest:
    """Finalized glyphs of one build and the options in effect."""

    glyphs: tuple[Glyph, ...]
    options: IconFontOptions
    font_date: int  # milliseconds since the epoch, taken when glyphs are emitted


@dataclass(frozen=True)
class BuildResult:
    """Outputs of one icon font build."""

    manifest: GlyphManifest
    font_files: tuple[Path, ...]
    stylesheet: Path


def timestamp_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def collect_glyphs(
    source_dir: Path,
    options: IconFontOptions,
) -> tuple[list[Glyph], dict[str, GlyphOutline]]:
    """
    Import SVG sources and assign codepoints.

    Outlines are imported before any source file is renamed, so a broken
    SVG leaves the source directory untouched.

    Returns:
        (glyphs sorted by codepoint, outlines keyed by glyph name)
    """
    sources = list(iter_sources(source_dir, SVG_PATTERN))
    logger.info(f"Found {len(sources)} SVG files in {source_dir}")

    glyphs = assign_codepoints(sources, options.start_codepoint)
    outlines = {glyph.name: import_svg(glyph.source, options) for glyph in glyphs}

    if options.append_codepoints:
        glyphs = embed_codepoints(glyphs)

    return glyphs, outlines


def generate_font(
    source_dir: Path,
    font_dir: Path,
    options: IconFontOptions,
    on_glyphs: Future[GlyphManifest],
) -> list[Path]:
    """
    Build the icon font and write it in every requested format.

    Args:
        source_dir: Directory containing SVG icons
        font_dir: Destination directory for font files
        options: Build options
        on_glyphs: Resolved with the manifest once codepoints are assigned,
            or with the error if glyph collection fails

    Returns:
        Written font file paths
    """
    logger.info(f"Generating {options.font_name} from {source_dir}")

    try:
        glyphs, outlines = collect_glyphs(source_dir, options)
    except Exception as e:
        on_glyphs.set_exception(e)
        raise

    manifest = GlyphManifest(tuple(glyphs), options, timestamp_ms())
    on_glyphs.set_result(manifest)

    for glyph in glyphs:
        logger.info(f"  U+{glyph.codepoint:04X} {glyph.name}")

    font = build_font(glyphs, outlines, options)
    written = save_font(font, font_dir, options.font_name, options.formats)
    font.close()

    for path in written:
        logger.info(f"Created {path} ({get_font_size_kb(path):.1f} KB)")

    return written


def render_stylesheet(deployment: Deployment, manifest: GlyphManifest) -> Path:
    """
    Render the deployment's stylesheet from a glyph manifest.

    Args:
        deployment: Template, output location and font path
        manifest: Glyphs produced by generate_font, passed through unchanged

    Returns:
        Path of the written stylesheet
    """
    context = StylesheetContext(
        glyphs=manifest.glyphs,
        font_name=manifest.options.font_name,
        font_path=deployment.font_path,
        class_name=manifest.options.class_name,
        font_date=manifest.font_date,
    )
    output = write_stylesheet(
        deployment.template_path, deployment.stylesheet_path, context
    )
    logger.info(f"Created {output} ({len(manifest.glyphs)} glyphs)")
    return output


def build_iconfont(deployment: Deployment) -> BuildResult:
    """
    Build a deployment's icon font and stylesheet.

    The stylesheet is rendered from the manifest delivered by generate_font
    and written only after every font file has been written.
    """
    logger.info(f"Building icon font ({deployment.name})")

    on_glyphs: Future[GlyphManifest] = Future()
    font_files = generate_font(
        deployment.source_dir, deployment.font_dir, deployment.options, on_glyphs
    )
    manifest = on_glyphs.result()
    stylesheet = render_stylesheet(deployment, manifest)

    return BuildResult(manifest, tuple(font_files), stylesheet)
