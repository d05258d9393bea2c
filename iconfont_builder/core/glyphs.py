"""
Glyph descriptors and codepoint assignment.

Glyph names come from SVG file names. A file name may carry a codepoint
marker (uEA01-home.svg); unmarked files get the next free codepoint.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from iconfont_builder.utils.logging import logger

CODEPOINT_MARKER = re.compile(r"^u([0-9a-fA-F]{4,6})-(.+)$")

# Unicode scalar values only
MAX_CODEPOINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def is_scalar_value(codepoint: int) -> bool:
    """Check a codepoint can be mapped in a cmap."""
    return 0 <= codepoint <= MAX_CODEPOINT and codepoint not in SURROGATES


@dataclass(frozen=True)
class Glyph:
    """One imported SVG glyph."""

    name: str
    codepoint: int
    source: Path

    @property
    def unicode(self) -> tuple[str, ...]:
        """Characters mapped to this glyph."""
        return (chr(self.codepoint),)

    @property
    def hex(self) -> str:
        """Lowercase hex codepoint, as used in CSS escapes."""
        return f"{self.codepoint:x}"

    def glyph_name(self, use_codepoint: bool = False) -> str:
        """Glyph name for the font's post table."""
        if not use_codepoint:
            return self.name
        if self.codepoint > 0xFFFF:
            return f"u{self.codepoint:X}"
        return f"uni{self.codepoint:04X}"


def parse_source_name(path: Path) -> tuple[str, int | None]:
    """
    Split an SVG file name into glyph name and marker codepoint.

    Args:
        path: SVG file path

    Returns:
        (name, codepoint), codepoint is None when the file has no marker
    """
    match = CODEPOINT_MARKER.match(path.stem)
    if match is None:
        return path.stem, None
    return match.group(2), int(match.group(1), 16)


def marked_path(path: Path, name: str, codepoint: int) -> Path:
    """Path of the SVG file renamed to carry its codepoint marker."""
    return path.with_name(f"u{codepoint:04X}-{name}{path.suffix}")


def assign_codepoints(
    sources: Iterable[Path],
    start_codepoint: int,
) -> list[Glyph]:
    """
    Build glyph descriptors for SVG sources.

    Marker codepoints are reserved first, then the remaining files receive
    the lowest unused codepoints from start_codepoint upwards, in sorted
    file-name order.

    Args:
        sources: SVG file paths
        start_codepoint: First codepoint for unmarked files

    Returns:
        Glyphs sorted by codepoint

    Raises:
        ValueError: On duplicate glyph names or marker codepoints, or a
            marker outside the Unicode scalar values
    """
    parsed = [(path, *parse_source_name(path)) for path in sorted(sources)]

    names: dict[str, Path] = {}
    for path, name, _ in parsed:
        if name in names:
            raise ValueError(
                f"Duplicate glyph name '{name}': {names[name].name} and {path.name}"
            )
        names[name] = path

    used: dict[int, Path] = {}
    for path, _, codepoint in parsed:
        if codepoint is None:
            continue
        if not is_scalar_value(codepoint):
            raise ValueError(
                f"Invalid codepoint U+{codepoint:04X} in {path.name}: "
                f"surrogates and values above U+{MAX_CODEPOINT:X} cannot be mapped"
            )
        if codepoint in used:
            raise ValueError(
                f"Duplicate codepoint U+{codepoint:04X}: "
                f"{used[codepoint].name} and {path.name}"
            )
        used[codepoint] = path

    glyphs = []
    next_codepoint = start_codepoint
    for path, name, codepoint in parsed:
        if codepoint is None:
            while next_codepoint in used or next_codepoint in SURROGATES:
                next_codepoint += 1
            if next_codepoint > MAX_CODEPOINT:
                raise ValueError(f"Ran out of codepoints assigning '{name}'")
            codepoint = next_codepoint
            used[codepoint] = path
        glyphs.append(Glyph(name, codepoint, path))

    return sorted(glyphs, key=lambda g: g.codepoint)


def embed_codepoints(glyphs: list[Glyph]) -> list[Glyph]:
    """
    Rename unmarked SVG sources so their file names carry the codepoint.

    Args:
        glyphs: Glyphs from assign_codepoints

    Returns:
        Glyphs pointing at the renamed sources, same order
    """
    renamed = []
    for glyph in glyphs:
        _, marker = parse_source_name(glyph.source)
        if marker is not None:
            renamed.append(glyph)
            continue

        target = marked_path(glyph.source, glyph.name, glyph.codepoint)
        glyph.source.rename(target)
        logger.info(f"Renamed {glyph.source.name} -> {target.name}")
        renamed.append(Glyph(glyph.name, glyph.codepoint, target))

    return renamed
