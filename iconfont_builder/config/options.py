"""
Icon font build options.

Mirrors the option set the font generation stage understands.
"""

from dataclasses import dataclass
from enum import StrEnum


class FontFormat(StrEnum):
    """Output font formats, values match file extensions."""

    TTF = "ttf"
    EOT = "eot"
    WOFF = "woff"
    WOFF2 = "woff2"


# First codepoint handed out to glyphs without a codepoint marker
DEFAULT_START_CODEPOINT = 0xEA01

DEFAULT_FORMATS = (FontFormat.TTF, FontFormat.EOT, FontFormat.WOFF, FontFormat.WOFF2)


@dataclass(frozen=True)
class IconFontOptions:
    """
    Font generation and stylesheet options.

    append_codepoints embeds each assigned codepoint in its source file name
    (uEA01-home.svg) so later runs reuse it. append_unicode names glyphs in
    the font after their codepoint (uniEA01) instead of after the icon.
    """

    font_name: str = "iconfont"
    formats: tuple[FontFormat, ...] = DEFAULT_FORMATS
    append_codepoints: bool = True
    append_unicode: bool = False
    normalize: bool = True
    font_height: int = 1000
    center_horizontally: bool = True
    class_name: str = "icon"
    start_codepoint: int = DEFAULT_START_CODEPOINT

    def __post_init__(self) -> None:
        if not self.font_name:
            raise ValueError("font_name must not be empty")
        if self.font_height <= 0:
            raise ValueError(f"font_height must be positive, got {self.font_height}")
        try:
            formats = tuple(FontFormat(f) for f in self.formats)
        except ValueError as exc:
            known = ", ".join(f.value for f in FontFormat)
            raise ValueError(
                f"Unknown font format in {self.formats}; expected {known}"
            ) from exc
        object.__setattr__(self, "formats", formats)
