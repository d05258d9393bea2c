"""
Icon font deployment definitions.

A deployment ties the build to a set of source and output directories and
to one stylesheet flavor.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from iconfont_builder.config.options import IconFontOptions
from iconfont_builder.config.paths import (
    CSS_FONT_DIR,
    CSS_SOURCE_DIR,
    CSS_STYLESHEET_DIR,
    SCSS_FONT_DIR,
    SCSS_SOURCE_DIR,
    SCSS_STYLESHEET_DIR,
)


class StylesheetFlavor(Enum):
    """Stylesheet output format."""

    SCSS = "scss"
    CSS = "css"

    def filename(self, font_name: str) -> str:
        """Output filename; SCSS output is a partial."""
        if self is StylesheetFlavor.SCSS:
            return f"_{font_name}.scss"
        return f"{font_name}.css"


@dataclass(frozen=True)
class Deployment:
    """Paths and flavor for one icon font build."""

    name: str
    source_dir: Path
    font_dir: Path
    stylesheet_dir: Path
    template_path: Path
    font_path: str  # URL prefix for font files, relative to the stylesheet
    flavor: StylesheetFlavor
    options: IconFontOptions = field(default_factory=IconFontOptions)

    @property
    def stylesheet_path(self) -> Path:
        """Rendered stylesheet location."""
        return self.stylesheet_dir / self.flavor.filename(self.options.font_name)

    def font_files(self) -> list[Path]:
        """Expected font output paths, one per format."""
        return [
            self.font_dir / f"{self.options.font_name}.{fmt.value}"
            for fmt in self.options.formats
        ]


SCSS_DEPLOYMENT = Deployment(
    name="scss",
    source_dir=SCSS_SOURCE_DIR,
    font_dir=SCSS_FONT_DIR,
    stylesheet_dir=SCSS_STYLESHEET_DIR,
    template_path=SCSS_SOURCE_DIR / "_iconfont.scss",
    font_path="../iconfont/",
    flavor=StylesheetFlavor.SCSS,
)

CSS_DEPLOYMENT = Deployment(
    name="css",
    source_dir=CSS_SOURCE_DIR,
    font_dir=CSS_FONT_DIR,
    stylesheet_dir=CSS_STYLESHEET_DIR,
    template_path=CSS_SOURCE_DIR / "iconfont.css",
    font_path="../fonts/",
    flavor=StylesheetFlavor.CSS,
)

DEPLOYMENTS = {d.name: d for d in (SCSS_DEPLOYMENT, CSS_DEPLOYMENT)}


def get_deployment(name: str) -> Deployment:
    """
    Look up a deployment by name.

    Raises:
        KeyError: If no deployment has that name
    """
    try:
        return DEPLOYMENTS[name]
    except KeyError:
        known = ", ".join(DEPLOYMENTS)
        raise KeyError(f"Unknown deployment '{name}' (known: {known})") from None
