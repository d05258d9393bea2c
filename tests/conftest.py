"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from iconfont_builder.config.deployments import Deployment, StylesheetFlavor
from iconfont_builder.config.options import IconFontOptions

PROJECT_ROOT = Path(__file__).parent.parent
SCSS_TEMPLATE = PROJECT_ROOT / "assets" / "iconfont-src" / "_iconfont.scss"
CSS_TEMPLATE = PROJECT_ROOT / "static" / "iconfont-src" / "iconfont.css"

HOME_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <path d="M12 3 2 12h3v8h5v-6h4v6h5v-8h3z"/>
</svg>
"""

CIRCLE_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <circle cx="12" cy="12" r="10"/>
</svg>
"""

# Half-width bar on the left edge of a 100x100 frame
BAR_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="0" y="0" width="50" height="100"/>
</svg>
"""

EMPTY_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"></svg>
"""


def write_svgs(directory: Path, icons: dict[str, str]) -> list[Path]:
    """Write SVG sources named <key>.svg."""
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for name, content in icons.items():
        path = directory / f"{name}.svg"
        path.write_text(content, encoding="utf-8")
        paths.append(path)
    return paths


@pytest.fixture
def source_dir(tmp_path):
    """Empty SVG source directory."""
    path = tmp_path / "iconfont-src"
    path.mkdir()
    return path


@pytest.fixture
def make_deployment(tmp_path, source_dir):
    """Build a Deployment rooted in tmp_path."""

    def _make(
        flavor: StylesheetFlavor = StylesheetFlavor.CSS,
        options: IconFontOptions | None = None,
        template_path: Path | None = None,
    ) -> Deployment:
        if template_path is None:
            template_path = (
                SCSS_TEMPLATE if flavor is StylesheetFlavor.SCSS else CSS_TEMPLATE
            )
        return Deployment(
            name=f"test-{flavor.value}",
            source_dir=source_dir,
            font_dir=tmp_path / "fonts",
            stylesheet_dir=tmp_path / "styles",
            template_path=template_path,
            font_path="../fonts/",
            flavor=flavor,
            options=options or IconFontOptions(),
        )

    return _make
