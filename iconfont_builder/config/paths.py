"""
Filesystem path constants for build tasks.

Centralizes path definitions to avoid magic strings in individual tasks.
"""

from pathlib import Path

# SCSS deployment
ASSETS_DIR = Path("assets")
SCSS_SOURCE_DIR = ASSETS_DIR / "iconfont-src"
SCSS_FONT_DIR = ASSETS_DIR / "iconfont"
SCSS_STYLESHEET_DIR = ASSETS_DIR / "scss"

# Plain CSS deployment
STATIC_DIR = Path("static")
CSS_SOURCE_DIR = STATIC_DIR / "iconfont-src"
CSS_FONT_DIR = STATIC_DIR / "fonts"
CSS_STYLESHEET_DIR = STATIC_DIR / "css"

# Source glob for glyph files
SVG_PATTERN = "*.svg"
