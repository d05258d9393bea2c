"""
Icon font output validation.

Checks the font files and stylesheet a deployment produced.
"""

import sys
from io import BytesIO
from pathlib import Path

from iconfont_builder.config.deployments import (
    DEPLOYMENTS,
    Deployment,
    get_deployment,
)
from iconfont_builder.config.options import FontFormat
from iconfont_builder.core.eot import (
    EOT_MAGIC,
    EOT_VERSION,
    extract_font_data,
    read_eot_header,
)
from iconfont_builder.core.font_io import NOTDEF, open_font
from iconfont_builder.utils.logging import logger


def check_files_exist(deployment: Deployment) -> bool:
    """Check every font file and the stylesheet exist."""
    success = True
    for path in [*deployment.font_files(), deployment.stylesheet_path]:
        if path.exists():
            logger.info(f"Found {path}")
        else:
            logger.error(f"File not found: {path}")
            success = False
    return success


def load_font_data(path: Path) -> bytes:
    """Read a font file, unwrapping EOT to its TrueType data."""
    data = path.read_bytes()
    if path.suffix == f".{FontFormat.EOT.value}":
        return extract_font_data(data)
    return data


def check_eot_header(path: Path) -> bool:
    """Check EOT header sizes, version and magic number."""
    data = path.read_bytes()
    header = read_eot_header(data)
    success = True

    if header.eot_size != len(data):
        logger.error(f"{path.name}: EOTSize {header.eot_size} != file size {len(data)}")
        success = False
    if header.font_data_size >= header.eot_size:
        logger.error(f"{path.name}: FontDataSize {header.font_data_size} too large")
        success = False
    if header.version != EOT_VERSION:
        logger.error(f"{path.name}: unexpected version 0x{header.version:08X}")
        success = False
    if header.magic != EOT_MAGIC:
        logger.error(f"{path.name}: bad magic number 0x{header.magic:04X}")
        success = False

    if success:
        logger.info(f"{path.name}: EOT header is valid")
    return success


def check_font_files(deployment: Deployment) -> dict[int, str] | None:
    """
    Load every font format and compare glyph sets.

    Returns:
        The TrueType cmap if all formats agree, None otherwise
    """
    success = True
    glyph_orders: dict[str, list[str]] = {}
    cmap: dict[int, str] = {}

    for path in deployment.font_files():
        if path.suffix == f".{FontFormat.EOT.value}" and not check_eot_header(path):
            success = False
            continue

        try:
            with open_font(BytesIO(load_font_data(path))) as font:
                glyph_orders[path.name] = font.getGlyphOrder()
                if not cmap:
                    cmap = dict(font.getBestCmap() or {})
        except Exception as e:
            logger.error(f"Failed to load {path.name}: {e}")
            success = False
            continue

        icon_count = len(glyph_orders[path.name]) - 1
        logger.info(f"{path.name}: {icon_count} glyphs")

    orders = list(glyph_orders.values())
    if any(order != orders[0] for order in orders[1:]):
        logger.error("Glyph order differs between formats")
        success = False
    if orders and orders[0][:1] != [NOTDEF]:
        logger.error(f"First glyph is not {NOTDEF}")
        success = False

    return cmap if success else None


def missing_class_names(text: str, class_name: str, names: list[str]) -> list[str]:
    """Return the glyph class names missing from a stylesheet."""
    return [name for name in names if f".{class_name}-{name}" not in text]


def check_stylesheet(deployment: Deployment, cmap: dict[int, str]) -> bool:
    """Check the stylesheet has a rule for every glyph in the font."""
    path = deployment.stylesheet_path
    text = path.read_text(encoding="utf-8")
    options = deployment.options
    success = True

    for codepoint in cmap:
        if f"{codepoint:x}" not in text:
            logger.error(f"{path.name}: codepoint U+{codepoint:04X} not referenced")
            success = False

    if not options.append_unicode:
        missing = missing_class_names(text, options.class_name, list(cmap.values()))
        for name in missing:
            logger.error(f"{path.name}: missing rule .{options.class_name}-{name}")
        success = success and not missing

    if success:
        logger.info(f"{path.name}: all {len(cmap)} glyphs referenced")
    return success


def validate_deployment(deployment: Deployment) -> bool:
    """Run all checks for one deployment."""
    logger.info(f"Validating icon font ({deployment.name})")

    logger.info("--- Files ---")
    if not check_files_exist(deployment):
        return False

    logger.info("--- Fonts ---")
    cmap = check_font_files(deployment)
    if cmap is None:
        return False

    logger.info("--- Stylesheet ---")
    return check_stylesheet(deployment, cmap)


def validate_fonts(name: str = "scss") -> None:
    """Validate one deployment, exiting with status 1 on failure."""
    try:
        deployment = get_deployment(name)
    except KeyError as e:
        logger.error(e.args[0])
        sys.exit(1)

    if validate_deployment(deployment):
        logger.info("All checks passed")
    else:
        logger.error("Some checks failed")
        sys.exit(1)


def validate_all() -> None:
    """Validate every deployment."""
    all_passed = True
    for deployment in DEPLOYMENTS.values():
        if not validate_deployment(deployment):
            all_passed = False

    if all_passed:
        logger.info("All checks passed")
    else:
        logger.error("Some checks failed")
        sys.exit(1)
