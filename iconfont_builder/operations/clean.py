"""
Clean operations.

Removes generated font files and stylesheets. Source directories are never
touched.
"""

import sys
from pathlib import Path

from iconfont_builder.config.deployments import Deployment
from iconfont_builder.utils.logging import logger


def remove_file(path: Path) -> bool:
    """
    Delete a generated file.

    Args:
        path: File to delete

    Returns:
        True if the file existed and was removed
    """
    if not path.exists():
        logger.info(f"{path} does not exist (skipped)")
        return False

    try:
        path.unlink()
    except OSError as e:
        logger.error(f"Failed to remove {path}: {e}")
        sys.exit(1)

    logger.info(f"Removed {path}")
    return True


def clean(deployment: Deployment) -> int:
    """
    Remove a deployment's font files and stylesheet.

    Returns:
        Number of files removed
    """
    logger.info(f"Cleaning build artifacts ({deployment.name})")

    targets = [*deployment.font_files(), deployment.stylesheet_path]
    removed = sum(remove_file(path) for path in targets)

    logger.info(f"Clean complete ({removed} files removed)")
    return removed
