"""
Build pipeline orchestration.

Runs icon font builds for one or all deployments.
"""

import sys
from collections.abc import Callable
from typing import TypeVar

from iconfont_builder.config.deployments import DEPLOYMENTS, get_deployment
from iconfont_builder.operations.iconfont import BuildResult, build_iconfont
from iconfont_builder.utils.logging import logger

T = TypeVar("T")


def run_step(name: str, func: Callable[[], T]) -> T:
    """Run one build step, exiting with status 1 on failure."""
    try:
        result = func()
        logger.info(f"{name} completed")
        return result
    except SystemExit as e:
        if e.code != 0:
            logger.error(f"{name} failed")
        raise
    except Exception as e:
        logger.error(f"{name} failed: {e}")
        sys.exit(1)


def run_iconfont(name: str = "scss") -> None:
    """
    Build a single deployment.

    Args:
        name: Deployment name. Defaults to the SCSS deployment.
    """
    try:
        deployment = get_deployment(name)
    except KeyError as e:
        logger.error(e.args[0])
        sys.exit(1)

    result: BuildResult = run_step(
        f"iconfont:{name}", lambda: build_iconfont(deployment)
    )
    logger.info(
        f"Built {len(result.manifest.glyphs)} glyphs into "
        f"{len(result.font_files)} font files and {result.stylesheet}"
    )


def run_all() -> None:
    """
    Build every deployment in order.

    Deployments:
      1. scss - SCSS partial from assets/iconfont-src
      2. css  - plain stylesheet from static/iconfont-src
    """
    deployments = list(DEPLOYMENTS.values())

    logger.info("Running all icon font builds")

    for i, deployment in enumerate(deployments, 1):
        logger.info(f"[{i}/{len(deployments)}] Running iconfont:{deployment.name}")
        run_step(f"iconfont:{deployment.name}", lambda d=deployment: build_iconfont(d))

    logger.info("All builds completed successfully")
