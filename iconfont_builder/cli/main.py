"""
Main CLI entry point for iconfont-builder.
"""

import click

from iconfont_builder import __version__
from iconfont_builder.config.deployments import DEPLOYMENTS

DEPLOYMENT_ARG = click.argument(
    "deployment",
    type=click.Choice(list(DEPLOYMENTS)),
    default="scss",
)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Icon font build system."""
    pass


@cli.group()
def build():
    """Icon font build commands."""
    pass


@build.command()
@DEPLOYMENT_ARG
def iconfont(deployment):
    """Generate the icon font and its stylesheet."""
    from iconfont_builder.pipeline.runner import run_iconfont

    run_iconfont(deployment)


@build.command()
def all():
    """Build every deployment."""
    from iconfont_builder.pipeline.runner import run_all

    run_all()


@build.command()
@DEPLOYMENT_ARG
def clean(deployment):
    """Remove generated font files and stylesheet."""
    from iconfont_builder.config.deployments import get_deployment
    from iconfont_builder.operations.clean import clean as do_clean

    do_clean(get_deployment(deployment))


@cli.group()
def validate():
    """Output validation commands."""
    pass


@validate.command()
@DEPLOYMENT_ARG
def fonts(deployment):
    """Validate font files and stylesheet of a deployment."""
    from iconfont_builder.pipeline.validate import validate_fonts

    validate_fonts(deployment)


@validate.command("all")
def validate_all():
    """Validate every deployment."""
    from iconfont_builder.pipeline.validate import validate_all as do_validate

    do_validate()


if __name__ == "__main__":
    cli()
