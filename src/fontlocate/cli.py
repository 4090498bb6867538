"""
Command Line Interface
======================

Commands to resolve fonts and inspect the available font sources.
"""

import json
import logging
import sys
from pathlib import Path

import click

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.config import FontLocateConfig
from fontlocate.core.exceptions import FontLocateError, ResolutionCancelledError
from fontlocate.core.models import Descriptor, FontStyle
from fontlocate.fonts.bundled import BundledFontProvider
from fontlocate.fonts.google import GoogleFontsProvider
from fontlocate.fonts.registry import global_registry
from fontlocate.fonts.system import SystemFontProvider
from fontlocate.locate.engine import ResolutionEngine, default_providers

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file",
)
@click.pass_context
def cli(ctx, verbose, config):
    """Font location CLI."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    try:
        ctx.obj = FontLocateConfig.from_env_and_yaml(yaml_path=config)
    except FontLocateError as e:
        logger.error(f"Cannot load configuration: {e}")
        sys.exit(2)
    if not verbose:
        logging.getLogger().setLevel(ctx.obj.log_level)


@cli.command()
@click.argument("pattern")
@click.option(
    "--style",
    type=click.Choice([s.value for s in FontStyle]),
    default=FontStyle.NORMAL.value,
    help="Font style",
)
@click.option(
    "--weight", type=click.IntRange(1, 1000), default=400, help="Font weight (100-900)"
)
@click.option("--timeout", type=float, default=None, help="Resolution timeout in seconds")
@click.option("--no-system", is_flag=True, help="Do not search installed fonts")
@click.option("--no-google", is_flag=True, help="Do not search Google Fonts")
@click.pass_obj
def resolve(config, pattern, style, weight, timeout, no_system, no_google):
    """Resolve PATTERN to a font file."""
    config = config.model_copy(
        update={
            "enable_system_fonts": config.enable_system_fonts and not no_system,
            "enable_google_fonts": config.enable_google_fonts and not no_google,
        }
    )
    try:
        descriptor = Descriptor(pattern=pattern, style=FontStyle(style), weight=weight)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="PATTERN") from e

    token = CancellationToken.with_timeout(timeout) if timeout else None
    engine = ResolutionEngine(global_registry(), default_providers(config), config)
    font, error = engine.start(descriptor).font(token)

    if isinstance(error, ResolutionCancelledError):
        click.echo(f"Resolution of '{pattern}' aborted: {error}", err=True)
        sys.exit(1)
    if font.is_null:
        click.echo(f"No font available for '{pattern}': {error}", err=True)
        sys.exit(1)
    if error is not None:
        click.echo(f"Warning: {error}; using fallback font", err=True)

    click.echo(f"{font.name}\t{font.location}")


@cli.command(name="list-bundled")
def list_bundled():
    """List the fonts bundled with fontlocate."""
    provider = BundledFontProvider()
    for filename in provider.list_fonts():
        click.echo(filename)


@cli.command(name="list-google")
@click.argument("pattern", default="")
@click.pass_obj
def list_google(config, pattern):
    """List Google Fonts families matching PATTERN."""
    try:
        fonts = GoogleFontsProvider(config).list_fonts(pattern)
    except FontLocateError as e:
        logger.error(f"Unable to list Google fonts: {e}")
        sys.exit(1)

    click.echo(f"{len(fonts)} matching Google fonts")
    click.echo("=" * 40)
    for info in fonts:
        click.echo(f"{info.family:<30} {info.version:<8} {', '.join(info.variants)}")


@cli.command(name="system-info")
@click.pass_obj
def system_info(config):
    """Show where system fonts are looked up."""
    try:
        info = SystemFontProvider(config).get_system_font_info()
    except FontLocateError as e:
        logger.error(f"Unable to inspect system fonts: {e}")
        sys.exit(1)
    click.echo(json.dumps(info, indent=2))


if __name__ == "__main__":
    cli()
