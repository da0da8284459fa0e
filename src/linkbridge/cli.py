"""CLI interface for link-bridge.

Command-line tool for creating static redirect pages.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from linkbridge.config import Config
from linkbridge.core.registry import RedirectRegistry
from linkbridge.core.url_path import normalize
from linkbridge.errors import RedirectorError
from linkbridge.redirector import Redirector

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover linkbridge.toml)",
)

output_dir_option = click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for redirect pages (overrides config)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """link-bridge - Short static redirects to long paths on your site."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("target")
@output_dir_option
@config_option
def create(target: str, output_dir: Path | None, config_path: Path | None) -> None:
    """Create a redirect page for TARGET, or reuse the existing one."""
    config = _load_config(config_path, output_dir)

    try:
        redirector = Redirector(
            target,
            config.output.dir,
            lang=config.document.lang,
            title=config.document.title,
        )
        file_path = redirector.write_redirect()
    except RedirectorError as e:
        _fail(str(e))

    if redirector.short_name is None:
        click.echo(f"Existing redirect for {redirector.target}:")
    else:
        click.echo(
            click.style(f"Created redirect for {redirector.target}:", fg="green"),
        )
    click.echo(file_path)


@cli.command()
@click.argument("target")
@output_dir_option
@config_option
def lookup(target: str, output_dir: Path | None, config_path: Path | None) -> None:
    """Print the registered redirect page for TARGET."""
    config = _load_config(config_path, output_dir)

    try:
        path = normalize(target)
        registry = RedirectRegistry()
        entries = registry.load(config.output.dir)
    except RedirectorError as e:
        _fail(str(e))

    name = registry.lookup(entries, path)
    if name is None:
        _fail(f"No redirect registered for {path} in {config.output.dir}")
    click.echo(config.output.dir / name)


@cli.command(name="list")
@output_dir_option
@config_option
def list_redirects(output_dir: Path | None, config_path: Path | None) -> None:
    """List registered redirects."""
    config = _load_config(config_path, output_dir)

    try:
        entries = RedirectRegistry().load(config.output.dir)
    except RedirectorError as e:
        _fail(str(e))

    if not entries:
        click.echo(f"No redirects in {config.output.dir}")
        return

    for target, name in sorted(entries.items()):
        click.echo(f"{target} -> {config.output.dir / name}")


@cli.command(name="render")
@click.argument("target")
@config_option
def render_document(target: str, config_path: Path | None) -> None:
    """Print the redirect page for TARGET without writing it."""
    config = _load_config(config_path, None)

    try:
        redirector = Redirector(
            target,
            lang=config.document.lang,
            title=config.document.title,
        )
    except RedirectorError as e:
        _fail(str(e))

    click.echo(redirector.render(), nl=False)


def _load_config(config_path: Path | None, output_dir: Path | None) -> Config:
    """Load configuration and apply CLI overrides, exiting on invalid config."""
    try:
        config = Config.load(config_path)
    except (OSError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(output_dir=output_dir)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)
