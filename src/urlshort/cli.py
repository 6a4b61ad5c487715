"""CLI interface for urlshort.

Command-line tool for serving and checking path-to-URL redirects.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from urlshort.config import Config
from urlshort.errors import ConfigReadError, UrlshortError
from urlshort.handlers import DEFAULT_PATHS_TO_URLS, build_map, parse_yaml

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """urlshort - redirect short paths to full URLs."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover urlshort.toml)",
)
@click.option(
    "--yaml",
    "-y",
    "yaml_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML file mapping paths to URLs (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    yaml_file: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the redirect server."""
    from urlshort.server import create_app, run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(config_path, yaml_file=yaml_file, host=host, port=port)

    try:
        app = create_app(config)
    except UrlshortError as e:
        _fail(e)

    click.echo(f"Starting the server on {config.server.host}:{config.server.port}")
    click.echo(f"Redirects file: {config.redirects.yaml_file}")

    run_server(config, app)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover urlshort.toml)",
)
@click.option(
    "--yaml",
    "-y",
    "yaml_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML file mapping paths to URLs (overrides config)",
)
def check(config_path: Path | None, yaml_file: Path | None) -> None:
    """Validate the redirects file and list the resolved redirects."""
    config = _load_config(config_path, yaml_file=yaml_file)
    path = config.redirects.yaml_file

    try:
        try:
            yaml_data = path.read_bytes()
        except OSError as e:
            raise ConfigReadError(path, e.strerror or str(e)) from e
        declared = build_map(parse_yaml(yaml_data))
    except UrlshortError as e:
        _fail(e)

    click.echo(f"Redirects from {path}: {len(declared)}")
    for source, url in declared.items():
        click.echo(f"  {source} -> {url}")

    builtin = {p: u for p, u in DEFAULT_PATHS_TO_URLS.items() if p not in declared}
    click.echo(f"Built-in redirects: {len(builtin)}")
    for source, url in builtin.items():
        click.echo(f"  {source} -> {url}")

    click.echo(click.style("Redirects file is valid.", fg="green"))


def _load_config(
    config_path: Path | None,
    *,
    yaml_file: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> Config:
    """Load configuration and apply CLI overrides, exiting on errors.

    Raises:
        SystemExit: If the configuration file is invalid
    """
    try:
        config = Config.load(config_path)
    except (OSError, ValueError) as e:
        _fail(e)
    return config.with_overrides(host=host, port=port, yaml_file=yaml_file)


def _fail(error: Exception) -> NoReturn:
    """Report a startup error and exit with status 1."""
    logger.error(f"Startup failed: {error}")
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
