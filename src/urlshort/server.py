"""aiohttp server for urlshort.

Builds the redirect chain and binds it as the only route of the application.
"""

import logging

from aiohttp import web

from urlshort.app_keys import config_key, handler_key
from urlshort.config import Config
from urlshort.errors import ConfigReadError
from urlshort.handlers import (
    DEFAULT_PATHS_TO_URLS,
    Handler,
    default_mux,
    map_handler,
    yaml_handler,
)

logger = logging.getLogger(__name__)


def build_handler(config: Config) -> Handler:
    """Assemble the redirect chain.

    The YAML redirects are checked first, then the built-in documentation
    links, then the default responder.

    Args:
        config: Application configuration

    Returns:
        Outermost handler of the chain

    Raises:
        ConfigReadError: If the YAML file cannot be read
        ParseError: If the YAML file is malformed
    """
    mux = default_mux()
    docs_handler = map_handler(DEFAULT_PATHS_TO_URLS, mux)

    yaml_file = config.redirects.yaml_file
    try:
        yaml_data = yaml_file.read_bytes()
    except OSError as e:
        raise ConfigReadError(yaml_file, e.strerror or str(e)) from e

    logger.info(f"Loading redirects from {yaml_file}")
    return yaml_handler(yaml_data, docs_handler)


async def dispatch(request: web.Request) -> web.StreamResponse:
    """Forward every request to the redirect chain."""
    handler = request.app[handler_key]
    return await handler(request)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        ConfigReadError: If the YAML file cannot be read
        ParseError: If the YAML file is malformed
    """
    handler = build_handler(config)

    app = web.Application()
    app[config_key] = config
    app[handler_key] = handler

    app.router.add_route("*", "/{path:.*}", dispatch)

    return app


def run_server(config: Config, app: web.Application | None = None) -> None:
    """Run the server.

    Args:
        config: Application configuration
        app: Prebuilt application (default: built from config)
    """
    if app is None:
        app = create_app(config)
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
