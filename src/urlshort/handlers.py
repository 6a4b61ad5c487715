"""Request handlers that resolve paths to redirect URLs.

Handlers are plain aiohttp request handlers. Resolvers close over a
``path -> url`` mapping and a fallback handler, so several of them can be
stacked into a chain that ends in a default responder::

    mux = default_mux()
    with_docs = map_handler(DEFAULT_PATHS_TO_URLS, mux)
    handler = yaml_handler(yaml_data, with_docs)
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import yaml
from aiohttp import web

from urlshort.errors import ParseError

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

DEFAULT_PATHS_TO_URLS: Mapping[str, str] = MappingProxyType(
    {
        "/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort",
        "/yaml-godoc": "https://godoc.org/gopkg.in/yaml.v2",
    },
)

HELLO_TEXT = "Hello, world!\n"

_RECORD_KEYS = frozenset({"path", "url"})


@dataclass(frozen=True)
class PathURL:
    """A single redirect rule as declared in the YAML file."""

    path: str
    url: str


async def hello(request: web.Request) -> web.Response:
    return web.Response(text=HELLO_TEXT)


def default_mux() -> Handler:
    """Return the handler bound at the root of the listener.

    The root route matches every path, so anything that reaches the end of
    the chain is answered with the greeting.
    """
    return hello


def map_handler(paths_to_urls: Mapping[str, str], fallback: Handler) -> Handler:
    """Build a handler that redirects paths found in ``paths_to_urls``.

    Paths are matched exactly against ``request.path``. Requests whose path
    is not in the mapping are passed unchanged to ``fallback``.

    Args:
        paths_to_urls: Mapping of request path to destination URL
        fallback: Handler invoked when the path has no mapping

    Returns:
        aiohttp request handler

    Raises:
        TypeError: If fallback is not callable
    """
    if not callable(fallback):
        raise TypeError(f"fallback must be a request handler, got {fallback!r}")

    paths = dict(paths_to_urls)

    async def handle(request: web.Request) -> web.StreamResponse:
        url = paths.get(request.path)
        if url is not None:
            raise web.HTTPFound(location=url)
        return await fallback(request)

    return handle


def yaml_handler(yaml_data: bytes, fallback: Handler) -> Handler:
    """Build a redirect handler from YAML data.

    YAML is expected to be in the format::

        - path: /some-path
          url: https://www.some-url.com/demo

    See map_handler() for the matching rules.

    Args:
        yaml_data: Raw YAML document
        fallback: Handler invoked when the path has no mapping

    Returns:
        aiohttp request handler

    Raises:
        ParseError: If the YAML is invalid or has the wrong shape
    """
    path_urls = parse_yaml(yaml_data)
    paths_to_urls = build_map(path_urls)
    logger.debug(f"Loaded {len(paths_to_urls)} redirects from YAML")
    return map_handler(paths_to_urls, fallback)


def parse_yaml(yaml_data: bytes) -> list[PathURL]:
    """Parse a YAML list of path/url records.

    An empty document parses to an empty list.

    Raises:
        ParseError: If the data is not valid YAML or not a list of records
            with exactly the string fields ``path`` and ``url``
    """
    try:
        data = yaml.safe_load(yaml_data)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError(
            f"Redirects must be a list of records, got {type(data).__name__}",
        )

    return [_parse_record(index, item) for index, item in enumerate(data)]


def _parse_record(index: int, item: object) -> PathURL:
    if not isinstance(item, dict):
        raise ParseError(f"Record {index} must be a mapping")

    unknown = set(item) - _RECORD_KEYS
    if unknown:
        names = ", ".join(sorted(str(key) for key in unknown))
        raise ParseError(f"Record {index} has unknown fields: {names}")

    path = item.get("path")
    if not isinstance(path, str):
        raise ParseError(f"Record {index}: path must be a string")
    if not path.startswith("/"):
        raise ParseError(f"Record {index}: path must start with '/': {path!r}")

    url = item.get("url")
    if not isinstance(url, str):
        raise ParseError(f"Record {index}: url must be a string")

    return PathURL(path=path, url=url)


def build_map(path_urls: Iterable[PathURL]) -> dict[str, str]:
    """Fold records into a path -> url mapping. Later records win."""
    return {record.path: record.url for record in path_urls}
