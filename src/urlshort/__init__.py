"""urlshort - redirect request paths to URLs from a layered set of mappings."""

from urlshort.errors import ConfigReadError, ParseError, UrlshortError
from urlshort.handlers import (
    DEFAULT_PATHS_TO_URLS,
    Handler,
    PathURL,
    build_map,
    default_mux,
    hello,
    map_handler,
    parse_yaml,
    yaml_handler,
)

__all__ = [
    "DEFAULT_PATHS_TO_URLS",
    "ConfigReadError",
    "Handler",
    "ParseError",
    "PathURL",
    "UrlshortError",
    "build_map",
    "default_mux",
    "hello",
    "map_handler",
    "parse_yaml",
    "yaml_handler",
]
