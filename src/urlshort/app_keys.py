"""Application keys for type-safe app configuration access."""

from aiohttp import web

from urlshort.config import Config
from urlshort.handlers import Handler

config_key = web.AppKey("config", Config)
handler_key = web.AppKey("handler", Handler)
