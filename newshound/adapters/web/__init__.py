"""Web framework integration: banner injection middleware for aiohttp."""

from .banner_injector import banner_middleware, inject_banner

__all__ = ["banner_middleware", "inject_banner"]
