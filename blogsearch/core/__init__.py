"""Core: config, lifespan, exception handlers and rate limits."""

from blogsearch.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
