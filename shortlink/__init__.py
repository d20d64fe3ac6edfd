"""Core business logic for shortlink."""

from .slug import SlugGenerator
from .service import URLShortenerService

__all__ = ["SlugGenerator", "URLShortenerService"]
