"""Infrastructure adapters."""

from archguard.infrastructure.adapters.cached_parser import CachedEntityParser

__all__ = ["CachedEntityParser"]
