"""Route group exports."""

from . import health, loading

__all__ = ["health", "loading"]
