"""API clients."""

from .explorer import ExplorerClient

__all__ = ["ExplorerClient"]
