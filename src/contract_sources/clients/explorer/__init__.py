"""Explorer client package."""

from .client import ExplorerClient
from .constants import DEFAULT_API_URL, DEFAULT_CHAIN_ID, MIN_REQUEST_DELAY_S

__all__ = ["DEFAULT_API_URL", "DEFAULT_CHAIN_ID", "ExplorerClient", "MIN_REQUEST_DELAY_S"]
