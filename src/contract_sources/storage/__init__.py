"""On-disk output tree writing."""

from .writer import IMPLEMENTATION_DIRNAME, RAW_RESPONSE_FILENAME, FileTreeWriter

__all__ = ["FileTreeWriter", "IMPLEMENTATION_DIRNAME", "RAW_RESPONSE_FILENAME"]
