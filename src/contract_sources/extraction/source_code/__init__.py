"""Source payload decoding and proxy resolution."""

from .parser import SourcePayloadParser
from .proxies import ProxyResolver

__all__ = ["ProxyResolver", "SourcePayloadParser"]
