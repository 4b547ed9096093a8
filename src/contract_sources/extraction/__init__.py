"""Decoding of explorer source payloads."""

from .source_code import ProxyResolver, SourcePayloadParser

__all__ = ["ProxyResolver", "SourcePayloadParser"]
