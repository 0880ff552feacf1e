"""Core protocols for dependency injection."""

from cardmarket.core.protocols.codecs import PayloadEncoder, ResponseDecoder
from cardmarket.core.protocols.entropy import Clock, NonceSource

__all__ = [
    "Clock",
    "NonceSource",
    "PayloadEncoder",
    "ResponseDecoder",
]
