"""Configuration enums for type-safe settings.

They inherit from str to maintain JSON serialization compatibility.
"""

from enum import Enum


class PayloadFormat(str, Enum):
    """Serialization format for PUT request bodies.

    Responses are always decoded as JSON; the request body format is
    configured independently.
    """

    XML = "xml"
    JSON = "json"


class TimestampUnit(str, Enum):
    """Unit of the ``oauth_timestamp`` parameter."""

    SECONDS = "s"
    MILLISECONDS = "ms"
