"""Request-body encoding and response-body decoding protocols.

Request bodies and response bodies use independent formats: the
marketplace accepts XML bodies on PUT but answers in JSON.
"""

from __future__ import annotations

from typing import Any, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class PayloadEncoder(Protocol):
    """Serializes a payload object into a request body."""

    content_type: str

    def encode(self, payload: Any) -> bytes:
        """Serialize ``payload``. Raises PayloadEncodingError on failure."""
        ...


@runtime_checkable
class ResponseDecoder(Protocol):
    """Decodes a response body into a caller-declared result type."""

    def decode(self, content: bytes, result_type: Type[T]) -> T:
        """Decode ``content`` into ``result_type``.

        Raises ValueError when the body does not match, TypeError when
        ``result_type`` cannot be decoded into at all.
        """
        ...
