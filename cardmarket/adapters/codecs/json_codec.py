"""JSON codecs backed by pydantic."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError, to_json

from cardmarket.core.exceptions import PayloadEncodingError

T = TypeVar("T")


@lru_cache(maxsize=256)
def type_adapter_for(result_type: Any) -> TypeAdapter:
    """Build (once per type) the validator for ``result_type``.

    Raises PydanticSchemaGenerationError, a TypeError, for types pydantic
    cannot validate.
    """
    return TypeAdapter(result_type)


class JsonPayloadEncoder:
    """Serialize models, dataclasses and plain containers to JSON bytes."""

    content_type = "application/json"

    def encode(self, payload: Any) -> bytes:
        try:
            return to_json(payload, by_alias=True, exclude_none=True)
        except PydanticSerializationError as e:
            raise PayloadEncodingError(f"Cannot serialize payload to JSON: {e}") from e


class JsonResponseDecoder:
    """Validate a JSON body against an arbitrary result type.

    Pydantic models used as result types ignore unknown fields unless
    they opt out, so new fields in API responses never break decoding.
    """

    def decode(self, content: bytes, result_type: Type[T]) -> T:
        return type_adapter_for(result_type).validate_json(content)
