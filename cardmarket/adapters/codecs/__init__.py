"""Request-body encoders and response-body decoders."""

from cardmarket.adapters.codecs.json_codec import JsonPayloadEncoder, JsonResponseDecoder
from cardmarket.adapters.codecs.xml_codec import XmlPayloadEncoder

__all__ = [
    "JsonPayloadEncoder",
    "JsonResponseDecoder",
    "XmlPayloadEncoder",
]
