"""XML request-body encoder.

Payloads are first reduced to JSON-compatible data (aliases applied,
``None`` fields dropped), then rendered under a single root element:

    {"article": [{"idArticle": 1, "count": 2}]}

becomes::

    <?xml version='1.0' encoding='UTF-8'?>
    <request><article><idArticle>1</idArticle><count>2</count></article></request>
"""

from __future__ import annotations

from typing import Any, Mapping

from lxml import etree
from pydantic_core import PydanticSerializationError, to_jsonable_python

from cardmarket.core.exceptions import PayloadEncodingError


class XmlPayloadEncoder:
    """Render payloads as XML documents with a configurable root element."""

    content_type = "application/xml"

    def __init__(self, root_tag: str = "request") -> None:
        self.root_tag = root_tag

    def encode(self, payload: Any) -> bytes:
        try:
            data = to_jsonable_python(payload, by_alias=True, exclude_none=True)
        except PydanticSerializationError as e:
            raise PayloadEncodingError(f"Cannot serialize payload to XML: {e}") from e

        if not isinstance(data, Mapping):
            raise PayloadEncodingError(
                f"XML payload must serialize to a mapping, got {type(data).__name__}"
            )

        try:
            root = etree.Element(self.root_tag)
            for key, value in data.items():
                self._append(root, key, value)
        except ValueError as e:
            # lxml rejects invalid element names with ValueError
            raise PayloadEncodingError(f"Cannot serialize payload to XML: {e}") from e

        return etree.tostring(root, xml_declaration=True, encoding="UTF-8")

    def _append(self, parent: etree._Element, tag: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, (list, tuple)):
            for item in value:
                self._append(parent, tag, item)
            return

        element = etree.SubElement(parent, tag)
        if isinstance(value, Mapping):
            for key, child in value.items():
                self._append(element, key, child)
        elif isinstance(value, bool):
            element.text = "true" if value else "false"
        else:
            element.text = str(value)
