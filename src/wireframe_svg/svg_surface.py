from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Mapping

from .geometry import format_number

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"


def format_attribute(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


class SvgSurface:
    """An SVG document built as an ElementTree.

    Elements are created without namespace-qualified tags; the root carries
    the ``xmlns`` declarations as plain attributes so the serialised markup
    matches what a browser DOM would produce.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self.root = ET.Element("svg", {k: format_attribute(v) for k, v in (attributes or {}).items()})
        self.diagnostics: list[str] = []

    def create_element(
        self,
        tag: str,
        attributes: Mapping[str, Any] | None = None,
        parent: ET.Element | None = None,
        *,
        text: str | None = None,
    ) -> ET.Element:
        attrib = {name: format_attribute(value) for name, value in (attributes or {}).items()}
        if parent is None:
            element = ET.Element(tag, attrib)
        else:
            element = ET.SubElement(parent, tag, attrib)
        if text is not None:
            element.text = text
        return element

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")


__all__ = ["SVG_NAMESPACE", "SvgSurface", "XLINK_NAMESPACE", "format_attribute"]
