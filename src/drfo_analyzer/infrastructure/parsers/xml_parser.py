"""Generic XML to mapping conversion.

Turns markup into nested dicts the same way for every document:

- attributes become ``"@<name>"`` keys (namespaced attributes keep their
  prefix, e.g. ``"@xsi:noNamespaceSchemaLocation"``);
- text content becomes ``"#text"`` when the element also has attributes or
  children, otherwise the element is the plain string;
- repeated child elements become lists.
"""

import re
from typing import Any

from lxml import etree

from drfo_analyzer.shared.exceptions import MalformedContentError

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"

XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _qualified_name(name: str, nsmap: dict[str | None, str]) -> str:
    """Convert '{uri}local' to 'prefix:local' using the element's nsmap."""
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    for prefix, ns_uri in nsmap.items():
        if ns_uri == uri and prefix:
            return f"{prefix}:{local}"
    return local


def element_to_mapping(element: etree._Element) -> Any:
    """Convert one element (recursively) to a mapping or a string."""
    result: dict[str, Any] = {}
    nsmap = element.nsmap

    for name, value in element.attrib.items():
        result[f"{ATTRIBUTE_PREFIX}{_qualified_name(name, nsmap)}"] = value

    for child in element:
        if not isinstance(child.tag, str):
            # comments and processing instructions
            continue
        key = _qualified_name(child.tag, child.nsmap)
        value = element_to_mapping(child)
        if key in result:
            existing = result[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[key] = [existing, value]
        else:
            result[key] = value

    text = (element.text or "").strip()
    if not result:
        return text
    if text:
        result[TEXT_KEY] = text
    return result


def xml_to_mapping(text: str) -> dict[str, Any]:
    """
    Parse XML text into a nested mapping keyed by the root tag.

    Args:
        text: Decoded XML document

    Returns:
        Mapping like {"DECLAR": {...}}

    Raises:
        MalformedContentError: If the text is not well-formed XML
    """
    body = _XML_DECLARATION.sub("", text, count=1)
    if not body.strip():
        raise MalformedContentError("Файл не містить XML-документа.")
    try:
        root = etree.fromstring(body, parser=XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise MalformedContentError(f"Файл не є коректним XML: {e}") from e

    return {_qualified_name(root.tag, root.nsmap): element_to_mapping(root)}
