"""Content type and form variant detection for DRFO statements."""

from pathlib import Path
from typing import Any, Mapping, Optional

from drfo_analyzer.core.rules.variants import FormVariant, detect_variant
from drfo_analyzer.infrastructure.parsers.xml_parser import ATTRIBUTE_PREFIX
from drfo_analyzer.shared.exceptions import MalformedContentError, UnsupportedFileError

XML_CONTENT_TYPE = "text/xml"

ROOT_TAG = "DECLAR"
BODY_TAG = "DECLARBODY"
SCHEMA_LOCATION_ATTRIBUTE = "noNamespaceSchemaLocation"

_CONTENT_TYPES = {
    ".xml": XML_CONTENT_TYPE,
}


def content_type_for(file_path: Path) -> Optional[str]:
    """Declared content type of a file, derived from its suffix."""
    return _CONTENT_TYPES.get(file_path.suffix.lower())


def check_content_type(content_type: Optional[str]) -> None:
    """
    Reject anything not declared as XML before reading it.

    Raises:
        UnsupportedFileError: If the declared type is not text/xml
    """
    if (content_type or "").split(";")[0].strip().lower() != XML_CONTENT_TYPE:
        raise UnsupportedFileError(
            f"Непідтримуваний тип файлу: {content_type or 'невідомий'}. "
            "Завантажте XML-відомість (F14018)."
        )


def get_root(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Return the DECLAR element of a parsed document.

    Raises:
        MalformedContentError: If the document is not a declaration
    """
    root = mapping.get(ROOT_TAG)
    if not isinstance(root, Mapping):
        raise MalformedContentError("Документ не є податковою відомістю (немає DECLAR).")
    return root


def find_schema_locator(mapping: Mapping[str, Any]) -> Optional[str]:
    """Schema locator attribute of the document root, None if absent."""
    root = get_root(mapping)
    for key, value in root.items():
        if not key.startswith(ATTRIBUTE_PREFIX):
            continue
        name = key[len(ATTRIBUTE_PREFIX):].split(":")[-1]
        if name == SCHEMA_LOCATION_ATTRIBUTE and isinstance(value, str):
            return value.strip()
    return None


def detect_document_variant(mapping: Mapping[str, Any]) -> FormVariant:
    """
    Pick the form variant from a parsed document's schema locator.

    Raises:
        UnsupportedVersionError: If the locator belongs to no known variant
    """
    return detect_variant(find_schema_locator(mapping))
