"""File parsers for DRFO statement formats."""

from drfo_analyzer.infrastructure.parsers.detector import (
    XML_CONTENT_TYPE,
    check_content_type,
    content_type_for,
    detect_document_variant,
    find_schema_locator,
)
from drfo_analyzer.infrastructure.parsers.reader import (
    decode_statement,
    read_statement,
    read_statement_async,
)
from drfo_analyzer.infrastructure.parsers.statement_parser import (
    StatementParser,
    parse_statement_bytes,
    parse_statement_text,
)
from drfo_analyzer.infrastructure.parsers.xml_parser import xml_to_mapping

__all__ = [
    "XML_CONTENT_TYPE",
    "StatementParser",
    "check_content_type",
    "content_type_for",
    "decode_statement",
    "detect_document_variant",
    "find_schema_locator",
    "parse_statement_bytes",
    "parse_statement_text",
    "read_statement",
    "read_statement_async",
    "xml_to_mapping",
]
