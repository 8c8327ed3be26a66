"""Parser for DRFO income statements (form F14018, XML)."""

from typing import Any, Mapping, Optional

import structlog

from drfo_analyzer.core.models.document import (
    RawDeclarationDocument,
    ReportingPeriod,
    RowCell,
)
from drfo_analyzer.core.rules.periods import parse_period_label, parse_year
from drfo_analyzer.core.rules.variants import FormVariant
from drfo_analyzer.infrastructure.parsers.detector import (
    BODY_TAG,
    check_content_type,
    find_schema_locator,
    get_root,
)
from drfo_analyzer.infrastructure.parsers.reader import decode_statement
from drfo_analyzer.infrastructure.parsers.xml_parser import (
    ATTRIBUTE_PREFIX,
    TEXT_KEY,
    xml_to_mapping,
)
from drfo_analyzer.shared.exceptions import ReconstructionError, SchemaMismatchError

logger = structlog.get_logger()

ROW_ATTRIBUTE = f"{ATTRIBUTE_PREFIX}ROWNUM"


def _as_list(value: Any) -> list[Any]:
    """A single element parses to a mapping, several to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _text_of(value: Any) -> str:
    """Text content of a parsed element."""
    if value is None:
        return ""
    if isinstance(value, Mapping):
        text = value.get(TEXT_KEY, "")
        return str(text).strip()
    return str(value).strip()


class StatementParser:
    """Builds a RawDeclarationDocument from a parsed statement mapping."""

    def __init__(self, mapping: Mapping[str, Any], variant: FormVariant):
        self.mapping = mapping
        self.variant = variant

    def parse(self) -> RawDeclarationDocument:
        """Gate on the schema locator, then extract period and columns.

        Raises:
            MalformedContentError: If there is no DECLAR root
            SchemaMismatchError: If the document is another form variant
            ReconstructionError: If a row element has no ROWNUM
        """
        locator = find_schema_locator(self.mapping)
        if not self.variant.matches_schema(locator):
            logger.warning(
                "schema_mismatch", expected=self.variant.schema_locator, actual=locator
            )
            raise SchemaMismatchError(self.variant.schema_locator, locator)

        body = get_root(self.mapping).get(BODY_TAG)
        if not isinstance(body, Mapping):
            body = {}

        fields = {
            name: self._parse_column(body.get(tag), tag)
            for name, tag in self.variant.field_tags.items()
        }
        document = RawDeclarationDocument(
            schema_locator=locator or "",
            variant_code=self.variant.code,
            period=self._parse_period(body),
            fields=fields,
        )

        logger.info(
            "statement_parsed",
            variant=self.variant.code,
            rows=document.row_count,
            period=document.period.display if document.period else None,
        )
        return document

    def _parse_column(self, value: Any, tag: str) -> list[RowCell]:
        cells = []
        for element in _as_list(value):
            if not isinstance(element, Mapping) or ROW_ATTRIBUTE not in element:
                raise ReconstructionError(f"елемент {tag} без номера рядка")
            cells.append(
                RowCell(row_key=str(element[ROW_ATTRIBUTE]).strip(), text=_text_of(element))
            )
        return cells

    def _parse_period(self, body: Mapping[str, Any]) -> Optional[ReportingPeriod]:
        tags = self.variant.period_tags
        from_label = _text_of(body.get(tags.from_label))
        to_label = _text_of(body.get(tags.to_label))
        from_year = parse_year(_text_of(body.get(tags.from_year)))
        to_year = parse_year(_text_of(body.get(tags.to_year)))

        if not any((from_label, to_label, from_year, to_year)):
            return None

        kind = self.variant.period_kind
        return ReportingPeriod(
            kind=kind,
            from_label=from_label,
            from_year=from_year,
            to_label=to_label,
            to_year=to_year,
            from_index=parse_period_label(from_label, kind),
            to_index=parse_period_label(to_label, kind),
        )


def parse_statement_text(text: str, variant: FormVariant) -> RawDeclarationDocument:
    """Parse decoded statement text for the given variant."""
    return StatementParser(xml_to_mapping(text), variant).parse()


def parse_statement_bytes(
    data: bytes,
    variant: FormVariant,
    content_type: Optional[str] = "text/xml",
    encoding: Optional[str] = None,
) -> RawDeclarationDocument:
    """
    Gate, decode and parse raw statement bytes.

    Args:
        data: File content
        variant: Active form variant
        content_type: Declared content type of the upload
        encoding: Source encoding (default from settings, cp1251)

    Returns:
        RawDeclarationDocument

    Raises:
        UnsupportedFileError: If the declared type is not XML
        ReadError: If the content is empty
        MalformedContentError: If the content cannot be decoded or parsed
        SchemaMismatchError: If the document is another form variant
    """
    check_content_type(content_type)
    return parse_statement_text(decode_statement(data, encoding), variant)
