"""Tests for statement reading, XML conversion and parsing."""

import asyncio
from pathlib import Path

import pytest

from builders import Row, build_statement_xml
from drfo_analyzer.core.models import FieldName, PeriodKind
from drfo_analyzer.core.rules.variants import DECLARATION_2021, DECLARATION_2022, DECLARATION_2023
from drfo_analyzer.infrastructure.parsers import (
    check_content_type,
    content_type_for,
    decode_statement,
    detect_document_variant,
    find_schema_locator,
    parse_statement_bytes,
    parse_statement_text,
    read_statement,
    read_statement_async,
    xml_to_mapping,
)
from drfo_analyzer.shared.exceptions import (
    MalformedContentError,
    ParseError,
    ReadError,
    ReconstructionError,
    SchemaMismatchError,
    UnsupportedFileError,
    UnsupportedVersionError,
)


class TestXmlToMapping:
    """Tests for the generic XML conversion."""

    def test_attributes_and_text(self):
        result = xml_to_mapping('<A x="1"><B y="2">hello</B><C>plain</C></A>')
        assert result == {"A": {"@x": "1", "B": {"@y": "2", "#text": "hello"}, "C": "plain"}}

    def test_repeated_children_become_list(self):
        result = xml_to_mapping("<A><B>1</B><B>2</B><B>3</B></A>")
        assert result["A"]["B"] == ["1", "2", "3"]

    def test_empty_element(self):
        assert xml_to_mapping("<A><B/></A>") == {"A": {"B": ""}}

    def test_namespaced_attribute_keeps_prefix(self):
        result = xml_to_mapping(
            '<A xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xsi:noNamespaceSchemaLocation="F1401803.XSD"/>'
        )
        assert result["A"]["@xsi:noNamespaceSchemaLocation"] == "F1401803.XSD"

    def test_declaration_with_encoding_accepted(self):
        text = '<?xml version="1.0" encoding="windows-1251"?>\n<A>Січень</A>'
        assert xml_to_mapping(text) == {"A": "Січень"}

    def test_comments_ignored(self):
        assert xml_to_mapping("<A><!-- c --><B>1</B></A>") == {"A": {"B": "1"}}

    def test_malformed(self):
        with pytest.raises(MalformedContentError):
            xml_to_mapping("<A><B></A>")

    def test_empty(self):
        with pytest.raises(MalformedContentError):
            xml_to_mapping("   ")

    def test_entities_not_expanded(self):
        text = (
            '<!DOCTYPE A [<!ENTITY e SYSTEM "file:///etc/passwd">]>'
            "<A>&e;</A>"
        )
        result = xml_to_mapping(text)
        assert "root:" not in str(result)


class TestDetector:
    """Tests for file type and variant detection."""

    def test_content_type_from_suffix(self):
        assert content_type_for(Path("a.xml")) == "text/xml"
        assert content_type_for(Path("A.XML")) == "text/xml"
        assert content_type_for(Path("a.pdf")) is None

    def test_check_content_type(self):
        check_content_type("text/xml")
        check_content_type("text/xml; charset=windows-1251")
        with pytest.raises(UnsupportedFileError):
            check_content_type("application/pdf")
        with pytest.raises(UnsupportedFileError):
            check_content_type(None)

    def test_schema_locator(self, sample_xml):
        mapping = xml_to_mapping(sample_xml)
        assert find_schema_locator(mapping) == "F1401803.XSD"
        assert detect_document_variant(mapping) is DECLARATION_2022

    def test_no_declar_root(self):
        with pytest.raises(MalformedContentError):
            find_schema_locator(xml_to_mapping("<OTHER/>"))

    def test_missing_locator(self):
        mapping = xml_to_mapping("<DECLAR><DECLARBODY/></DECLAR>")
        assert find_schema_locator(mapping) is None
        with pytest.raises(UnsupportedVersionError):
            detect_document_variant(mapping)


class TestReader:
    """Tests for reading and decoding files."""

    def test_read(self, sample_statement_path, sample_bytes):
        assert read_statement(sample_statement_path) == sample_bytes

    def test_read_async(self, sample_statement_path, sample_bytes):
        assert asyncio.run(read_statement_async(sample_statement_path)) == sample_bytes

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReadError):
            read_statement(tmp_path / "none.xml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.xml"
        path.write_bytes(b"")
        with pytest.raises(ReadError):
            read_statement(path)

    def test_decode_cp1251_by_default(self, sample_bytes):
        assert "Січень" in decode_statement(sample_bytes)

    def test_decode_empty(self):
        with pytest.raises(ReadError):
            decode_statement(b"")

    def test_decode_wrong_encoding(self):
        with pytest.raises(MalformedContentError):
            decode_statement(b"\xff\xfe\xfa", "utf-8")


class TestStatementParser:
    """Tests for StatementParser."""

    def test_columns(self, sample_xml):
        document = parse_statement_text(sample_xml, DECLARATION_2022)
        assert document.schema_locator == "F1401803.XSD"
        assert document.variant_code == "2022"
        assert document.row_count == 6
        assert len(document.column(FieldName.TAX_CODE)) == 5
        assert len(document.column(FieldName.COMPANY)) == 4
        first = document.column(FieldName.DATE)[0]
        assert first.row_key == "1"
        assert first.text == "Січень"

    def test_blank_cell_kept(self, sample_xml):
        document = parse_statement_text(sample_xml, DECLARATION_2022)
        last = document.column(FieldName.DATE)[-1]
        assert last.row_key == "6"
        assert last.text == ""

    def test_single_row_column(self):
        document = parse_statement_text(build_statement_xml([Row("1")]), DECLARATION_2022)
        assert document.row_count == 1

    def test_period(self, sample_xml):
        period = parse_statement_text(sample_xml, DECLARATION_2022).period
        assert period is not None
        assert period.kind == PeriodKind.MONTH
        assert period.from_index == 1
        assert period.to_index == 12
        assert period.from_year == 2022
        assert period.display == "Січень 2022 - Грудень 2022"

    def test_no_period(self):
        document = parse_statement_text(build_statement_xml([Row("1")], period=None), DECLARATION_2022)
        assert document.period is None

    def test_quarter_period(self):
        xml = build_statement_xml([Row("1")], schema="F1401804.XSD", period=("1", "2023", "4", "2023"))
        period = parse_statement_text(xml, DECLARATION_2023).period
        assert period.kind == PeriodKind.QUARTER
        assert (period.from_index, period.to_index) == (1, 4)

    def test_schema_gate(self, sample_xml):
        with pytest.raises(SchemaMismatchError) as exc_info:
            parse_statement_text(sample_xml, DECLARATION_2023)
        assert exc_info.value.expected == "F1401804.XSD"
        assert exc_info.value.actual == "F1401803.XSD"
        assert "Невідомий формат" in str(exc_info.value)

    def test_statement_shared_by_two_declarations(self, sample_xml):
        document = parse_statement_text(sample_xml, DECLARATION_2021)
        assert document.variant_code == "2021"
        assert document.row_count == 6

    def test_schema_gate_ignores_case(self):
        xml = build_statement_xml([Row("1")], schema=" f1401803.xsd ")
        assert parse_statement_text(xml, DECLARATION_2022).row_count == 1

    def test_empty_body(self):
        xml = (
            '<DECLAR xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xsi:noNamespaceSchemaLocation="F1401803.XSD"><DECLARBODY/></DECLAR>'
        )
        document = parse_statement_text(xml, DECLARATION_2022)
        assert document.row_count == 0
        assert document.period is None

    def test_row_without_rownum(self):
        xml = build_statement_xml([Row("1")]).replace(
            '<T1RXXXXG6S ROWNUM="1">', "<T1RXXXXG6S>"
        )
        with pytest.raises(ReconstructionError):
            parse_statement_text(xml, DECLARATION_2022)

    def test_bytes_entry_point(self, sample_bytes):
        document = parse_statement_bytes(sample_bytes, DECLARATION_2022)
        assert document.column(FieldName.COMPANY)[0].text == "АТ КБ ПРИВАТБАНК"

    def test_bytes_wrong_type(self, sample_bytes):
        with pytest.raises(UnsupportedFileError):
            parse_statement_bytes(sample_bytes, DECLARATION_2022, content_type="application/pdf")

    def test_bytes_not_xml(self):
        with pytest.raises(MalformedContentError):
            parse_statement_bytes(b"not xml at all", DECLARATION_2022)

    def test_user_errors_are_parse_errors(self):
        for error in (UnsupportedFileError, ReadError, MalformedContentError, UnsupportedVersionError):
            assert issubclass(error, ParseError)
        assert issubclass(SchemaMismatchError, ParseError)
        assert not issubclass(ReconstructionError, ParseError)
