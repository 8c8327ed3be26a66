"""End-to-end statement processing.

One synchronous pass: bytes -> document -> records -> aggregation result.
Every step either succeeds or raises; nothing is kept between calls.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from drfo_analyzer.core.models.analysis import AggregationResult
from drfo_analyzer.core.models.document import RawDeclarationDocument
from drfo_analyzer.core.models.enums import Category
from drfo_analyzer.core.models.income import IncomeRecord
from drfo_analyzer.core.rules.variants import FormVariant
from drfo_analyzer.core.services.classifier import aggregate
from drfo_analyzer.core.services.period import check_reporting_period
from drfo_analyzer.core.services.reconstructor import reconstruct_records
from drfo_analyzer.infrastructure.parsers.statement_parser import parse_statement_bytes


@dataclass(frozen=True)
class StatementAnalysis:
    """Parsed document with its reconstructed records and aggregation."""

    document: RawDeclarationDocument
    records: list[IncomeRecord]
    result: AggregationResult


def analyze_document(
    document: RawDeclarationDocument,
    variant: FormVariant,
    category_filter: frozenset[Category] = frozenset(),
    reference_date: Optional[date] = None,
) -> StatementAnalysis:
    """
    Reconstruct, check the period, classify and aggregate a parsed document.

    Args:
        document: Document that passed the schema gate
        variant: Active form variant
        category_filter: Categories to show, empty for all
        reference_date: "Today" for the prior-year period rule

    Returns:
        StatementAnalysis

    Raises:
        SchemaMismatchError: If the document belongs to another variant
        ReconstructionError: If the rows cannot be rebuilt
    """
    records = reconstruct_records(document, variant)
    advisories = check_reporting_period(document.period, variant, reference_date)
    result = aggregate(records, variant, category_filter, advisories)
    return StatementAnalysis(document=document, records=records, result=result)


def analyze_statement(
    data: bytes,
    variant: FormVariant,
    content_type: Optional[str] = "text/xml",
    category_filter: frozenset[Category] = frozenset(),
    reference_date: Optional[date] = None,
    encoding: Optional[str] = None,
) -> StatementAnalysis:
    """
    Run the whole pipeline on uploaded bytes.

    Raises:
        ParseError: For user input problems (type, read, XML, schema)
        ReconstructionError: For unexpected row data
    """
    document = parse_statement_bytes(data, variant, content_type, encoding)
    return analyze_document(document, variant, category_filter, reference_date)
