"""Domain services for DRFO Analyzer."""

from drfo_analyzer.core.services.classifier import (
    Aggregator,
    aggregate,
    classify,
    classify_records,
    parse_category_filter,
)
from drfo_analyzer.core.services.period import check_reporting_period
from drfo_analyzer.core.services.pipeline import (
    StatementAnalysis,
    analyze_document,
    analyze_statement,
)
from drfo_analyzer.core.services.reconstructor import (
    RecordReconstructor,
    reconstruct_records,
)
from drfo_analyzer.core.services.session import StatementSession

__all__ = [
    "Aggregator",
    "RecordReconstructor",
    "StatementAnalysis",
    "StatementSession",
    "aggregate",
    "analyze_document",
    "analyze_statement",
    "check_reporting_period",
    "classify",
    "classify_records",
    "parse_category_filter",
    "reconstruct_records",
]
