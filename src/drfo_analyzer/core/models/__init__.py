"""Domain models for DRFO income statements."""

from drfo_analyzer.core.models.enums import (
    CATEGORY_LABELS,
    AdvisoryCode,
    Category,
    FieldName,
    PeriodKind,
    Severity,
)
from drfo_analyzer.core.models.document import (
    RawDeclarationDocument,
    ReportingPeriod,
    RowCell,
)
from drfo_analyzer.core.models.income import (
    ClassifiedRecord,
    IncomeRecord,
    calculate_military_tax,
)
from drfo_analyzer.core.models.analysis import (
    Advisory,
    AggregationResult,
    DeclarationTotals,
    LineTotal,
    Totals,
)

__all__ = [
    "CATEGORY_LABELS",
    "AdvisoryCode",
    "Category",
    "FieldName",
    "PeriodKind",
    "Severity",
    "RawDeclarationDocument",
    "ReportingPeriod",
    "RowCell",
    "ClassifiedRecord",
    "IncomeRecord",
    "calculate_military_tax",
    "Advisory",
    "AggregationResult",
    "DeclarationTotals",
    "LineTotal",
    "Totals",
]
