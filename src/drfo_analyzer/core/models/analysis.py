"""Aggregation result models."""

from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, Field

from drfo_analyzer.core.models.enums import AdvisoryCode, Category, Severity
from drfo_analyzer.core.models.income import ClassifiedRecord, IncomeRecord


class Advisory(BaseModel):
    """A non-blocking condition surfaced to the caller."""

    code: AdvisoryCode = Field(..., description="Kind of advisory")
    message: str = Field(..., description="Human-readable message")
    severity: Severity = Field(default=Severity.WARNING)

    model_config = {"frozen": True}


class Totals(BaseModel):
    """Summed amounts over a set of income records."""

    income_accrued: Decimal = Field(default=Decimal("0"))
    income_paid: Decimal = Field(default=Decimal("0"))
    tax_withheld_accrued: Decimal = Field(default=Decimal("0"))
    tax_withheld_paid: Decimal = Field(default=Decimal("0"))
    military_tax: Decimal = Field(default=Decimal("0"))
    count: int = Field(default=0, ge=0, description="Number of records summed")

    @classmethod
    def of(cls, records: Iterable[IncomeRecord]) -> "Totals":
        """Sum a sequence of records."""
        income_accrued = Decimal("0")
        income_paid = Decimal("0")
        tax_accrued = Decimal("0")
        tax_paid = Decimal("0")
        military = Decimal("0")
        count = 0
        for record in records:
            income_accrued += record.income_accrued
            income_paid += record.income_paid
            tax_accrued += record.tax_withheld_accrued
            tax_paid += record.tax_withheld_paid
            military += record.military_tax
            count += 1
        return cls(
            income_accrued=income_accrued,
            income_paid=income_paid,
            tax_withheld_accrued=tax_accrued,
            tax_withheld_paid=tax_paid,
            military_tax=military,
            count=count,
        )

    model_config = {"frozen": True}


class LineTotal(BaseModel):
    """Totals reported on one declaration line."""

    line: str = Field(..., description="Line identifier, e.g. '10.13'")
    label: str = Field(..., description="Line title")
    categories: tuple[Category, ...] = Field(default=())
    totals: Totals = Field(default_factory=Totals)

    model_config = {"frozen": True}


class DeclarationTotals(BaseModel):
    """Declaration line items keyed by line identifier."""

    lines: dict[str, LineTotal] = Field(default_factory=dict)

    def __getitem__(self, line: str) -> LineTotal:
        return self.lines[line]

    def __contains__(self, line: object) -> bool:
        return line in self.lines

    model_config = {"frozen": True}


class AggregationResult(BaseModel):
    """Output of one classification and aggregation pass.

    ``records`` and ``visible_totals`` honour the category filter. The
    document, category and declaration totals always cover the whole
    statement.
    """

    variant_code: str
    category_filter: tuple[Category, ...] = Field(
        default=(), description="Selected categories in variant order, empty for all"
    )
    records: list[ClassifiedRecord] = Field(default_factory=list)
    visible_totals: Totals = Field(default_factory=Totals)
    document_totals: Totals = Field(default_factory=Totals)
    category_totals: dict[Category, Totals] = Field(default_factory=dict)
    declaration: DeclarationTotals = Field(default_factory=DeclarationTotals)
    advisories: list[Advisory] = Field(default_factory=list)

    @property
    def has_period_anomaly(self) -> bool:
        """True if any period advisory was raised."""
        return any(
            a.code
            in (
                AdvisoryCode.PERIOD_MISSING,
                AdvisoryCode.PERIOD_NOT_FULL_YEAR,
                AdvisoryCode.PERIOD_NOT_PRIOR_YEAR,
            )
            for a in self.advisories
        )

    model_config = {"frozen": True}
