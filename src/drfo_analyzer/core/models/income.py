"""Income record models."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field, computed_field

from drfo_analyzer.core.models.enums import Category
from drfo_analyzer.core.rules.tax_constants import CENT, MILITARY_TAX_RATE


def calculate_military_tax(income_paid: Decimal, tax_withheld_paid: Decimal) -> Decimal:
    """Military tax owed on a paid amount.

    Zero when no personal income tax was withheld (exempt income that still
    shows a paid amount), otherwise 1.5% of the paid income rounded half-up
    to cents.
    """
    if tax_withheld_paid.is_zero():
        return Decimal("0")
    return (income_paid * MILITARY_TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)


class IncomeRecord(BaseModel):
    """One income event reconstructed from a statement row."""

    row_key: str = Field(..., description="ROWNUM shared by the row's cells")
    date: str = Field(..., description="Period label and year, for display")
    company: str = Field(default="", description="Tax agent name")
    income_accrued: Decimal = Field(default=Decimal("0"), description="Income accrued")
    income_paid: Decimal = Field(default=Decimal("0"), description="Income paid")
    tax_withheld_accrued: Decimal = Field(
        default=Decimal("0"), description="Personal income tax accrued"
    )
    tax_withheld_paid: Decimal = Field(
        default=Decimal("0"), description="Personal income tax transferred"
    )
    tax_code: int = Field(..., description="Income type code (ознака доходу)")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def military_tax(self) -> Decimal:
        """Military tax derived from paid income and withheld tax."""
        return calculate_military_tax(self.income_paid, self.tax_withheld_paid)

    model_config = {"frozen": True}


class ClassifiedRecord(BaseModel):
    """Income record together with its declaration category."""

    record: IncomeRecord
    category: Category
    line: str | None = Field(
        default=None, description="Declaration line the category is reported on"
    )

    model_config = {"frozen": True}
