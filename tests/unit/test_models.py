"""Tests for domain models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from drfo_analyzer.core.models import (
    Category,
    ClassifiedRecord,
    IncomeRecord,
    ReportingPeriod,
    Totals,
    calculate_military_tax,
)
from drfo_analyzer.core.models.enums import PeriodKind


def make_record(**kwargs) -> IncomeRecord:
    defaults = {"row_key": "1", "date": "Січень 2022", "tax_code": 126}
    defaults.update(kwargs)
    return IncomeRecord(**defaults)


class TestMilitaryTax:
    """Tests for the military tax derivation."""

    def test_rate_applied_when_tax_withheld(self):
        """1.5% of paid income when PIT was withheld."""
        assert calculate_military_tax(Decimal("1000.00"), Decimal("180.00")) == Decimal("15.00")

    def test_zero_when_no_tax_withheld(self):
        """Exempt income keeps a zero military tax."""
        assert calculate_military_tax(Decimal("1000.00"), Decimal("0")) == Decimal("0")

    def test_rounds_half_up(self):
        """0.015 * 300.50 = 4.5075 rounds to 4.51."""
        assert calculate_military_tax(Decimal("300.50"), Decimal("1")) == Decimal("4.51")
        # 0.015 * 0.50 = 0.0075 -> 0.01
        assert calculate_military_tax(Decimal("0.50"), Decimal("1")) == Decimal("0.01")

    def test_record_exposes_derived_value(self):
        """military_tax is computed from the record's own fields."""
        record = make_record(income_paid=Decimal("2000"), tax_withheld_paid=Decimal("360"))
        assert record.military_tax == Decimal("30.00")

    def test_cannot_be_set_independently(self):
        """military_tax is not an input field and records are frozen."""
        record = make_record(income_paid=Decimal("100"), tax_withheld_paid=Decimal("0"))
        with pytest.raises(ValidationError):
            record.income_paid = Decimal("5")  # type: ignore[misc]
        assert "military_tax" not in IncomeRecord.model_fields

    def test_serialized_with_record(self):
        """Derived value is part of the dump."""
        record = make_record(income_paid=Decimal("100"), tax_withheld_paid=Decimal("18"))
        assert record.model_dump()["military_tax"] == Decimal("1.50")


class TestIncomeRecord:
    """Tests for IncomeRecord defaults."""

    def test_amounts_default_to_zero(self):
        record = make_record()
        assert record.income_accrued == Decimal("0")
        assert record.income_paid == Decimal("0")
        assert record.tax_withheld_accrued == Decimal("0")
        assert record.tax_withheld_paid == Decimal("0")
        assert record.company == ""

    def test_classified_record(self):
        item = ClassifiedRecord(record=make_record(), category=Category.CASHBACK_DEPOSIT, line="10.13")
        assert item.category == Category.CASHBACK_DEPOSIT
        assert item.line == "10.13"


class TestTotals:
    """Tests for Totals summation."""

    def test_sum_of_records(self):
        records = [
            make_record(row_key="1", income_accrued=Decimal("0.10"), income_paid=Decimal("0.10"),
                        tax_withheld_paid=Decimal("1")),
            make_record(row_key="2", income_accrued=Decimal("0.20"), income_paid=Decimal("0.20")),
        ]
        totals = Totals.of(records)
        assert totals.income_accrued == Decimal("0.30")
        assert totals.income_paid == Decimal("0.30")
        assert totals.tax_withheld_paid == Decimal("1")
        assert totals.count == 2

    def test_no_float_drift(self):
        """Summing 0.1 a thousand times stays exact."""
        records = [make_record(row_key=str(i), income_paid=Decimal("0.1")) for i in range(1000)]
        assert Totals.of(records).income_paid == Decimal("100.0")

    def test_empty(self):
        totals = Totals.of([])
        assert totals.income_paid == Decimal("0")
        assert totals.count == 0


class TestReportingPeriod:
    """Tests for ReportingPeriod."""

    def test_display(self):
        period = ReportingPeriod(
            kind=PeriodKind.MONTH,
            from_label="Січень",
            from_year=2022,
            to_label="Грудень",
            to_year=2022,
            from_index=1,
            to_index=12,
        )
        assert period.display == "Січень 2022 - Грудень 2022"
