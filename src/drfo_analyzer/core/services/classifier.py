"""Classifier and aggregator.

Classification maps a record's tax code to a declaration category through
the active variant's table. Aggregation folds the records into two kinds of
sums: whole-statement totals (per category and per declaration line, never
affected by the filter) and visible totals over the filtered records only.
"""

from typing import Iterable, Sequence

import structlog

from drfo_analyzer.core.models.analysis import (
    Advisory,
    AggregationResult,
    DeclarationTotals,
    LineTotal,
    Totals,
)
from drfo_analyzer.core.models.enums import Category
from drfo_analyzer.core.models.income import ClassifiedRecord, IncomeRecord
from drfo_analyzer.core.rules.variants import FormVariant
from drfo_analyzer.shared.exceptions import InvalidFilterError

logger = structlog.get_logger()


def classify(tax_code: int, variant: FormVariant) -> Category:
    """Category of a tax code under the given variant (OTHER if unmapped)."""
    return variant.category_for(tax_code)


def classify_records(
    records: Iterable[IncomeRecord], variant: FormVariant
) -> list[ClassifiedRecord]:
    """Attach category and declaration line to every record."""
    classified = []
    for record in records:
        category = classify(record.tax_code, variant)
        classified.append(
            ClassifiedRecord(record=record, category=category, line=variant.line_for(category))
        )
    return classified


def parse_category_filter(
    values: Iterable[str | Category], variant: FormVariant
) -> frozenset[Category]:
    """
    Build a category filter from user input.

    Args:
        values: Category values (e.g. "cashback_deposit") or Category members
        variant: Active form variant

    Returns:
        Frozen set of categories, empty for "show all"

    Raises:
        InvalidFilterError: If a value is not a category of the variant
    """
    selected: set[Category] = set()
    for value in values:
        try:
            category = Category(value)
        except ValueError as e:
            raise InvalidFilterError(f"Невідома категорія: {value}") from e
        if category not in variant.categories:
            raise InvalidFilterError(
                f"Категорія {category.value} не підтримується формою {variant.code}"
            )
        selected.add(category)
    return frozenset(selected)


class Aggregator:
    """Folds classified records into visible and whole-statement totals."""

    def __init__(self, variant: FormVariant, category_filter: frozenset[Category] = frozenset()):
        self.variant = variant
        self.category_filter = category_filter

    def is_visible(self, category: Category) -> bool:
        """True if records of this category pass the filter."""
        return not self.category_filter or category in self.category_filter

    def aggregate(
        self,
        records: Sequence[IncomeRecord],
        advisories: Sequence[Advisory] = (),
    ) -> AggregationResult:
        """Run one classification and aggregation pass."""
        classified = classify_records(records, self.variant)
        by_category: dict[Category, list[IncomeRecord]] = {
            category: [] for category in self.variant.categories
        }
        by_line: dict[str, list[IncomeRecord]] = {
            decl_line.line: [] for decl_line in self.variant.lines
        }

        shown: list[ClassifiedRecord] = []
        for item in classified:
            by_category[item.category].append(item.record)
            if item.line is not None:
                by_line[item.line].append(item.record)
            if self.is_visible(item.category):
                shown.append(item)

        declaration = DeclarationTotals(
            lines={
                decl_line.line: LineTotal(
                    line=decl_line.line,
                    label=decl_line.label,
                    categories=decl_line.categories,
                    totals=Totals.of(by_line[decl_line.line]),
                )
                for decl_line in self.variant.lines
            }
        )

        result = AggregationResult(
            variant_code=self.variant.code,
            category_filter=tuple(
                c for c in self.variant.categories if c in self.category_filter
            ),
            records=shown,
            visible_totals=Totals.of(item.record for item in shown),
            document_totals=Totals.of(item.record for item in classified),
            category_totals={c: Totals.of(rs) for c, rs in by_category.items()},
            declaration=declaration,
            advisories=list(advisories),
        )

        logger.info(
            "aggregation_complete",
            variant=self.variant.code,
            records=len(classified),
            visible=len(shown),
            filter=[c.value for c in result.category_filter],
        )
        return result


def aggregate(
    records: Sequence[IncomeRecord],
    variant: FormVariant,
    category_filter: frozenset[Category] = frozenset(),
    advisories: Sequence[Advisory] = (),
) -> AggregationResult:
    """Convenience function to classify and aggregate records.

    Args:
        records: Reconstructed income records
        variant: Active form variant
        category_filter: Categories to show, empty for all
        advisories: Advisories to carry into the result

    Returns:
        AggregationResult
    """
    return Aggregator(variant, category_filter).aggregate(records, advisories)
