"""Record reconstructor.

The statement stores its table column by column: every column is a list of
``ROWNUM``-keyed cells, and a row may be missing from any column except the
date column that drives the reconstruction. This module joins the columns
back into one ``IncomeRecord`` per row.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

import structlog

from drfo_analyzer.core.models.document import RawDeclarationDocument, RowCell
from drfo_analyzer.core.models.enums import FieldName
from drfo_analyzer.core.models.income import IncomeRecord
from drfo_analyzer.core.rules.tax_constants import TAX_CODE_SEPARATOR
from drfo_analyzer.core.rules.variants import FormVariant
from drfo_analyzer.shared.exceptions import ReconstructionError, SchemaMismatchError

logger = structlog.get_logger()

_LOOKUP_FIELDS = (
    FieldName.YEAR,
    FieldName.COMPANY,
    FieldName.INCOME_ACCRUED,
    FieldName.INCOME_PAID,
    FieldName.TAX_ACCRUED,
    FieldName.TAX_PAID,
    FieldName.TAX_CODE,
)


def parse_amount(value: Optional[str], row_key: str, field: FieldName) -> Decimal:
    """Parse a money cell, zero when missing or blank.

    Raises:
        ReconstructionError: If the cell holds something other than a number
    """
    if value is None:
        return Decimal("0")
    clean = value.strip().replace(" ", "").replace("\u00a0", "").replace(",", ".")
    if not clean:
        return Decimal("0")
    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise ReconstructionError(
            f"некоректна сума '{value}' у полі {field.value}", row_key=row_key
        ) from e
    if not amount.is_finite():
        raise ReconstructionError(
            f"некоректна сума '{value}' у полі {field.value}", row_key=row_key
        )
    return amount


def parse_tax_code(label: Optional[str], row_key: str) -> int:
    """Extract the numeric code from a '<code> - <description>' label.

    Raises:
        ReconstructionError: If the label is missing or has no numeric prefix
    """
    if label is None or not label.strip():
        raise ReconstructionError("відсутня ознака доходу", row_key=row_key)
    prefix = label.split(TAX_CODE_SEPARATOR, 1)[0].strip()
    if not (prefix.isascii() and prefix.isdigit()):
        raise ReconstructionError(f"некоректна ознака доходу '{label}'", row_key=row_key)
    return int(prefix)


def build_lookup(cells: list[RowCell], field: FieldName) -> dict[str, str]:
    """Index one column by row key.

    Raises:
        ReconstructionError: If a row key appears twice in the column
    """
    lookup: dict[str, str] = {}
    for cell in cells:
        if cell.row_key in lookup:
            raise ReconstructionError(
                f"повторний номер рядка у полі {field.value}", row_key=cell.row_key
            )
        lookup[cell.row_key] = cell.text
    return lookup


class RecordReconstructor:
    """Joins the statement columns into income records."""

    def __init__(self, document: RawDeclarationDocument, variant: FormVariant):
        self.document = document
        self.variant = variant
        self._lookups: dict[FieldName, dict[str, str]] = {}

    def reconstruct(self) -> list[IncomeRecord]:
        """Build one record per non-blank date row, in date column order."""
        if not self.variant.matches_schema(self.document.schema_locator):
            raise SchemaMismatchError(self.variant.schema_locator, self.document.schema_locator)

        for field in _LOOKUP_FIELDS:
            self._lookups[field] = build_lookup(self.document.column(field), field)

        dates = self.document.column(FieldName.DATE)
        build_lookup(dates, FieldName.DATE)

        records: list[IncomeRecord] = []
        skipped = 0
        for cell in dates:
            if not cell.text.strip():
                skipped += 1
                continue
            records.append(self._build_record(cell))

        logger.info(
            "records_reconstructed",
            variant=self.variant.code,
            records=len(records),
            skipped_rows=skipped,
        )
        return records

    def _get(self, field: FieldName, row_key: str) -> Optional[str]:
        return self._lookups[field].get(row_key)

    def _build_record(self, date_cell: RowCell) -> IncomeRecord:
        row = date_cell.row_key
        year = (self._get(FieldName.YEAR, row) or "").strip()

        return IncomeRecord(
            row_key=row,
            date=self.variant.format_date(date_cell.text.strip(), year),
            company=(self._get(FieldName.COMPANY, row) or "").strip(),
            income_accrued=parse_amount(
                self._get(FieldName.INCOME_ACCRUED, row), row, FieldName.INCOME_ACCRUED
            ),
            income_paid=parse_amount(
                self._get(FieldName.INCOME_PAID, row), row, FieldName.INCOME_PAID
            ),
            tax_withheld_accrued=parse_amount(
                self._get(FieldName.TAX_ACCRUED, row), row, FieldName.TAX_ACCRUED
            ),
            tax_withheld_paid=parse_amount(
                self._get(FieldName.TAX_PAID, row), row, FieldName.TAX_PAID
            ),
            tax_code=parse_tax_code(self._get(FieldName.TAX_CODE, row), row),
        )


def reconstruct_records(
    document: RawDeclarationDocument, variant: FormVariant
) -> list[IncomeRecord]:
    """Convenience function to reconstruct the income records of a document.

    Args:
        document: Parsed statement that passed the schema gate
        variant: Active form variant

    Returns:
        Income records in statement order

    Raises:
        SchemaMismatchError: If the document was parsed for another variant
        ReconstructionError: If rows cannot be correlated or a tax code is missing
    """
    return RecordReconstructor(document, variant).reconstruct()
