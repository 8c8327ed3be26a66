"""Raw statement document model.

The document is a thin typed view over the parsed XML: the schema locator,
the reporting period and the eight per-column arrays of ``ROWNUM``-keyed
cells. Nothing here correlates rows; that is the reconstructor's job.
"""

from typing import Optional

from pydantic import BaseModel, Field

from drfo_analyzer.core.models.enums import FieldName, PeriodKind


class RowCell(BaseModel):
    """One cell of a column array, keyed by its row number."""

    row_key: str = Field(..., description="ROWNUM attribute of the element")
    text: str = Field(default="", description="Element text content")

    model_config = {"frozen": True}


class ReportingPeriod(BaseModel):
    """Reporting period declared in the statement header."""

    kind: PeriodKind = Field(..., description="Month or quarter granularity")
    from_label: str = Field(default="", description="Raw 'from' month/quarter label")
    from_year: Optional[int] = Field(default=None)
    to_label: str = Field(default="", description="Raw 'to' month/quarter label")
    to_year: Optional[int] = Field(default=None)
    from_index: Optional[int] = Field(
        default=None, description="Month 1-12 or quarter 1-4, None if unreadable"
    )
    to_index: Optional[int] = Field(
        default=None, description="Month 1-12 or quarter 1-4, None if unreadable"
    )

    @property
    def display(self) -> str:
        """Human readable range, e.g. 'Січень 2023 - Грудень 2023'."""
        start = f"{self.from_label} {self.from_year or ''}".strip()
        end = f"{self.to_label} {self.to_year or ''}".strip()
        return f"{start} - {end}"

    model_config = {"frozen": True}


class RawDeclarationDocument(BaseModel):
    """Parsed statement, before row reconstruction."""

    schema_locator: str = Field(..., description="noNamespaceSchemaLocation value")
    variant_code: str = Field(..., description="Form variant the document passed the gate for")
    period: Optional[ReportingPeriod] = Field(default=None)
    fields: dict[FieldName, list[RowCell]] = Field(default_factory=dict)

    def column(self, name: FieldName) -> list[RowCell]:
        """Return the cells of one column (empty list when absent)."""
        return self.fields.get(name, [])

    @property
    def row_count(self) -> int:
        """Number of entries in the primary date column."""
        return len(self.column(FieldName.DATE))

    model_config = {"frozen": True}
