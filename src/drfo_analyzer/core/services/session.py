"""Statement session.

Holds the last successfully processed document for a caller (CLI, UI) and a
single active advisory. A failed load never replaces what is already shown.
"""

from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import structlog

from drfo_analyzer.core.models.analysis import Advisory, AggregationResult
from drfo_analyzer.core.models.document import RawDeclarationDocument
from drfo_analyzer.core.models.enums import AdvisoryCode, Category, Severity
from drfo_analyzer.core.rules.variants import FormVariant
from drfo_analyzer.core.services.classifier import parse_category_filter
from drfo_analyzer.core.services.pipeline import analyze_document, analyze_statement
from drfo_analyzer.infrastructure.parsers.detector import check_content_type, content_type_for
from drfo_analyzer.infrastructure.parsers.reader import read_statement, read_statement_async
from drfo_analyzer.shared.exceptions import DRFOAnalyzerError, ParseError, ReconstructionError

logger = structlog.get_logger()


class StatementSession:
    """Keeps the last good statement and recomputes views on filter changes."""

    def __init__(
        self,
        variant: FormVariant,
        reference_date: Optional[date] = None,
        encoding: Optional[str] = None,
    ):
        self.variant = variant
        self.reference_date = reference_date
        self.encoding = encoding
        self.document: Optional[RawDeclarationDocument] = None
        self.category_filter: frozenset[Category] = frozenset()
        self.advisory: Optional[Advisory] = None
        self._result: Optional[AggregationResult] = None

    @property
    def result(self) -> Optional[AggregationResult]:
        """Result of the last successful load under the current filter."""
        return self._result

    def load(self, file_path: Optional[Path]) -> Optional[AggregationResult]:
        """
        Load a statement file.

        Args:
            file_path: Selected file, None when the selection was cleared

        Returns:
            The current result (the previous one if this load failed)
        """
        if file_path is None:
            return self._result
        try:
            check_content_type(content_type_for(file_path))
            data = read_statement(file_path)
        except DRFOAnalyzerError as e:
            self._fail(e)
            return self._result
        return self.load_bytes(data, content_type_for(file_path))

    async def aload(self, file_path: Optional[Path]) -> Optional[AggregationResult]:
        """Async variant of load(); only the file read is awaited."""
        if file_path is None:
            return self._result
        try:
            check_content_type(content_type_for(file_path))
            data = await read_statement_async(file_path)
        except DRFOAnalyzerError as e:
            self._fail(e)
            return self._result
        return self.load_bytes(data, content_type_for(file_path))

    def load_bytes(
        self, data: bytes, content_type: Optional[str]
    ) -> Optional[AggregationResult]:
        """Process uploaded bytes; replace the current state only on success."""
        try:
            analysis = analyze_statement(
                data,
                self.variant,
                content_type=content_type,
                category_filter=self.category_filter,
                reference_date=self.reference_date,
                encoding=self.encoding,
            )
        except DRFOAnalyzerError as e:
            self._fail(e)
            return self._result

        self.document = analysis.document
        self._result = analysis.result
        self.advisory = analysis.result.advisories[0] if analysis.result.advisories else None
        return self._result

    def set_filter(self, categories: Iterable[str | Category]) -> Optional[AggregationResult]:
        """
        Change the category filter and recompute the view.

        Raises:
            InvalidFilterError: If a category is not known to the variant
        """
        self.category_filter = parse_category_filter(categories, self.variant)
        if self.document is None:
            return None
        analysis = analyze_document(
            self.document, self.variant, self.category_filter, self.reference_date
        )
        self._result = analysis.result
        return self._result

    def dismiss_advisory(self) -> None:
        """Clear the active advisory."""
        self.advisory = None

    def _fail(self, error: DRFOAnalyzerError) -> None:
        if isinstance(error, ReconstructionError):
            code = AdvisoryCode.UNEXPECTED_DATA
        else:
            code = AdvisoryCode.LOAD_FAILED
        self.advisory = Advisory(code=code, message=str(error), severity=Severity.ERROR)
        logger.warning(
            "statement_load_failed",
            error=type(error).__name__,
            user_error=isinstance(error, ParseError),
            kept_previous=self.document is not None,
        )
