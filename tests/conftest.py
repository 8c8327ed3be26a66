"""Pytest configuration and fixtures."""

from datetime import date
from pathlib import Path

import pytest

from builders import Row, build_statement_xml
from drfo_analyzer.shared.config import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; tests may change the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reference_date() -> date:
    """A date whose prior year is 2022, matching the sample statements."""
    return date(2023, 3, 1)


@pytest.fixture
def sample_rows() -> list[Row]:
    """Rows covering every basic category, a missing cell and a summary row."""
    return [
        Row("1", accrued="1000.00", paid="1000.00", tax_accrued="180.00",
            tax_paid="15.00", code="126 - Проценти"),
        Row("2", date="Лютий", company="ТОВ ФК ЕЛЕМЕНТ", accrued="500.00",
            paid="500.00", tax_paid="0", code="999 - Невідомий дохід"),
        Row("3", date="Березень", company="МІНФІН", accrued="2000.00",
            paid="2000.00", code="129 - Доходи за ОВДП"),
        Row("4", date="Квітень", company="ТОВ ЕМІТЕНТ", accrued="300.50",
            paid="300.50", tax_accrued="54.09", tax_paid="54.09",
            code="110 - Проценти за облігаціями"),
        Row("5", date="Травень", company=None, accrued="12.34", paid=None,
            code="127 - Кешбек"),
        # summary row: no date, only totals
        Row("6", date="", year=None, company=None, accrued="3812.84",
            paid="3800.50", code=None),
    ]


@pytest.fixture
def sample_xml(sample_rows: list[Row]) -> str:
    return build_statement_xml(sample_rows)


@pytest.fixture
def sample_bytes(sample_xml: str) -> bytes:
    """Sample statement encoded like the tax office export (cp1251)."""
    return sample_xml.encode("cp1251")


@pytest.fixture
def sample_statement_path(tmp_path: Path, sample_bytes: bytes) -> Path:
    """Sample statement written to disk."""
    path = tmp_path / "vidomist.xml"
    path.write_bytes(sample_bytes)
    return path
