"""Month and quarter label interpretation."""

from typing import Optional

from drfo_analyzer.core.models.enums import PeriodKind

MONTHS: dict[str, int] = {
    "січень": 1,
    "лютий": 2,
    "березень": 3,
    "квітень": 4,
    "травень": 5,
    "червень": 6,
    "липень": 7,
    "серпень": 8,
    "вересень": 9,
    "жовтень": 10,
    "листопад": 11,
    "грудень": 12,
}

QUARTERS: dict[str, int] = {
    "i": 1,
    "ii": 2,
    "iii": 3,
    "iv": 4,
}

PERIODS_PER_YEAR: dict[PeriodKind, int] = {
    PeriodKind.MONTH: 12,
    PeriodKind.QUARTER: 4,
}


def parse_period_label(label: str, kind: PeriodKind) -> Optional[int]:
    """
    Interpret a month or quarter label.

    Args:
        label: Raw label, e.g. "Січень", "12", "IV" or "3 квартал"
        kind: Month or quarter

    Returns:
        1-based index within the year, or None if unreadable
    """
    if not label:
        return None
    token = label.strip().split()[0].lower() if label.strip() else ""
    if not token:
        return None

    if token.isascii() and token.isdigit():
        index = int(token)
    elif kind == PeriodKind.MONTH:
        index = MONTHS.get(token, 0)
    else:
        index = QUARTERS.get(token, 0)

    if 1 <= index <= PERIODS_PER_YEAR[kind]:
        return index
    return None


def parse_year(value: str) -> Optional[int]:
    """Parse a four-digit year, None if blank or not a number."""
    value = (value or "").strip()
    if len(value) == 4 and value.isascii() and value.isdigit():
        return int(value)
    return None
