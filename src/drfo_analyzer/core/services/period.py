"""Reporting period sanity check.

A statement used for the annual declaration should cover the whole previous
calendar year. Anything else is still processed; the caller only gets an
advisory.
"""

from datetime import date
from typing import Optional

import structlog

from drfo_analyzer.core.models.analysis import Advisory
from drfo_analyzer.core.models.document import ReportingPeriod
from drfo_analyzer.core.models.enums import AdvisoryCode, Severity
from drfo_analyzer.core.rules.periods import PERIODS_PER_YEAR
from drfo_analyzer.core.rules.variants import FormVariant

logger = structlog.get_logger()


def check_reporting_period(
    period: Optional[ReportingPeriod],
    variant: FormVariant,
    reference_date: Optional[date] = None,
) -> list[Advisory]:
    """
    Compare the statement period with the full prior calendar year.

    Args:
        period: Period read from the statement, None if absent
        variant: Active form variant (month or quarter granularity)
        reference_date: "Today" for the prior-year rule (default: date.today())

    Returns:
        Advisories, empty when the period is as expected
    """
    reference_date = reference_date or date.today()
    expected_year = reference_date.year - 1
    advisories: list[Advisory] = []

    if period is None:
        advisories.append(
            Advisory(
                code=AdvisoryCode.PERIOD_MISSING,
                message="У відомості не вказано звітний період.",
            )
        )
    else:
        last = PERIODS_PER_YEAR[variant.period_kind]
        full_year = (
            period.from_index == 1
            and period.to_index == last
            and period.from_year is not None
            and period.from_year == period.to_year
        )
        if not full_year:
            advisories.append(
                Advisory(
                    code=AdvisoryCode.PERIOD_NOT_FULL_YEAR,
                    message=(
                        f"Період відомості ({period.display}) не охоплює повний "
                        "календарний рік. Суми можуть бути неповними."
                    ),
                )
            )
        elif period.from_year != expected_year:
            advisories.append(
                Advisory(
                    code=AdvisoryCode.PERIOD_NOT_PRIOR_YEAR,
                    message=(
                        f"Відомість за {period.from_year} рік, а декларація "
                        f"подається за {expected_year} рік."
                    ),
                    severity=Severity.INFO,
                )
            )

    for advisory in advisories:
        logger.warning("period_advisory", code=advisory.code.value, variant=variant.code)
    return advisories
