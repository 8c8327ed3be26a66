"""Static tax rules and form variant configuration."""

from drfo_analyzer.core.rules.tax_constants import (
    CENT,
    MILITARY_TAX_RATE,
    TAX_CODE_SEPARATOR,
)
from drfo_analyzer.core.rules.periods import (
    MONTHS,
    PERIODS_PER_YEAR,
    QUARTERS,
    parse_period_label,
    parse_year,
)
from drfo_analyzer.core.rules.variants import (
    DECLARATION_2021,
    DECLARATION_2022,
    DECLARATION_2023,
    VARIANTS,
    DeclarationLine,
    FormVariant,
    PeriodTags,
    detect_variant,
    get_variant,
    normalize_schema_locator,
    variants_for_schema,
)

__all__ = [
    "CENT",
    "MILITARY_TAX_RATE",
    "TAX_CODE_SEPARATOR",
    "MONTHS",
    "PERIODS_PER_YEAR",
    "QUARTERS",
    "parse_period_label",
    "parse_year",
    "DECLARATION_2021",
    "DECLARATION_2022",
    "DECLARATION_2023",
    "VARIANTS",
    "DeclarationLine",
    "FormVariant",
    "PeriodTags",
    "detect_variant",
    "variants_for_schema",
    "get_variant",
    "normalize_schema_locator",
]
