"""Form variants of the DRFO income statement.

Each supported declaration year is described by one immutable
``FormVariant``: which statement schema it reads, which categories it
recognises, how tax codes map to categories and how categories group into
declaration lines. Several declaration years can read the same statement
schema, so ``VARIANTS`` is ordered oldest first and auto-detection picks the
newest variant that accepts a locator.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from drfo_analyzer.core.models.enums import Category, FieldName, PeriodKind
from drfo_analyzer.core.rules.tax_constants import (
    CODE_BORROWED_FUNDS,
    CODE_CASHBACK_OTHER,
    CODE_CORPORATE_BOND,
    CODE_DEPOSIT_INTEREST,
    CODE_DIIA_CITY_OTHER,
    CODE_DIIA_CITY_WAGE,
    CODE_DIVIDENDS,
    CODE_FOP_PAYMENT,
    CODE_GOVERNMENT_BOND,
    CODE_INVESTMENT_PROFIT,
    CODE_MEDICAL_INSURANCE,
)
from drfo_analyzer.shared.exceptions import UnsupportedVersionError

# Element names inside DECLARBODY, shared by all known versions
DEFAULT_FIELD_TAGS: Mapping[FieldName, str] = MappingProxyType(
    {
        FieldName.DATE: "T1RXXXXG3S",
        FieldName.YEAR: "T1RXXXXG4",
        FieldName.COMPANY: "T1RXXXXG6S",
        FieldName.INCOME_ACCRUED: "T1RXXXXG7",
        FieldName.INCOME_PAID: "T1RXXXXG8",
        FieldName.TAX_ACCRUED: "T1RXXXXG9",
        FieldName.TAX_PAID: "T1RXXXXG10",
        FieldName.TAX_CODE: "T1RXXXXG11S",
    }
)


@dataclass(frozen=True)
class PeriodTags:
    """Element names of the reporting period inside DECLARBODY."""

    from_label: str = "R0101G1S"
    from_year: str = "R0101G2"
    to_label: str = "R0101G3S"
    to_year: str = "R0101G4"


@dataclass(frozen=True)
class DeclarationLine:
    """A declaration line and the categories reported on it."""

    line: str
    label: str
    categories: tuple[Category, ...]


@dataclass(frozen=True, eq=False)
class FormVariant:
    """Static configuration of one statement form version."""

    code: str
    title: str
    schema_locator: str
    period_kind: PeriodKind
    categories: tuple[Category, ...]
    tax_codes: Mapping[int, Category]
    lines: tuple[DeclarationLine, ...]
    date_template: str = "{period} {year}"
    field_tags: Mapping[FieldName, str] = field(default_factory=lambda: DEFAULT_FIELD_TAGS)
    period_tags: PeriodTags = field(default_factory=PeriodTags)

    def __post_init__(self) -> None:
        if Category.OTHER not in self.categories:
            raise ValueError(f"{self.code}: OTHER category is mandatory")
        unknown = set(self.tax_codes.values()) - set(self.categories)
        if unknown:
            raise ValueError(f"{self.code}: tax codes map to unknown categories {unknown}")
        seen: set[Category] = set()
        for decl_line in self.lines:
            for category in decl_line.categories:
                if category in seen:
                    raise ValueError(f"{self.code}: {category} reported on two lines")
                seen.add(category)

    def category_for(self, tax_code: int) -> Category:
        """Category of a tax code, OTHER when the code is not in the table."""
        return self.tax_codes.get(tax_code, Category.OTHER)

    def line_for(self, category: Category) -> str | None:
        """Declaration line the category feeds, None if it is not reported."""
        for decl_line in self.lines:
            if category in decl_line.categories:
                return decl_line.line
        return None

    def matches_schema(self, schema_locator: str | None) -> bool:
        """Compare a schema locator with this variant's, ignoring case."""
        if not schema_locator:
            return False
        return normalize_schema_locator(schema_locator) == normalize_schema_locator(
            self.schema_locator
        )

    def format_date(self, period: str, year: str) -> str:
        """Compose the display date of a row."""
        if not year:
            return period
        return self.date_template.format(period=period, year=year)


def normalize_schema_locator(value: str) -> str:
    """Strip and case-fold a schema locator for comparison."""
    return value.strip().casefold()


_BASIC_CATEGORIES = (
    Category.CASHBACK_DEPOSIT,
    Category.CORPORATE_BOND,
    Category.GOVERNMENT_BOND,
    Category.OTHER,
)

_BASIC_TAX_CODES: Mapping[int, Category] = MappingProxyType(
    {
        CODE_CORPORATE_BOND: Category.CORPORATE_BOND,
        CODE_DEPOSIT_INTEREST: Category.CASHBACK_DEPOSIT,
        CODE_CASHBACK_OTHER: Category.CASHBACK_DEPOSIT,
        CODE_GOVERNMENT_BOND: Category.GOVERNMENT_BOND,
    }
)


DECLARATION_2021 = FormVariant(
    code="2021",
    title="Декларація за 2021 рік (відомість F1401803, помісячна)",
    schema_locator="F1401803.XSD",
    period_kind=PeriodKind.MONTH,
    categories=_BASIC_CATEGORIES,
    tax_codes=_BASIC_TAX_CODES,
    lines=(
        DeclarationLine(
            line="10.10",
            label="Інші доходи",
            categories=(Category.CASHBACK_DEPOSIT, Category.CORPORATE_BOND),
        ),
        DeclarationLine(
            line="11.3",
            label="Інші доходи, що не оподатковуються",
            categories=(Category.GOVERNMENT_BOND,),
        ),
    ),
)

DECLARATION_2022 = FormVariant(
    code="2022",
    title="Декларація за 2022 рік (відомість F1401803, помісячна)",
    schema_locator="F1401803.XSD",
    period_kind=PeriodKind.MONTH,
    categories=_BASIC_CATEGORIES,
    tax_codes=_BASIC_TAX_CODES,
    lines=(
        DeclarationLine(
            line="10.13",
            label="Інші доходи",
            categories=(Category.CASHBACK_DEPOSIT, Category.CORPORATE_BOND),
        ),
        DeclarationLine(
            line="11.3",
            label="Інші доходи, що не оподатковуються",
            categories=(Category.GOVERNMENT_BOND,),
        ),
    ),
)

DECLARATION_2023 = FormVariant(
    code="2023",
    title="Декларація за 2023 рік (відомість F1401804, поквартальна)",
    schema_locator="F1401804.XSD",
    period_kind=PeriodKind.QUARTER,
    date_template="{period} квартал {year}",
    categories=(
        Category.DIVIDENDS,
        Category.DIIA_CITY,
        Category.INVESTMENT_PROFIT,
        Category.CASHBACK_DEPOSIT,
        Category.CORPORATE_BOND,
        Category.GOVERNMENT_BOND,
        Category.MEDICAL_INSURANCE,
        Category.BORROWED_FUNDS,
        Category.FOP,
        Category.OTHER,
    ),
    tax_codes=MappingProxyType(
        {
            **_BASIC_TAX_CODES,
            CODE_DIVIDENDS: Category.DIVIDENDS,
            CODE_DIIA_CITY_WAGE: Category.DIIA_CITY,
            CODE_DIIA_CITY_OTHER: Category.DIIA_CITY,
            CODE_INVESTMENT_PROFIT: Category.INVESTMENT_PROFIT,
            CODE_FOP_PAYMENT: Category.FOP,
            CODE_MEDICAL_INSURANCE: Category.MEDICAL_INSURANCE,
            CODE_BORROWED_FUNDS: Category.BORROWED_FUNDS,
        }
    ),
    lines=(
        DeclarationLine(
            line="10.3",
            label="Доходи резидента Дія Сіті",
            categories=(Category.DIIA_CITY,),
        ),
        DeclarationLine(
            line="10.4",
            label="Дивіденди",
            categories=(Category.DIVIDENDS,),
        ),
        DeclarationLine(
            line="10.8",
            label="Інвестиційний прибуток",
            categories=(Category.INVESTMENT_PROFIT,),
        ),
        DeclarationLine(
            line="10.13",
            label="Інші доходи",
            categories=(Category.CASHBACK_DEPOSIT, Category.CORPORATE_BOND),
        ),
        DeclarationLine(
            line="11.1",
            label="Доходи ФОП на спрощеній системі",
            categories=(Category.FOP,),
        ),
        DeclarationLine(
            line="11.3",
            label="Інші доходи, що не оподатковуються",
            categories=(
                Category.GOVERNMENT_BOND,
                Category.MEDICAL_INSURANCE,
                Category.BORROWED_FUNDS,
            ),
        ),
    ),
)

VARIANTS: Mapping[str, FormVariant] = MappingProxyType(
    {variant.code: variant for variant in (DECLARATION_2021, DECLARATION_2022, DECLARATION_2023)}
)


def get_variant(code: str) -> FormVariant:
    """
    Look up a form variant by code.

    Args:
        code: Variant code, e.g. "2022" (case-insensitive)

    Returns:
        FormVariant

    Raises:
        UnsupportedVersionError: If the code is unknown
    """
    variant = VARIANTS.get(code.strip().upper())
    if variant is None:
        raise UnsupportedVersionError(
            f"Невідома версія форми: {code}. "
            f"Підтримуються: {', '.join(VARIANTS)}."
        )
    return variant


def variants_for_schema(schema_locator: str | None) -> list[FormVariant]:
    """All variants that read a schema locator, oldest first."""
    return [variant for variant in VARIANTS.values() if variant.matches_schema(schema_locator)]


def detect_variant(schema_locator: str | None) -> FormVariant:
    """
    Find the newest variant that reads a schema locator.

    Raises:
        UnsupportedVersionError: If no known variant carries this locator
    """
    matching = variants_for_schema(schema_locator)
    if matching:
        return matching[-1]
    raise UnsupportedVersionError(
        f"Невідомий формат відомості: {schema_locator or 'схему не вказано'}."
    )
