"""Enumerations for DRFO domain models."""

from enum import Enum


class Category(str, Enum):
    """Declaration categories an income record can be classified into."""

    DIVIDENDS = "dividends"
    DIIA_CITY = "diia_city"
    INVESTMENT_PROFIT = "investment_profit"
    CASHBACK_DEPOSIT = "cashback_deposit"
    CORPORATE_BOND = "corporate_bond"
    GOVERNMENT_BOND = "government_bond"
    MEDICAL_INSURANCE = "medical_insurance"
    BORROWED_FUNDS = "borrowed_funds"
    FOP = "fop"
    OTHER = "other"


CATEGORY_LABELS: dict[Category, str] = {
    Category.DIVIDENDS: "Дивіденди",
    Category.DIIA_CITY: "Доходи резидента Дія Сіті",
    Category.INVESTMENT_PROFIT: "Інвестиційний прибуток",
    Category.CASHBACK_DEPOSIT: "Депозити та кешбеки",
    Category.CORPORATE_BOND: "Корпоративні облігації",
    Category.GOVERNMENT_BOND: "Державні облігації",
    Category.MEDICAL_INSURANCE: "Медичне страхування",
    Category.BORROWED_FUNDS: "Позикові кошти",
    Category.FOP: "Виплати на ФОП",
    Category.OTHER: "Інше",
}


class FieldName(str, Enum):
    """Logical columns of the statement table."""

    DATE = "date"
    YEAR = "year"
    COMPANY = "company"
    INCOME_ACCRUED = "income_accrued"
    INCOME_PAID = "income_paid"
    TAX_ACCRUED = "tax_accrued"
    TAX_PAID = "tax_paid"
    TAX_CODE = "tax_code"


class PeriodKind(str, Enum):
    """Granularity of the reporting period."""

    MONTH = "month"
    QUARTER = "quarter"


class Severity(str, Enum):
    """Severity levels for advisories."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AdvisoryCode(str, Enum):
    """Kinds of advisory conditions surfaced to the caller."""

    PERIOD_MISSING = "period_missing"
    PERIOD_NOT_FULL_YEAR = "period_not_full_year"
    PERIOD_NOT_PRIOR_YEAR = "period_not_prior_year"
    LOAD_FAILED = "load_failed"
    UNEXPECTED_DATA = "unexpected_data"
