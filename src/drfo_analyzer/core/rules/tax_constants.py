"""Tax constants for the Ukrainian personal income tax declaration.

Sources:
- Податковий кодекс України, п. 16-1 підрозділу 10 розділу XX (військовий збір)
- Довідник ознак доходів фізичних осіб (додаток до форми 1ДФ)
"""

from decimal import Decimal

# Military tax rate applied to paid income when PIT was withheld
MILITARY_TAX_RATE = Decimal("0.015")  # 1.5%

# Rounding unit for derived money amounts
CENT = Decimal("0.01")

# === Income type codes (ознаки доходу) ===
CODE_DEPOSIT_INTEREST = 126  # проценти на депозит, кешбек
CODE_CASHBACK_OTHER = 127  # інші доходи (кешбек)
CODE_GOVERNMENT_BOND = 129  # ОВДП
CODE_CORPORATE_BOND = 110  # корпоративні облігації
CODE_DIVIDENDS = 109
CODE_INVESTMENT_PROFIT = 106
CODE_FOP_PAYMENT = 157  # виплата на ФОП
CODE_MEDICAL_INSURANCE = 160
CODE_BORROWED_FUNDS = 164
CODE_DIIA_CITY_WAGE = 195
CODE_DIIA_CITY_OTHER = 196

# Separator between code and description in the tax code label
TAX_CODE_SEPARATOR = " - "
