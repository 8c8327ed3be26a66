"""Value formatters for display."""

from decimal import Decimal


def format_currency(value: Decimal, symbol: str = "₴") -> str:
    """
    Format decimal as Ukrainian currency.

    Args:
        value: Decimal value to format
        symbol: Currency symbol (default: ₴)

    Returns:
        Formatted string like "1 234,56 ₴"
    """
    # Handle negative values
    negative = value < 0
    value = abs(value)

    # Format with 2 decimal places
    formatted = f"{value:,.2f}"

    # Convert to Ukrainian format (space for thousands, comma for decimals)
    formatted = formatted.replace(",", " ").replace(".", ",")

    result = f"{formatted} {symbol}" if symbol else formatted
    return f"-{result}" if negative else result


def format_tax_code(code: int, description: str | None = None) -> str:
    """
    Format a tax code with an optional description.

    Args:
        code: Numeric tax code
        description: Category label to append

    Returns:
        Formatted string like "126 - Депозити та кешбеки"
    """
    if description:
        return f"{code} - {description}"
    return str(code)
