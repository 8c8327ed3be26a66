"""Shared utilities for DRFO Analyzer."""

from drfo_analyzer.shared.formatters import format_currency, format_tax_code

__all__ = [
    "format_currency",
    "format_tax_code",
]
