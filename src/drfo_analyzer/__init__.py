"""DRFO Analyzer - income statement to tax declaration line items."""

__version__ = "0.1.0"
