"""Daily NBP exchange rate widget."""

__version__ = "0.1.0"
