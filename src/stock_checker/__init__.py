"""stock-checker: stock quotes and daily price charts from Alpha Vantage."""

__version__ = "0.1.0"
