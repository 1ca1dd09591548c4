"""Date, time and XML wire values, parameter conversion and result streams for TDS."""

__version__ = "0.1.0"
__all__ = ["column_data", "conversions", "errors", "query", "time", "tokens", "xml"]