"""Defines a normalizer to turn parse results into native values.

This package defines the functions converting the parsed dates, amounts and monetary amounts held by parse results into native values.

The package contains the following functions:

- ``normalize(value, utc_offset, current_time)``
- ``normalize_datetime(parsed, utc_offset, current_time)``
- ``normalize_monetary_amount(parsed)``
"""
from .normalizer import normalize, normalize_datetime, normalize_monetary_amount

__all__ = ['normalize', 'normalize_datetime', 'normalize_monetary_amount']
