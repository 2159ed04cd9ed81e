"""Defines the grammar rule builders of formatted values.

This package defines the builders turning date/time, amount and monetary amount format patterns into grammar rules.

The package contains the following classes:

- ``FormatParser``
- ``DateTimeFormatParser``
- ``AmountFormatParser``
- ``MonetaryAmountFormatParser``

The package contains the following objects:

- ``datetime_format_parser``
- ``amount_format_parser``
- ``monetary_amount_format_parser``
"""
from .parsers import (FormatParser, DateTimeFormatParser, AmountFormatParser, MonetaryAmountFormatParser, datetime_format_parser,
                      amount_format_parser, monetary_amount_format_parser)

__all__ = ['FormatParser', 'DateTimeFormatParser', 'AmountFormatParser', 'MonetaryAmountFormatParser', 'datetime_format_parser',
           'amount_format_parser', 'monetary_amount_format_parser']
