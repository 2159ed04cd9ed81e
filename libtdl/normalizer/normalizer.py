"""Defines a normalizer to turn parsed formatted values into native values.

This module defines the functions converting the ``Parsed<Kind>`` records produced by formatted bindings into the values the model catalog
expects: ISO 8601 strings for dates, numbers for amounts and ``MonetaryAmount`` records for monetary amounts.

The module contains the following functions:
- ``normalize(value, utc_offset, current_time)``
- ``normalize_datetime(parsed, utc_offset, current_time)``
- ``normalize_monetary_amount(parsed)``
"""
import datetime
from functools import singledispatch
from typing import Any

MONETARY_AMOUNT_CLASS = 'org.accordproject.money.MonetaryAmount'


def _offset(text: str) -> datetime.timedelta:
    sign = -1 if text[0] == '-' else 1
    hours, minutes = text[1:].split(':')
    return sign * datetime.timedelta(hours=int(hours), minutes=int(minutes))


def normalize_datetime(parsed: dict, utc_offset: int = 0, current_time: datetime.datetime | None = None) -> str:
    """Converts a ``ParsedDateTime`` record into an ISO 8601 string.

    Args:
        parsed: The parsed date.
        utc_offset: The offset from UTC, in minutes, of dates parsed without a timezone.
        current_time: The time providing the year, month or day missing from the parsed date. Defaults to now.

    Returns:
        The date written ``YYYY-MM-DDTHH:mm:ss.SSS±hh:mm``.

    Raises:
        ValueError: If the parsed fields do not form a valid date.

    Examples:
        >>> normalize_datetime({'$class': 'ParsedDateTime', 'day': 19, 'month': 12, 'year': 2017, 'timezone': '+01:00'})
        '2017-12-19T00:00:00.000+01:00'
    """
    if 'timezone' in parsed:
        tz = datetime.timezone(_offset(parsed['timezone']))
    else:
        tz = datetime.timezone(datetime.timedelta(minutes=utc_offset))
    if current_time is None:
        current_time = datetime.datetime.now(tz)
    try:
        value = datetime.datetime(parsed.get('year', current_time.year), parsed.get('month', current_time.month), parsed.get('day', current_time.day),
                                  parsed.get('hour', 0), parsed.get('minute', 0), parsed.get('second', 0), parsed.get('millisecond', 0) * 1000,
                                  tzinfo=tz)
    except ValueError as e:
        raise ValueError(f'Invalid date {parsed}: {e}') from e
    return value.isoformat(timespec='milliseconds')


def normalize_monetary_amount(parsed: dict) -> dict:
    """Converts a ``ParsedMonetaryAmount`` record into a ``MonetaryAmount`` record.

    Args:
        parsed: The parsed monetary amount.

    Returns:
        The monetary amount, whose currency code is the parsed code or the code of the parsed symbol.

    Raises:
        ValueError: If the parsed symbol and code denote different currencies.
    """
    code = parsed.get('currencyCode')
    symbol = parsed.get('currencySymbol')
    if code is not None and symbol is not None and code != symbol:
        raise ValueError(f'Currency symbol {symbol} and currency code {code} are incompatible')
    return {'$class': MONETARY_AMOUNT_CLASS, 'doubleValue': parsed['doubleValue'], 'currencyCode': code if code is not None else symbol}


@singledispatch
def normalize(value: Any, utc_offset: int = 0, current_time: datetime.datetime | None = None) -> Any:
    """Converts the parsed formatted values held by a parse result into native values.

    Args:
        value: The parse result.
        utc_offset: The offset from UTC, in minutes, of dates parsed without a timezone.
        current_time: The time providing the date parts missing from parsed dates. Defaults to now.

    Returns:
        A copy of the parse result in which ``ParsedDateTime`` records are ISO 8601 strings, ``ParsedAmount`` records are numbers and
        ``ParsedMonetaryAmount`` records are ``MonetaryAmount`` records.

    Examples:
        >>> normalize({'$class': 'org.acme.Sale', 'price': {'$class': 'ParsedAmount', 'doubleValue': 1234.5}})
        {'$class': 'org.acme.Sale', 'price': 1234.5}
    """
    return value


@normalize.register
def _(value: dict, utc_offset: int = 0, current_time: datetime.datetime | None = None) -> Any:
    kind = value.get('$class')
    if kind == 'ParsedDateTime':
        return normalize_datetime(value, utc_offset, current_time)
    if kind == 'ParsedAmount':
        return value['doubleValue']
    if kind == 'ParsedMonetaryAmount':
        return normalize_monetary_amount(value)
    return {key: normalize(item, utc_offset, current_time) for key, item in value.items()}


@normalize.register
def _(value: list, utc_offset: int = 0, current_time: datetime.datetime | None = None) -> list:
    return [normalize(item, utc_offset, current_time) for item in value]
