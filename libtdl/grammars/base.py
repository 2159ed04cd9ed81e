"""Defines the fixed grammar fragments included in synthesized grammars.

This module defines the primitive rules every synthesized grammar includes (strings, numbers, percentages, booleans, whitespace and opaque
expression blocks), and the fragments included on demand by the format rule builders: the date/time fields, the parts of grouped numbers and
the currency markers.

The module contains the following objects:
- ``SEPARATOR``
- ``GENERATED_IDENTIFIER``
- ``BASE``
- ``DATETIME``
- ``AMOUNT``
- ``MONETARY_AMOUNT``
- ``MONTHS``
- ``SHORT_MONTHS``
- ``CURRENCY_SYMBOLS``
"""
import json

from libtdl.grammars.rules import GrammarRule, GrammarFragment, literal


class _Separator:
    def __repr__(self):
        return 'SEPARATOR'


SEPARATOR = _Separator()
"""
The value of whitespace matched between the properties of a record.
"""


class _GeneratedIdentifier:
    def __repr__(self):
        return 'GENERATED_IDENTIFIER'


GENERATED_IDENTIFIER = _GeneratedIdentifier()
"""
The placeholder value of identifier fields not bound by a template, replaced by a fresh identifier in each parse result.
"""

MONTHS = ('January', 'February', 'March', 'April', 'May', 'June', 'July', 'August', 'September', 'October', 'November', 'December')
SHORT_MONTHS = tuple(month[:3] for month in MONTHS)

CURRENCY_SYMBOLS = {'€': 'EUR', '£': 'GBP', 'zł': 'PLN', '$': 'USD', '¥': 'YEN'}


def _first(d):
    return str(d[0])


def _integer(d):
    return int(d[0])


def _month_name(names):
    def action(d):
        return names.index(str(d[0])) + 1
    return action


BASE = GrammarFragment('base', [
    GrammarRule('string', r'/"(?:[^"\\\n]|\\.)*"/', lambda d: json.loads(d[0]), 'json.loads(d[0])'),
    GrammarRule('double', r'/[+-]?[0-9]+(?:\.[0-9]+)?/', lambda d: float(d[0]), 'float(d[0])'),
    GrammarRule('integer', r'/[+-]?[0-9]+/', _integer, 'int(d[0])'),
    GrammarRule('long', r'/[+-]?[0-9]+/', _integer, 'int(d[0])'),
    GrammarRule('boolean', '"true" | "false"', lambda d: d[0] == 'true', 'd[0] == "true"'),
    GrammarRule('percentage', r'/[+-]?[0-9]+(?:\.[0-9]+)?/ "%"', lambda d: float(d[0]) / 100, 'float(d[0]) / 100'),
    GrammarRule('ws', r'/[ \t\n\v\f]+/', lambda d: SEPARATOR, 'SEPARATOR'),
    GrammarRule('any', r'/\{\{[\s\S]*?\}\}/', _first, 'd[0]'),
])
"""
The primitive rules, included in every synthesized grammar.
"""

DATETIME = GrammarFragment('datetime', [
    GrammarRule('day_d', '/3[01]|[12][0-9]|[1-9]/', _integer, 'int(d[0])'),
    GrammarRule('day_dd', '/0[1-9]|[12][0-9]|3[01]/', _integer, 'int(d[0])'),
    GrammarRule('month_m', '/1[0-2]|[1-9]/', _integer, 'int(d[0])'),
    GrammarRule('month_mm', '/0[1-9]|1[0-2]/', _integer, 'int(d[0])'),
    GrammarRule('month_mmm', ' | '.join(literal(month) for month in SHORT_MONTHS), _month_name(SHORT_MONTHS), 'MONTHS.index(d[0]) + 1'),
    GrammarRule('month_mmmm', ' | '.join(literal(month) for month in MONTHS), _month_name(MONTHS), 'MONTHS.index(d[0]) + 1'),
    GrammarRule('year_yyyy', '/[0-9]{4}/', _integer, 'int(d[0])'),
    GrammarRule('hour_h', '/2[0-3]|1[0-9]|[0-9]/', _integer, 'int(d[0])'),
    GrammarRule('hour_hh', '/[01][0-9]|2[0-3]/', _integer, 'int(d[0])'),
    GrammarRule('minute_mm', '/[0-5][0-9]/', _integer, 'int(d[0])'),
    GrammarRule('second_ss', '/[0-5][0-9]/', _integer, 'int(d[0])'),
    GrammarRule('millisecond_sss', '/[0-9]{3}/', _integer, 'int(d[0])'),
    GrammarRule('timezone_z', '/[+-](?:[01][0-9]|2[0-3]):[0-5][0-9]/', _first, 'd[0]'),
])
"""
The date/time field rules, included by date/time formats.
"""

AMOUNT = GrammarFragment('amount', [
    GrammarRule('amount_prefix', '/[0-9]{1,3}/', _first, 'd[0]'),
    GrammarRule('amount_triple', '/[0-9]{3}/', _first, 'd[0]'),
    GrammarRule('amount_fraction', '/[0-9]+/', _first, 'd[0]'),
])
"""
The parts of grouped numbers, included by amount formats.
"""

MONETARY_AMOUNT = GrammarFragment('monetaryamount', [
    GrammarRule('currency_code', '/[A-Z]{3}/', _first, 'd[0]'),
    GrammarRule('currency_symbol', ' | '.join(literal(symbol) for symbol in CURRENCY_SYMBOLS) + r' | /[A-Z]{3}|[^\s0-9€£$¥.,]/',
                lambda d: CURRENCY_SYMBOLS.get(str(d[0]), str(d[0])), 'CURRENCY_SYMBOLS.get(d[0], d[0])'),
])
"""
The currency markers, included by monetary amount formats.
"""
