"""Defines the builders of grammar rules for formatted values.

This module defines the builders turning a format pattern, a compact notation of the layout of a date or amount such as ``DD/MM/YYYY`` or
``K0,0.00``, into a grammar rule parsing values written in that exact layout. A pattern is split into field markers, each contributing one
slot to the parsed value, and literal separators, matched verbatim. The value of a rule is a record tagged ``Parsed<Kind>`` whose keys are the
names of the fields of the pattern. Rule names are derived from an md5 digest of the pattern, so a pattern used several times in a grammar
yields a single rule.

The module contains the following classes:
- ``FormatParser``
- ``DateTimeFormatParser``
- ``AmountFormatParser``
- ``MonetaryAmountFormatParser``

The module contains the following objects:
- ``DATETIME_FIELDS``
- ``datetime_format_parser``
- ``amount_format_parser``
- ``monetary_amount_format_parser``
"""
from __future__ import annotations

import hashlib
import re

from libtdl.errors import FormatPatternError, DuplicateFormatFieldError
from libtdl.grammars import GrammarRule, GrammarFragment, literal, DATETIME, AMOUNT, MONETARY_AMOUNT

DATETIME_FIELDS = {
    'D': ('day', 'day_d'),
    'DD': ('day', 'day_dd'),
    'M': ('month', 'month_m'),
    'MM': ('month', 'month_mm'),
    'MMM': ('month', 'month_mmm'),
    'MMMM': ('month', 'month_mmmm'),
    'YYYY': ('year', 'year_yyyy'),
    'H': ('hour', 'hour_h'),
    'HH': ('hour', 'hour_hh'),
    'mm': ('minute', 'minute_mm'),
    'ss': ('second', 'second_ss'),
    'SSS': ('millisecond', 'millisecond_sss'),
    'Z': ('timezone', 'timezone_z'),
}
"""
Maps each date/time field marker to the name of its slot in parsed values and to the rule parsing it.
"""

NUMBER_MARKER = re.compile(r'0.0.00?0?')


def digest(text: str) -> str:
    return hashlib.md5(text.encode('utf-8')).hexdigest()


def _parsed_action(tag, slots):
    def action(d):
        parsed = {'$class': tag}
        for name, index in slots.items():
            parsed[name] = d[index]
        return parsed
    return action


class FormatParser:
    """Base class of the format rule builders.

    Subclasses define how a pattern is split into fields and which grammar symbol parses each field; this class applies the common
    construction and the duplicate field policy: a field may occur at most once in a pattern.

    Attributes:
        kind: The kind of value parsed, as named in error messages.
        tag: The ``$class`` of the parsed values.
        prefix: The prefix of the names of the rules built.
        fragments: The fixed grammar fragments the rules built depend on.
    """
    kind: str
    tag: str
    prefix: str
    fragments: tuple[GrammarFragment, ...] = ()
    splitter: re.Pattern

    def rule_name(self, pattern: str) -> str:
        """Computes the name of the rule built for a pattern.

        Args:
            pattern: The format pattern.

        Returns:
            The name of the rule, the same for equal patterns.
        """
        return f'{self.prefix}_{digest(pattern)}'

    def split(self, pattern: str) -> list[str]:
        return [field for field in self.splitter.split(pattern) if field]

    def field_name(self, field: str) -> str | None:
        raise NotImplementedError

    def field_rules(self, field: str) -> tuple[str, list[GrammarRule]]:
        raise NotImplementedError

    def check_field(self, field: str, index: int, fields: list[str], pattern: str) -> None:
        pass

    def build_rules(self, pattern: str) -> list[GrammarRule]:
        """Builds the rules parsing values written with a pattern.

        Args:
            pattern: The format pattern.

        Returns:
            The rules parsing the pattern: the sub-rules of its fields first, and the rule of the whole pattern last.

        Raises:
            DuplicateFormatFieldError: If a field occurs more than once in the pattern.
            FormatPatternError: If the pattern is otherwise malformed.
        """
        fields = self.split(pattern)
        rules = []
        tokens = []
        slots = {}
        for index, field in enumerate(fields):
            name = self.field_name(field)
            if name is None:
                tokens.append(literal(field))
                continue
            if name in slots:
                raise DuplicateFormatFieldError(name, self.kind, pattern)
            self.check_field(field, index, fields, pattern)
            slots[name] = index
            symbol, sub_rules = self.field_rules(field)
            rules.extend(sub_rules)
            tokens.append(symbol)
        if not slots:
            raise FormatPatternError(f'No field in {self.kind} format string: {pattern}')
        source = ', '.join([f'"$class": "{self.tag}"'] + [f'"{name}": d[{index}]' for name, index in slots.items()])
        rules.append(GrammarRule(self.rule_name(pattern), ' '.join(tokens), _parsed_action(self.tag, slots), '{' + source + '}'))
        return rules

    def build_rule(self, pattern: str) -> GrammarRule:
        """Builds the rule parsing values written with a pattern.

        Args:
            pattern: The format pattern.

        Returns:
            The rule of the whole pattern. Use ``build_rules`` to also get the sub-rules it refers to.
        """
        return self.build_rules(pattern)[-1]


class DateTimeFormatParser(FormatParser):
    """Builds the rules of date/time patterns.

    The field markers are ``D`` and ``DD`` (day), ``M``, ``MM``, ``MMM`` and ``MMMM`` (month, as a number or a short or long English name),
    ``YYYY`` (year), ``H`` and ``HH`` (hour), ``mm`` (minute), ``ss`` (second), ``SSS`` (millisecond) and ``Z`` (timezone offset, which must be
    the last field). Months are numbered from 1.

    Examples:
        >>> rule = DateTimeFormatParser().build_rule('D MMM YYYY')
        >>> rule.tokens
        'day_d " " month_mmm " " year_yyyy'
        >>> rule.action([19, ' ', 12, ' ', 2017])
        {'$class': 'ParsedDateTime', 'day': 19, 'month': 12, 'year': 2017}
    """
    kind = 'date time'
    tag = 'ParsedDateTime'
    prefix = 'datetime'
    fragments = (DATETIME,)
    splitter = re.compile(r'(Z|DD|D|MMMM|MMM|MM|M|YYYY|HH|H|mm|ss|SSS)')

    def field_name(self, field):
        return DATETIME_FIELDS[field][0] if field in DATETIME_FIELDS else None

    def field_rules(self, field):
        return DATETIME_FIELDS[field][1], []

    def check_field(self, field, index, fields, pattern):
        if field == 'Z' and index != len(fields) - 1:
            raise FormatPatternError(f'Timezone must be last format field: {pattern}')


class AmountFormatParser(FormatParser):
    """Builds the rules of amount patterns.

    The only field marker is the number marker ``0?0?0``, optionally followed by up to two more ``0``: the character after the first ``0`` is
    the thousands separator, the one after the second ``0`` the decimal separator. Every other character is literal.

    Examples:
        >>> rules = AmountFormatParser().build_rules('K0,0.0')
        >>> [rule.tokens for rule in rules]
        ['amount_prefix ("," amount_triple)* "." amount_fraction', '"K" a_7ff19ce28af89bde1258b9fc28bcfbf9']
    """
    kind = 'monetary amount'
    tag = 'ParsedAmount'
    prefix = 'double'
    fragments = (AMOUNT,)
    splitter = re.compile(r'(0.0.00?0?)')

    def field_name(self, field):
        return 'doubleValue' if NUMBER_MARKER.fullmatch(field) else None

    def field_rules(self, field):
        name = f'a_{digest(field)}'
        tokens = f'amount_prefix ({literal(field[1])} amount_triple)* {literal(field[3])} amount_fraction'
        rule = GrammarRule(name, tokens, lambda d: float(d[0] + ''.join(d[2:-2:2]) + '.' + d[-1]),
                           "float(d[0] + ''.join(d[2:-2:2]) + '.' + d[-1])")
        return name, [rule]


class MonetaryAmountFormatParser(AmountFormatParser):
    """Builds the rules of monetary amount patterns.

    In addition to the number marker, ``CCC`` marks a three-letter currency code and ``K`` a currency symbol. Known symbols are converted to
    their currency code; other symbols are kept as written.

    Examples:
        >>> MonetaryAmountFormatParser().build_rule('0,0.00 CCC').tokens
        'a_34bceb1090021800c32ceebf21294a4f " " currency_code'
    """
    tag = 'ParsedMonetaryAmount'
    prefix = 'monetaryamount'
    fragments = (AMOUNT, MONETARY_AMOUNT)
    splitter = re.compile(r'(CCC|K|0.0.00?0?)')

    def field_name(self, field):
        if field == 'CCC':
            return 'currencyCode'
        if field == 'K':
            return 'currencySymbol'
        return super().field_name(field)

    def field_rules(self, field):
        if field == 'CCC':
            return 'currency_code', []
        if field == 'K':
            return 'currency_symbol', []
        return super().field_rules(field)


datetime_format_parser = DateTimeFormatParser()
amount_format_parser = AmountFormatParser()
monetary_amount_format_parser = MonetaryAmountFormatParser()
