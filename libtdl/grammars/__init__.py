"""Defines synthesized grammars and the fixed grammar fragments they include.

This package defines the rule and grammar objects produced by the synthesizer, and the library of primitive rules every grammar includes.

The package contains the following classes:

- ``GrammarRule``
- ``GrammarFragment``
- ``Grammar``

The package contains the following functions:

- ``literal(text)``
- ``symbol_name(text)``

The package contains the following objects:

- ``SEPARATOR``
- ``GENERATED_IDENTIFIER``
- ``BASE``
- ``DATETIME``
- ``AMOUNT``
- ``MONETARY_AMOUNT``
"""
from .rules import GrammarRule, GrammarFragment, Grammar, literal, symbol_name
from .base import SEPARATOR, GENERATED_IDENTIFIER, BASE, DATETIME, AMOUNT, MONETARY_AMOUNT

__all__ = ['GrammarRule', 'GrammarFragment', 'Grammar', 'literal', 'symbol_name', 'SEPARATOR', 'GENERATED_IDENTIFIER', 'BASE', 'DATETIME', 'AMOUNT',
           'MONETARY_AMOUNT']
