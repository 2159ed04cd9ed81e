"""Defines grammar rules and synthesized grammars.

This module defines the in-memory representation of the grammars synthesized from templates. A grammar is an ordered collection of named
rules, each holding a lark symbol sequence and a semantic action: a Python callable that receives the values of the sub-matches of the rule,
in order, and returns the value of the rule. Grammars render themselves as lark grammar text for compilation, and as a readable listing for
debugging.

The module contains the following functions:
- ``literal(text)``
- ``symbol_name(text)``

The module contains the following classes:
- ``GrammarRule``
- ``GrammarFragment``
- ``Grammar``
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Iterator

from lark.exceptions import GrammarError

Action = Callable[[list], Any]


def literal(text: str) -> str:
    """Quotes a text as a lark string literal.

    Args:
        text: The text to quote.

    Returns:
        The lark literal matching exactly the text.

    Examples:
        >>> print(literal('say "hi"\\n'))
        "say \\"hi\\"\\n"
    """
    out = []
    for c in text:
        if c == '\\':
            out.append('\\\\')
        elif c == '"':
            out.append('\\"')
        elif c == '\n':
            out.append('\\n')
        elif c == '\r':
            out.append('\\r')
        elif c == '\t':
            out.append('\\t')
        elif ord(c) < 0x20:
            out.append(f'\\x{ord(c):02x}')
        else:
            out.append(c)
    return '"' + ''.join(out) + '"'


def symbol_name(text: str) -> str:
    """Turns a text into a valid lark rule name.

    Examples:
        >>> symbol_name('org.acme.LateDelivery')
        'org_acme_latedelivery'
    """
    name = re.sub(r'[^a-z0-9_]', '_', text.lower())
    return name if re.match(r'[a-z]', name) else 'r' + name


class GrammarRule:
    """A named grammar rule with its semantic action.

    Args:
        name: The name of the rule, a valid lark rule name.
        tokens: The lark symbol sequence of the rule. Alternatives are separated by ``|``.
        action: The function computing the value of the rule from the list of values of its sub-matches.
        source: A readable description of the action, shown in listings and exports.
    """

    def __init__(self, name: str, tokens: str, action: Action, source: str | None = None):
        self._name = name
        self._tokens = tokens
        self._action = action
        self._source = source if source is not None else getattr(action, '__name__', 'action')

    @property
    def name(self):
        return self._name

    @property
    def tokens(self):
        return self._tokens

    @property
    def action(self):
        return self._action

    @property
    def source(self):
        return self._source

    def to_lark(self) -> str:
        return f'{self._name}: {self._tokens}'.rstrip()

    def export(self) -> dict[str, str]:
        return {'tokens': self._tokens, 'name': self._name, 'action': self._source}

    def __eq__(self, other):
        return isinstance(other, GrammarRule) and (self._name, self._tokens, self._source) == (other.name, other.tokens, other.source)

    def __hash__(self):
        return hash((self._name, self._tokens, self._source))

    def __repr__(self):
        return f'GrammarRule({self._name!r}, {self._tokens!r})'

    def __str__(self):
        return f'{self._name} -> {self._tokens} {{% {self._source} %}}'


class GrammarFragment:
    """A fixed, named group of rules included verbatim in synthesized grammars."""

    def __init__(self, name: str, rules: Iterable[GrammarRule]):
        self.name = name
        self.rules = tuple(rules)

    def __iter__(self):
        return iter(self.rules)


class Grammar:
    """A synthesized grammar.

    Rules accumulate in two ordered collections: text rules, which follow the structure of a template, and model rules, which follow the
    structure of the types it binds and the format patterns it uses. Fixed fragments are included once each. Rule names are unique: adding a
    rule identical to an existing one has no effect, adding a different rule under an existing name is an error.

    Args:
        start: The name of the start rule.
    """

    def __init__(self, start: str):
        self._start = start
        self._text_rules: dict[str, GrammarRule] = {}
        self._model_rules: dict[str, GrammarRule] = {}
        self._fragments: dict[str, GrammarFragment] = {}
        self._fragment_rules: dict[str, GrammarRule] = {}

    @property
    def start(self):
        return self._start

    @property
    def text_rules(self) -> tuple[GrammarRule, ...]:
        return tuple(self._text_rules.values())

    @property
    def model_rules(self) -> tuple[GrammarRule, ...]:
        return tuple(self._model_rules.values())

    @property
    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def actions(self) -> dict[str, Action]:
        return {rule.name: rule.action for rule in self}

    def add_text_rule(self, rule: GrammarRule) -> None:
        self._add(self._text_rules, rule)

    def add_model_rule(self, rule: GrammarRule) -> None:
        self._add(self._model_rules, rule)

    def include(self, fragment: GrammarFragment) -> None:
        if fragment.name in self._fragments:
            return
        for rule in fragment:
            self._add(self._fragment_rules, rule)
        self._fragments[fragment.name] = fragment

    def _add(self, rules: dict[str, GrammarRule], rule: GrammarRule) -> None:
        existing = self.get(rule.name)
        if existing is not None:
            if existing == rule:
                return
            raise GrammarError(f"Rule {rule.name} is defined twice: {existing.tokens!r} and {rule.tokens!r}")
        rules[rule.name] = rule

    def get(self, name: str) -> GrammarRule | None:
        for rules in (self._text_rules, self._model_rules, self._fragment_rules):
            if name in rules:
                return rules[name]
        return None

    def __contains__(self, name):
        return self.get(name) is not None

    def __iter__(self) -> Iterator[GrammarRule]:
        yield from self._text_rules.values()
        yield from self._model_rules.values()
        yield from self._fragment_rules.values()

    def __len__(self):
        return len(self._text_rules) + len(self._model_rules) + len(self._fragment_rules)

    def to_lark(self) -> str:
        """Renders the grammar as lark grammar text.

        Returns:
            The text of the grammar, one rule per line.
        """
        return '\n'.join(rule.to_lark() for rule in self) + '\n'

    def export(self) -> list[dict[str, str]]:
        """Exports the rules of the grammar.

        Returns:
            One ``{tokens, name, action}`` dictionary per rule, the action given by its readable description.
        """
        return [rule.export() for rule in self]

    def __str__(self):
        lines = [f'# start: {self._start}']
        lines.extend(str(rule) for rule in self)
        return '\n'.join(lines)
