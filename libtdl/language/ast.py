"""Defines the nodes of the template abstract syntax tree.

This module defines the immutable nodes produced by the TDL parser. A template is an ordered sequence of nodes: literal chunks of text
interleaved with bindings to the properties of the bound record type. Block bindings hold the nested template bound to a child record.

The module contains the following classes:
- ``Node``
- ``Chunk``
- ``LastChunk``
- ``ExprChunk``
- ``Expr``
- ``Binding``
- ``FormattedBinding``
- ``BooleanBinding``
- ``ClauseBinding``
- ``WithBinding``
- ``ListBinding``
- ``TemplateAst``
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Node:
    line: int
    column: int


@dataclass(frozen=True)
class Chunk(Node):
    """Literal text, copied verbatim to and from documents."""
    value: str


@dataclass(frozen=True)
class LastChunk(Chunk):
    """The literal text closing a template."""


@dataclass(frozen=True)
class ExprChunk(Chunk):
    """A constant expression block, folded into the literal text it evaluates to."""


@dataclass(frozen=True)
class Expr(Node):
    """An expression block, passed through unevaluated."""
    expression: str


@dataclass(frozen=True)
class Binding(Node):
    """A placeholder for the value of the property ``field_name``."""
    field_name: str


@dataclass(frozen=True)
class FormattedBinding(Binding):
    """A placeholder whose value is written with the layout described by ``format``."""
    format: str | None = None


@dataclass(frozen=True)
class BooleanBinding(Binding):
    """A phrase present in the document iff the Boolean property ``field_name`` is true.

    When ``else_literal`` is given, that phrase is present instead when the property is false.
    """
    literal: str
    else_literal: str | None = None


@dataclass(frozen=True)
class ClauseBinding(Binding):
    template: TemplateAst


@dataclass(frozen=True)
class WithBinding(Binding):
    template: TemplateAst


@dataclass(frozen=True)
class ListBinding(Binding):
    """A nested template repeated once per item of the array property ``field_name``, each item introduced by ``separator``."""
    template: TemplateAst
    separator: str = ''


@dataclass(frozen=True)
class TemplateAst:
    nodes: tuple[Node, ...] = ()

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, index):
        return self.nodes[index]
