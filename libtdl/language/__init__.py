"""Defines the Template Definition Language (TDL)

This package defines the Earley parser of TDL templates and the abstract syntax tree it produces.

The package contains the following classes:

- ``TemplateAst``
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

The package contains the following functions:

- ``parse_template(source)``

The package contains the following objects:

- ``tdl_parser``
"""
from .ast import (TemplateAst, Node, Chunk, LastChunk, ExprChunk, Expr, Binding, FormattedBinding, BooleanBinding, ClauseBinding, WithBinding,
                  ListBinding)
from .grammar import parse_template, tdl_parser

__all__ = ['TemplateAst', 'Node', 'Chunk', 'LastChunk', 'ExprChunk', 'Expr', 'Binding', 'FormattedBinding', 'BooleanBinding', 'ClauseBinding',
           'WithBinding', 'ListBinding', 'parse_template', 'tdl_parser']
