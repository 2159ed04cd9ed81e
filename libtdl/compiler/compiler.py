"""Defines the compiler of synthesized grammars and the parser of documents.

This module defines the compilation of a synthesized grammar into a lark Earley parser, and the parsing of documents with it. The parser
accepts ambiguous grammars: every derivation of a document is evaluated with the semantic actions of the grammar, and the document is
accepted only if all of them produce the same value.

The module contains the following classes:
- ``CompilerConfig``
- ``ActionTransformer``
- ``DocumentParser``
- ``CompiledGrammar``

The module contains the following functions:
- ``compile_grammar(grammar, config)``
- ``parse_document(compiled, text)``
- ``assign_identifiers(value)``
"""
from __future__ import annotations

import logging
import uuid
from functools import singledispatch
from typing import Any

from lark import Lark, Transformer, Tree
from lark.exceptions import UnexpectedInput, VisitError
from lark.visitors import CollapseAmbiguities

from libtdl.errors import TemplateError, DocumentSyntaxError, AmbiguousDocumentParseError, input_location
from libtdl.grammars import Grammar, GENERATED_IDENTIFIER

logger = logging.getLogger(__name__)


class CompilerConfig:
    """Configures how templates are turned into parsers. The constructor isn't meant to be used very often, it is recommended to use the
    static constructor methods to build this object.

    Args:
        lexer: The lark Earley lexer, ``dynamic`` or ``dynamic_complete``. The latter also tries every shorter match of each terminal.
        default_datetime_format: The format pattern of DateTime properties bound without a format.
        generate_identifiers: Whether records whose identifier field is not bound by the template receive a generated identifier.
    """

    def __init__(self, lexer: str = 'dynamic', default_datetime_format: str = 'MM/DD/YYYY', generate_identifiers: bool = True):
        if lexer not in ('dynamic', 'dynamic_complete'):
            raise ValueError(f"Unsupported lexer {lexer}, expected 'dynamic' or 'dynamic_complete'")
        self._lexer = lexer
        self._default_datetime_format = default_datetime_format
        self._generate_identifiers = generate_identifiers

    @staticmethod
    def default() -> CompilerConfig:
        """Creates a CompilerConfig object with the dynamic lexer, the ``MM/DD/YYYY`` date format and generated identifiers.
        """
        return CompilerConfig()

    @staticmethod
    def exhaustive() -> CompilerConfig:
        """Creates a CompilerConfig object whose parsers try every possible match of each terminal. Parsing is slower, but documents in
        which a value runs into the following text without a separator can be parsed.
        """
        return CompilerConfig(lexer='dynamic_complete')

    @property
    def lexer(self):
        return self._lexer

    @property
    def default_datetime_format(self):
        return self._default_datetime_format

    @property
    def generate_identifiers(self):
        return self._generate_identifiers


class ActionTransformer(Transformer):
    """Computes the value of a parse tree by applying the semantic action of each rule to the values of its children.

    Args:
        actions: The semantic action of each rule, by rule name.
    """

    def __init__(self, actions):
        super().__init__(visit_tokens=False)
        self._actions = actions

    def __default__(self, data, children, meta):
        return self._actions[str(data)](children)


@singledispatch
def assign_identifiers(value: Any) -> Any:
    """Replaces the identifier placeholders of a parse result with fresh identifiers.

    Args:
        value: The parse result.

    Returns:
        A copy of the parse result in which each placeholder is replaced by a distinct UUID.
    """
    return value


@assign_identifiers.register
def _(value: dict) -> dict:
    return {key: str(uuid.uuid4()) if item is GENERATED_IDENTIFIER else assign_identifiers(item) for key, item in value.items()}


@assign_identifiers.register
def _(value: list) -> list:
    return [assign_identifiers(item) for item in value]


class DocumentParser:
    """Parses documents with a compiled grammar.

    Each instance holds its own evaluation state; concurrent parses must each use their own instance, obtained from
    ``CompiledGrammar.parser``.
    """

    def __init__(self, compiled: CompiledGrammar):
        self._compiled = compiled
        self._transformer = ActionTransformer(compiled.grammar.actions)

    def parse(self, text: str) -> Any:
        """Parses a document.

        Args:
            text: The document.

        Returns:
            The value of the document: a record tagged with the fully qualified name of the bound type in ``$class``.

        Raises:
            DocumentSyntaxError: If the document has no derivation.
            AmbiguousDocumentParseError: If the document has derivations with different values.
        """
        try:
            tree = self._compiled.lark.parse(text)
        except UnexpectedInput as e:
            line, column, token = input_location(e, text)
            reason = f'unexpected {token!r}' if token else 'unexpected end of input'
            raise DocumentSyntaxError(f'invalid syntax at line {line} col {column}: {reason}', line, column, token) from e
        derivations = CollapseAmbiguities().transform(tree)
        values = [self._evaluate(derivation) for derivation in derivations]
        logger.debug('Document has %d derivations', len(values))
        if any(value != values[0] for value in values[1:]):
            raise AmbiguousDocumentParseError(len(values))
        return assign_identifiers(values[0])

    def _evaluate(self, tree: Tree) -> Any:
        try:
            return self._transformer.transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, TemplateError):
                raise e.orig_exc from None
            raise DocumentSyntaxError(f'Invalid value in rule {e.rule}: {e.orig_exc}') from e.orig_exc


class CompiledGrammar:
    """A synthesized grammar compiled into a lark Earley parser.

    Args:
        grammar: The synthesized grammar.
        config: The configuration of the parser.
    """

    def __init__(self, grammar: Grammar, config: CompilerConfig | None = None):
        self._grammar = grammar
        self._config = config if config is not None else CompilerConfig.default()
        text = grammar.to_lark()
        logger.debug('Compiling grammar with start %s:\n%s', grammar.start, text)
        self._lark = Lark(text, start=grammar.start, parser='earley', lexer=self._config.lexer, ambiguity='explicit', keep_all_tokens=True,
                          maybe_placeholders=False)

    @property
    def grammar(self):
        return self._grammar

    @property
    def config(self):
        return self._config

    @property
    def lark(self):
        return self._lark

    def parser(self) -> DocumentParser:
        return DocumentParser(self)

    def parse(self, text: str) -> Any:
        return self.parser().parse(text)


def compile_grammar(grammar: Grammar, config: CompilerConfig | None = None) -> CompiledGrammar:
    """Compiles a synthesized grammar.

    Args:
        grammar: The grammar to compile.
        config: The configuration of the parser.

    Returns:
        The compiled grammar.
    """
    return CompiledGrammar(grammar, config)


def parse_document(compiled: CompiledGrammar, text: str) -> Any:
    """Parses a document with a fresh parser of a compiled grammar.

    Args:
        compiled: The compiled grammar.
        text: The document.

    Returns:
        The value of the document.
    """
    return compiled.parser().parse(text)
