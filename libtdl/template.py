"""Defines templates, the entry point of the package.

This module defines the ``Template`` class, which parses a TDL source once, synthesizes and compiles its grammar once, and then parses and
generates any number of documents.

The module contains the following classes:
- ``Template``
"""
from __future__ import annotations

from typing import Any

from libtdl.catalog import ModelCatalog, ClassDeclaration
from libtdl.compiler import CompilerConfig, GrammarSynthesizer, compile_grammar
from libtdl.generator import TextGenerator
from libtdl.language import parse_template
from libtdl import normalizer


class Template:
    """A template bound to a record type.

    Args:
        source: The TDL source of the template.
        catalog: The catalog holding the types bound by the template.
        root_type: The fully qualified name of the record type bound by the template.
        config: The configuration of the synthesis and of the parser.

    Examples:
        >>> catalog = ModelCatalog.from_dict({'namespace': 'org.acme', 'declarations': [
        ...     {'name': 'Greeting', 'kind': 'concept', 'properties': [{'name': 'name', 'type': 'String'}]}]})
        >>> template = Template('Hello {{name}}!', catalog, 'org.acme.Greeting')
        >>> template.parse('Hello "World"!')
        {'$class': 'org.acme.Greeting', 'name': 'World'}
        >>> template.draft({'$class': 'org.acme.Greeting', 'name': 'Alice'})
        'Hello "Alice"!'
    """

    def __init__(self, source: str, catalog: ModelCatalog, root_type: str | ClassDeclaration, config: CompilerConfig | None = None):
        self._source = source
        self._catalog = catalog
        self._config = config if config is not None else CompilerConfig.default()
        self._ast = parse_template(source)
        self._grammar = GrammarSynthesizer(catalog, self._config).synthesize(self._ast, root_type)
        self._compiled = compile_grammar(self._grammar, self._config)

    @property
    def source(self):
        return self._source

    @property
    def ast(self):
        return self._ast

    @property
    def grammar(self):
        return self._grammar

    @property
    def compiled(self):
        return self._compiled

    def export(self) -> list[dict[str, str]]:
        return self._grammar.export()

    def parse(self, text: str, normalize: bool = False, utc_offset: int = 0) -> Any:
        """Parses a document produced by the template.

        Args:
            text: The document.
            normalize: If true, convert parsed dates and amounts into native values.
            utc_offset: The offset from UTC, in minutes, of dates parsed without a timezone.

        Returns:
            The record bound by the template.
        """
        result = self._compiled.parse(text)
        return normalizer.normalize(result, utc_offset) if normalize else result

    def draft(self, data: dict) -> str:
        """Generates a document from the record bound by the template.

        Args:
            data: The record, whose ``$class`` names its type.

        Returns:
            The document.
        """
        return TextGenerator(self._catalog).render(self._ast, data)
