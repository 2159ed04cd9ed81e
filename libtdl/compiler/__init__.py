"""Defines the grammar synthesizer and the grammar compiler.

This package defines the synthesis of grammars from templates and model catalogs, the compilation of synthesized grammars into Earley parsers,
and the parsing of documents with them.

The package contains the following classes:

- ``CompilerConfig``
- ``GrammarSynthesizer``
- ``CompiledGrammar``
- ``DocumentParser``

The package contains the following functions:

- ``synthesize(template, root_type, catalog, config)``
- ``find_first_binding(field_name, template)``
- ``compile_grammar(grammar, config)``
- ``parse_document(compiled, text)``
"""
from .compiler import CompilerConfig, CompiledGrammar, DocumentParser, compile_grammar, parse_document
from .synthesizer import GrammarSynthesizer, synthesize, find_first_binding

__all__ = ['CompilerConfig', 'GrammarSynthesizer', 'CompiledGrammar', 'DocumentParser', 'synthesize', 'find_first_binding', 'compile_grammar',
           'parse_document']
