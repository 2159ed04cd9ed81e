import importlib.metadata

from .catalog import Property, ClassDeclaration, EnumDeclaration, ModelCatalog, MONEY_MODEL
from .compiler import CompilerConfig, GrammarSynthesizer, CompiledGrammar, DocumentParser, synthesize, compile_grammar, parse_document
from .errors import (TemplateError, TemplateSyntaxError, AmbiguousTemplateParseError, UnresolvedPropertyError, FormatPatternError,
                     DuplicateFormatFieldError, InvalidFormattedTypeError, InvalidBooleanBindingError, InvalidBlockBindingError,
                     UnrecognizedNodeTypeError, DocumentSyntaxError, AmbiguousDocumentParseError)
from .formats import DateTimeFormatParser, AmountFormatParser, MonetaryAmountFormatParser
from .generator import TextGenerator, render
from .grammars import Grammar, GrammarRule
from .language import parse_template, TemplateAst
from .normalizer import normalize
from .template import Template

__all__ = ['Property', 'ClassDeclaration', 'EnumDeclaration', 'ModelCatalog', 'MONEY_MODEL', 'CompilerConfig', 'GrammarSynthesizer',
           'CompiledGrammar', 'DocumentParser', 'synthesize', 'compile_grammar', 'parse_document', 'TemplateError', 'TemplateSyntaxError',
           'AmbiguousTemplateParseError', 'UnresolvedPropertyError', 'FormatPatternError', 'DuplicateFormatFieldError', 'InvalidFormattedTypeError',
           'InvalidBooleanBindingError', 'InvalidBlockBindingError', 'UnrecognizedNodeTypeError', 'DocumentSyntaxError',
           'AmbiguousDocumentParseError', 'DateTimeFormatParser', 'AmountFormatParser', 'MonetaryAmountFormatParser', 'TextGenerator', 'render',
           'Grammar', 'GrammarRule', 'parse_template', 'TemplateAst', 'normalize', 'Template']

__version__ = importlib.metadata.version('libtdl')
