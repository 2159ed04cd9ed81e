"""Defines the errors raised while compiling templates and parsing documents.

This module defines the exception hierarchy of the package. Every error optionally carries the source position (line and column) of the
template node or document character that caused it, and the offending token when one is known.

The module contains the following classes:
- ``TemplateError``
- ``TemplateSyntaxError``
- ``AmbiguousTemplateParseError``
- ``UnresolvedPropertyError``
- ``FormatPatternError``
- ``DuplicateFormatFieldError``
- ``InvalidFormattedTypeError``
- ``InvalidBooleanBindingError``
- ``InvalidBlockBindingError``
- ``UnrecognizedNodeTypeError``
- ``DocumentSyntaxError``
- ``AmbiguousDocumentParseError``

The module contains the following functions:
- ``input_location(error, text)``
"""
from __future__ import annotations

from lark.exceptions import UnexpectedInput, UnexpectedCharacters


class TemplateError(Exception):
    """Base class of every error raised by the package.

    Attributes:
        message: The description of the error, without position.
        line: The 1-based line of the error, if known.
        column: The 1-based column of the error, if known.
        token: The offending token or character, if known.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None, token: str | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.token = token

    def locate(self, line: int | None, column: int | None) -> TemplateError:
        """Attaches a source position to the error, unless it already has one.

        Args:
            line: The line to attach.
            column: The column to attach.

        Returns:
            The error itself.
        """
        if self.line is None:
            self.line = line
            self.column = column
        return self

    @property
    def file_location(self) -> dict | None:
        if self.line is None:
            return None
        end = self.column + len(self.token) if self.token else self.column
        return {'start': {'line': self.line, 'column': self.column}, 'end': {'line': self.line, 'column': end}}

    def __str__(self):
        if self.line is None:
            return self.message
        return f'{self.message} (line {self.line}, column {self.column})'


class TemplateSyntaxError(TemplateError):
    """The template source is not valid TDL."""


class AmbiguousTemplateParseError(TemplateError):
    """The TDL grammar produced more than one derivation for a template source."""


class UnresolvedPropertyError(TemplateError):
    """The template references a property that is not declared in the bound type."""


class FormatPatternError(TemplateError):
    """A format pattern cannot be turned into a grammar rule."""


class DuplicateFormatFieldError(FormatPatternError):
    """The same logical field occurs twice in one format pattern.

    Attributes:
        field: The name of the duplicated field.
    """

    def __init__(self, field: str, kind: str, pattern: str):
        super().__init__(f'Duplicate {field} field in {kind} format string: {pattern}')
        self.field = field


class InvalidFormattedTypeError(TemplateError):
    """A formatted binding is applied to a property whose type has no format builder."""


class InvalidBooleanBindingError(TemplateError):
    """A boolean binding is applied to a property that is not a Boolean."""


class InvalidBlockBindingError(TemplateError):
    """A clause, with or list block is applied to a property that is not a record."""


class UnrecognizedNodeTypeError(TemplateError):
    """A template node of unknown type was found."""


class DocumentSyntaxError(TemplateError):
    """The document has no derivation under the template grammar."""


class AmbiguousDocumentParseError(TemplateError):
    """The document has several derivations that produce different values.

    Attributes:
        derivations: The number of derivations found.
    """

    def __init__(self, derivations: int):
        super().__init__(f'Ambiguous text: found {derivations} parses with different values')
        self.derivations = derivations


def input_location(error: UnexpectedInput, text: str) -> tuple[int, int, str | None]:
    """Computes the position and offending token of a lark parse error.

    Args:
        error: The error raised by the lark parser.
        text: The text that was being parsed.

    Returns:
        The line, column and offending token of the error. A truncated input is located at its end, with no token.
    """
    if isinstance(error, UnexpectedCharacters):
        return error.line, error.column, error.char
    token = getattr(error, 'token', None)
    line = getattr(error, 'line', -1)
    if line is not None and line > 0:
        return line, error.column, str(token) if token is not None else None
    lines = text.split('\n')
    return len(lines), len(lines[-1]) + 1, None
