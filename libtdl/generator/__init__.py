"""Defines the generation of documents from templates.

This package defines the text generator, which writes the record bound by a template as a document the template's grammar parses back.

The package contains the following classes:

- ``TextGenerator``

The package contains the following functions:

- ``render(template, data, catalog)``
- ``format_date(value)``
- ``format_double(value)``
- ``format_integer(value)``
"""
from .generator import TextGenerator, render, format_date, format_double, format_integer

__all__ = ['TextGenerator', 'render', 'format_date', 'format_double', 'format_integer']
