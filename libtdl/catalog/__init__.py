"""Defines the model catalog consulted when compiling templates.

This package defines the in-memory representation of the types bound by templates: record types with their properties, and enumerations.

The package contains the following classes:

- ``Property``
- ``ClassDeclaration``
- ``EnumDeclaration``
- ``ModelCatalog``

The package contains the following objects:

- ``PRIMITIVE_TYPES``
- ``MONEY_MODEL``
"""
from .catalog import Property, ClassDeclaration, EnumDeclaration, ModelCatalog, PRIMITIVE_TYPES, MONEY_MODEL

__all__ = ['Property', 'ClassDeclaration', 'EnumDeclaration', 'ModelCatalog', 'PRIMITIVE_TYPES', 'MONEY_MODEL']
