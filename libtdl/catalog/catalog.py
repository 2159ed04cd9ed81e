"""Defines an in-memory model catalog.

This module defines the type information the grammar synthesizer and the text generator read: properties, record (class) declarations and
enumerations, grouped in a catalog indexed by fully qualified name. Catalogs are usually built from plain dictionaries with
``ModelCatalog.from_dict``.

The module contains the following classes:
- ``Property``
- ``ClassDeclaration``
- ``EnumDeclaration``
- ``ModelCatalog``

The module contains the following objects:
- ``PRIMITIVE_TYPES``
- ``MONEY_MODEL``
"""
from __future__ import annotations

from typing import Iterable

PRIMITIVE_TYPES = frozenset({'String', 'Double', 'Integer', 'Long', 'Boolean', 'DateTime'})

MONEY_MODEL = {
    'namespace': 'org.accordproject.money',
    'declarations': [
        {'name': 'CurrencyCode', 'kind': 'enum', 'values': ['EUR', 'GBP', 'JPY', 'PLN', 'USD', 'YEN']},
        {'name': 'MonetaryAmount', 'kind': 'concept', 'properties': [{'name': 'doubleValue', 'type': 'Double'},
                                                                      {'name': 'currencyCode', 'type': 'CurrencyCode'}]}
    ]
}
"""
The money namespace, holding the ``MonetaryAmount`` concept targeted by monetary amount formats.
"""


class Property:
    """A property of a record type.

    Args:
        name: The name of the property.
        type: The declared type name, either a primitive type name, a name local to the namespace or a fully qualified name.
        namespace: The namespace of the declaring type, used to resolve local type names.
        is_array: Whether the property holds a list of values.
        is_optional: Whether the property may be absent.
        is_enum: Whether the type of the property is an enumeration.
        is_relationship: Whether the property is a reference to another record, held by its identifier.
    """

    def __init__(self, name: str, type: str, namespace: str | None = None, is_array: bool = False, is_optional: bool = False,
                 is_enum: bool = False, is_relationship: bool = False):
        self._name = name
        self._type = type
        self._namespace = namespace
        self._is_array = is_array
        self._is_optional = is_optional
        self._is_enum = is_enum
        self._is_relationship = is_relationship

    @property
    def name(self):
        return self._name

    @property
    def type(self):
        return self._type

    @property
    def is_array(self):
        return self._is_array

    @property
    def is_optional(self):
        return self._is_optional

    @property
    def is_enum(self):
        return self._is_enum

    @property
    def is_relationship(self):
        return self._is_relationship

    @property
    def is_primitive(self):
        return self._type in PRIMITIVE_TYPES

    @property
    def fully_qualified_type_name(self) -> str:
        if self.is_primitive or '.' in self._type or self._namespace is None:
            return self._type
        return f'{self._namespace}.{self._type}'

    def __repr__(self):
        return f'Property({self._name!r}, {self._type!r})'


class ClassDeclaration:
    """A record type: a named, ordered collection of properties.

    Args:
        namespace: The namespace the type is declared in.
        name: The short name of the type.
        properties: The properties of the type, in declaration order.
        identifier_field: The name of the property identifying instances of the type, if any.
    """

    def __init__(self, namespace: str, name: str, properties: Iterable[Property] = (), identifier_field: str | None = None):
        self._namespace = namespace
        self._name = name
        self._properties = tuple(properties)
        self._identifier_field = identifier_field

    @property
    def namespace(self):
        return self._namespace

    @property
    def name(self):
        return self._name

    @property
    def properties(self) -> tuple[Property, ...]:
        return self._properties

    @property
    def fully_qualified_name(self) -> str:
        return f'{self._namespace}.{self._name}'

    def get_property(self, name: str) -> Property | None:
        """Looks up a property by name.

        Args:
            name: The name of the property.

        Returns:
            The property, or ``None`` if the type declares no such property.
        """
        for prop in self._properties:
            if prop.name == name:
                return prop
        return None

    def get_identifier_field_name(self) -> str | None:
        return self._identifier_field

    def __repr__(self):
        return f'ClassDeclaration({self.fully_qualified_name!r})'


class EnumDeclaration:
    """An enumeration: a named, ordered collection of literal values."""

    def __init__(self, namespace: str, name: str, values: Iterable[str]):
        self._namespace = namespace
        self._name = name
        self._values = tuple(values)

    @property
    def namespace(self):
        return self._namespace

    @property
    def name(self):
        return self._name

    @property
    def values(self) -> tuple[str, ...]:
        return self._values

    @property
    def fully_qualified_name(self) -> str:
        return f'{self._namespace}.{self._name}'

    def __repr__(self):
        return f'EnumDeclaration({self.fully_qualified_name!r})'


class ModelCatalog:
    """A collection of type declarations indexed by fully qualified name.

    Examples:
        >>> catalog = ModelCatalog.from_dict({'namespace': 'org.acme', 'declarations': [
        ...     {'name': 'Unit', 'kind': 'enum', 'values': ['days', 'weeks']},
        ...     {'name': 'Duration', 'kind': 'concept', 'properties': [{'name': 'amount', 'type': 'Long'}, {'name': 'unit', 'type': 'Unit'}]}]})
        >>> catalog.get_class('org.acme.Duration').get_property('unit').is_enum
        True
    """

    def __init__(self, declarations: Iterable[ClassDeclaration | EnumDeclaration] = ()):
        self._declarations: dict[str, ClassDeclaration | EnumDeclaration] = {}
        for declaration in declarations:
            self.add(declaration)

    def add(self, declaration: ClassDeclaration | EnumDeclaration) -> None:
        self._declarations[declaration.fully_qualified_name] = declaration

    def get_type(self, fqn: str) -> ClassDeclaration | EnumDeclaration:
        """Looks up a declaration by fully qualified name.

        Args:
            fqn: The fully qualified name of the type.

        Returns:
            The declaration of the type.

        Raises:
            KeyError: If no type with that name was declared.
        """
        if fqn not in self._declarations:
            raise KeyError("Type not found", fqn)
        return self._declarations[fqn]

    def get_class(self, fqn: str) -> ClassDeclaration:
        declaration = self.get_type(fqn)
        if not isinstance(declaration, ClassDeclaration):
            raise TypeError(f"Type {fqn} is not a class declaration")
        return declaration

    def is_enum(self, fqn: str) -> bool:
        return isinstance(self._declarations.get(fqn), EnumDeclaration)

    def __contains__(self, fqn):
        return fqn in self._declarations

    def __iter__(self):
        return iter(self._declarations.values())

    @staticmethod
    def from_dict(*models: dict) -> ModelCatalog:
        """Builds a catalog from model dictionaries.

        Each model holds a ``namespace`` and a list of ``declarations``. A declaration has a ``name`` and a ``kind`` (``enum`` for
        enumerations, anything else for record types). Enumerations list their ``values``; record types list their ``properties``, each with
        a ``name``, a ``type`` and the optional flags ``array``, ``optional`` and ``relationship``, and may name an ``identifier``
        property.

        Args:
            models: The model dictionaries.

        Returns:
            The catalog holding every declaration of the models.
        """
        enums = {f"{model['namespace']}.{declaration['name']}" for model in models for declaration in model['declarations']
                 if declaration.get('kind') == 'enum'}
        catalog = ModelCatalog()
        for model in models:
            namespace = model['namespace']
            for declaration in model['declarations']:
                if declaration.get('kind') == 'enum':
                    catalog.add(EnumDeclaration(namespace, declaration['name'], declaration['values']))
                    continue
                identifier = declaration.get('identifier')
                properties = []
                for p in declaration.get('properties', []):
                    type_name = p['type'] if '.' in p['type'] else f"{namespace}.{p['type']}"
                    relationship = p.get('relationship', False)
                    properties.append(Property(p['name'], p['type'], namespace, is_array=p.get('array', False),
                                               is_optional=p.get('optional', False), is_enum=type_name in enums and not relationship,
                                               is_relationship=relationship))
                catalog.add(ClassDeclaration(namespace, declaration['name'], properties, identifier))
        return catalog
