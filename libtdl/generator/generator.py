"""Defines the generation of documents from templates and data.

This module defines the text generator, the inverse of document parsing: it walks the abstract syntax tree of a template, copying literal
chunks and replacing each binding with the value of the bound property written the way the synthesized grammars parse it back. Dates are
always written ``MM/DD/YYYY``, whatever the format of the binding: custom formats are only used for parsing.

The module contains the following functions:
- ``format_date(value)``
- ``format_double(value)``
- ``format_integer(value)``
- ``render(template, data, catalog)``

The module contains the following classes:
- ``TextGenerator``
"""
import datetime
import json
from decimal import Decimal
from functools import singledispatch, singledispatchmethod
from typing import Any

from libtdl.catalog import ModelCatalog, ClassDeclaration, EnumDeclaration, Property
from libtdl.errors import UnresolvedPropertyError, UnrecognizedNodeTypeError, InvalidBlockBindingError
from libtdl.language import TemplateAst, Chunk, Expr, Binding, BooleanBinding, ClauseBinding, WithBinding, ListBinding


@singledispatch
def format_date(value: Any) -> str:
    """Writes a date as ``MM/DD/YYYY``.

    Args:
        value: The date, as a ``date`` or ``datetime``, an ISO 8601 string or a ``ParsedDateTime`` record.

    Returns:
        The date written ``MM/DD/YYYY``.

    Examples:
        >>> format_date('2018-01-02T10:00:00.000Z')
        '01/02/2018'
    """
    raise TypeError(f"Cannot format value of type {type(value)} as a date")


@format_date.register
def _(value: datetime.date) -> str:
    return f'{value.month:02d}/{value.day:02d}/{value.year:04d}'


@format_date.register
def _(value: str) -> str:
    return format_date(datetime.datetime.fromisoformat(value.replace('Z', '+00:00')))


@format_date.register
def _(value: dict) -> str:
    return f"{value['month']:02d}/{value['day']:02d}/{value['year']:04d}"


def format_double(value: float) -> str:
    """Writes a number in positional decimal notation.

    Examples:
        >>> format_double(1e20)
        '100000000000000000000'
        >>> format_double(2.5)
        '2.5'
    """
    return format(Decimal(repr(float(value))).normalize(), 'f')


def format_integer(value: int) -> str:
    """Writes a whole number, raising ``ValueError`` if the value has a fractional part."""
    if int(value) != value:
        raise ValueError(f'Cannot format non-integral value {value!r} as an integer')
    return str(int(value))


SCALAR_FORMATTERS = {
    'String': lambda value: json.dumps(value, ensure_ascii=False),
    'Double': format_double,
    'Integer': format_integer,
    'Long': format_integer,
    'Boolean': lambda value: 'true' if value else 'false',
    'DateTime': format_date,
}


class TextGenerator:
    """Generates documents from templates and data.

    Args:
        catalog: The catalog holding the types bound by templates.
    """

    def __init__(self, catalog: ModelCatalog):
        self.catalog = catalog

    def render(self, template: TemplateAst, data: dict) -> str:
        """Generates a document.

        Args:
            template: The abstract syntax tree of the template.
            data: The record bound by the template, whose ``$class`` names its type.

        Returns:
            The document.

        Raises:
            UnresolvedPropertyError: If the template binds a property the type of the record does not declare.
            UnrecognizedNodeTypeError: If the template holds a node of unknown type.
            ValueError: If an Integer or Long property holds a non-integral number.
        """
        return self._render_nodes(template.nodes, self.catalog.get_class(data['$class']), data)

    def _render_nodes(self, nodes, declaration, data):
        return ''.join(self._node(node, declaration, data) for node in nodes)

    @singledispatchmethod
    def _node(self, node: Any, declaration: ClassDeclaration, data: dict) -> str:
        raise UnrecognizedNodeTypeError(f'Unrecognized item {type(node).__name__}', getattr(node, 'line', None), getattr(node, 'column', None))

    @_node.register
    def _(self, node: Chunk, declaration, data):
        return node.value

    @_node.register
    def _(self, node: Expr, declaration, data):
        return '{{%' + node.expression + '%}}'

    @_node.register
    def _(self, node: Binding, declaration, data):
        return self.render_value(self._property(declaration, node), data.get(node.field_name))

    @_node.register
    def _(self, node: BooleanBinding, declaration, data):
        self._property(declaration, node)
        if data.get(node.field_name):
            return node.literal
        return node.else_literal or ''

    @_node.register
    def _(self, node: ClauseBinding, declaration, data):
        return self._render_block(node, declaration, data, '')

    @_node.register
    def _(self, node: WithBinding, declaration, data):
        return self._render_block(node, declaration, data, '')

    @_node.register
    def _(self, node: ListBinding, declaration, data):
        return self._render_block(node, declaration, data, node.separator)

    def _render_block(self, node, declaration, data, separator):
        prop = self._property(declaration, node)
        value = data.get(node.field_name)
        if value is None:
            return ''
        items = value if prop.is_array else [value]
        return ''.join(separator + self._render_nodes(node.template.nodes, self._nested_class(prop, item, node), item) for item in items)

    def _property(self, declaration: ClassDeclaration, node: Binding) -> Property:
        prop = declaration.get_property(node.field_name)
        if prop is None:
            raise UnresolvedPropertyError(f"Template references a property '{node.field_name}' that is not declared in the template model "
                                          f"'{declaration.fully_qualified_name}'", node.line, node.column, node.field_name)
        return prop

    def _nested_class(self, prop: Property, value: dict, node: Binding) -> ClassDeclaration:
        fqn = value.get('$class', prop.fully_qualified_type_name)
        declaration = self.catalog.get_type(fqn)
        if not isinstance(declaration, ClassDeclaration):
            raise InvalidBlockBindingError(f'A block can only be used with a record property. Property {prop.name} has type {prop.type}',
                                           node.line, node.column, node.field_name)
        return declaration

    def render_value(self, prop: Property, value: Any) -> str:
        """Writes the value of a property.

        Args:
            prop: The property.
            value: The value of the property.

        Returns:
            The value as written in documents: nothing for absent values, the items one after the other for arrays.
        """
        if value is None:
            return ''
        if prop.is_array:
            return ''.join(self._render_scalar(prop, item) for item in value)
        return self._render_scalar(prop, value)

    def _render_scalar(self, prop, value):
        if prop.is_relationship:
            return json.dumps(str(value), ensure_ascii=False)
        if prop.type in SCALAR_FORMATTERS:
            return SCALAR_FORMATTERS[prop.type](value)
        declaration = self.catalog.get_type(prop.fully_qualified_type_name)
        if isinstance(declaration, EnumDeclaration):
            return str(value)
        if isinstance(value, dict) and value.get('$class') in self.catalog:
            declaration = self.catalog.get_class(value['$class'])
        return self._render_record(declaration, value)

    def _render_record(self, declaration, value):
        parts = []
        for index, prop in enumerate(declaration.properties):
            if value.get(prop.name) is None:
                continue
            parts.append((' ' if index > 0 else '') + self.render_value(prop, value[prop.name]))
        return ''.join(parts)


def render(template: TemplateAst, data: dict, catalog: ModelCatalog) -> str:
    """Generates a document from a template and the record it binds.

    Args:
        template: The abstract syntax tree of the template.
        data: The record bound by the template, whose ``$class`` names its type.
        catalog: The catalog holding the types bound by the template.

    Returns:
        The document.
    """
    return TextGenerator(catalog).render(template, data)
