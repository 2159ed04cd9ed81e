"""Defines the synthesis of grammars from templates.

This module defines the grammar synthesizer, which walks the abstract syntax tree of a template together with the type bound by the
template, and emits a grammar parsing the documents the template can produce. Each node of the template becomes a rule: literal chunks
match their text, bindings match a value of the type of the bound property, and block bindings match the nested template against the nested
record type. The rule of the template itself builds the record from the values of the first binding of each property.

The module contains the following functions:
- ``find_first_binding(field_name, template)``
- ``synthesize(template, root_type, catalog, config)``

The module contains the following classes:
- ``GrammarSynthesizer``
"""
import logging
from functools import singledispatchmethod
from typing import Any

from libtdl.catalog import ModelCatalog, ClassDeclaration, EnumDeclaration, Property
from libtdl.compiler.compiler import CompilerConfig
from libtdl.errors import (FormatPatternError, UnresolvedPropertyError, InvalidFormattedTypeError, InvalidBooleanBindingError,
                           InvalidBlockBindingError, UnrecognizedNodeTypeError)
from libtdl.formats import FormatParser, datetime_format_parser, amount_format_parser, monetary_amount_format_parser
from libtdl.grammars import Grammar, GrammarRule, BASE, SEPARATOR, GENERATED_IDENTIFIER, literal, symbol_name
from libtdl.language import (TemplateAst, Chunk, Expr, Binding, FormattedBinding, BooleanBinding, ClauseBinding, WithBinding,
                             ListBinding)

logger = logging.getLogger(__name__)

PRIMITIVE_SYMBOLS = {'String': 'string', 'Double': 'double', 'Integer': 'integer', 'Long': 'long', 'Boolean': 'boolean'}

MONETARY_AMOUNT_TYPE = 'org.accordproject.money.MonetaryAmount'


def find_first_binding(field_name: str, template: TemplateAst) -> int | None:
    """Finds the first binding of a property in a template.

    Args:
        field_name: The name of the property.
        template: The template, whose top level nodes are searched.

    Returns:
        The index of the first binding of the property, or ``None`` if the template does not bind it.
    """
    for index, node in enumerate(template):
        if isinstance(node, Binding) and node.field_name == field_name:
            return index
    return None


def _first(d):
    return d[0]


def _values(d):
    return [value for value in d if value is not None and value is not SEPARATOR]


def _multiplicity(symbol, prop, separator=''):
    if prop.is_array and prop.is_optional:
        return f'[{separator}{symbol}+]', lambda d: _values(d) or None, 'd or None'
    if prop.is_array:
        return f'{separator}{symbol}+', _values, 'd'
    if prop.is_optional:
        return f'[{separator}{symbol}]', lambda d: next(iter(_values(d)), None), 'd[-1] if d else None'
    return f'{separator}{symbol}', lambda d: _values(d)[0], 'd[0]'


def _record_action(fqn, identifier, slots):
    def action(d):
        record = {'$class': fqn}
        if identifier is not None:
            record[identifier] = GENERATED_IDENTIFIER
        for name, index in slots.items():
            record[name] = d[index]
        return record
    return action


def _record_source(fqn, identifier, slots):
    entries = [f'"$class": "{fqn}"']
    if identifier is not None:
        entries.append(f'"{identifier}": uuid4()')
    entries.extend(f'"{name}": d[{index}]' for name, index in slots.items())
    return '{' + ', '.join(entries) + '}'


class GrammarSynthesizer:
    """Synthesizes the grammar of the documents produced by a template.

    Args:
        catalog: The catalog holding the types bound by templates.
        config: The configuration of the synthesis.
    """

    def __init__(self, catalog: ModelCatalog, config: CompilerConfig | None = None):
        self.catalog = catalog
        self.config = config if config is not None else CompilerConfig.default()

    def synthesize(self, template: TemplateAst, root_type: str | ClassDeclaration) -> Grammar:
        """Synthesizes the grammar of a template.

        Args:
            template: The abstract syntax tree of the template.
            root_type: The record type bound by the template, or its fully qualified name.

        Returns:
            The grammar, whose start rule is named after the root type.

        Raises:
            UnresolvedPropertyError: If the template binds a property the bound type does not declare.
            InvalidFormattedTypeError: If a formatted binding binds a property whose type has no format.
            InvalidBooleanBindingError: If a boolean binding binds a property that is not a Boolean.
            InvalidBlockBindingError: If a block binding binds a property that is not a record.
            FormatPatternError: If a format pattern is invalid.
            UnrecognizedNodeTypeError: If the template holds a node of unknown type.
        """
        declaration = root_type if isinstance(root_type, ClassDeclaration) else self.catalog.get_class(root_type)
        start = symbol_name(declaration.fully_qualified_name)
        grammar = Grammar(start)
        grammar.include(BASE)
        self._record_rules(grammar, template.nodes, declaration, start, 'rule')
        logger.debug('Synthesized %d text rules and %d model rules for %s', len(grammar.text_rules), len(grammar.model_rules),
                     declaration.fully_qualified_name)
        return grammar

    def _record_rules(self, grammar, nodes, declaration, name, prefix):
        elements = []
        positions = {}
        for index, node in enumerate(nodes):
            if isinstance(node, Chunk) and not node.value:
                continue
            positions[index] = len(elements)
            elements.append((node, f'{prefix}{index}'))

        template = TemplateAst(tuple(nodes))
        slots = {}
        for prop in declaration.properties:
            index = find_first_binding(prop.name, template)
            if index is not None:
                slots[prop.name] = positions[index]
        identifier = declaration.get_identifier_field_name()
        if not self.config.generate_identifiers or identifier in slots:
            identifier = None
        fqn = declaration.fully_qualified_name
        grammar.add_text_rule(GrammarRule(name, ' '.join(element for _, element in elements), _record_action(fqn, identifier, slots),
                                          _record_source(fqn, identifier, slots)))

        for node, element in elements:
            self._element(node, grammar, declaration, element)

    @singledispatchmethod
    def _element(self, node: Any, grammar: Grammar, declaration: ClassDeclaration, name: str) -> None:
        raise UnrecognizedNodeTypeError(f'Unrecognized type {type(node).__name__}', getattr(node, 'line', None), getattr(node, 'column', None))

    @_element.register
    def _(self, node: Chunk, grammar, declaration, name):
        grammar.add_text_rule(GrammarRule(name, literal(node.value), _first, 'd[0]'))

    @_element.register
    def _(self, node: Expr, grammar, declaration, name):
        grammar.add_text_rule(GrammarRule(name, 'any', _first, 'd[0]'))

    @_element.register
    def _(self, node: Binding, grammar, declaration, name):
        prop = self._property(declaration, node)
        self._binding_rule(grammar, name, self._type_symbol(grammar, prop, node), prop)

    @_element.register
    def _(self, node: FormattedBinding, grammar, declaration, name):
        prop = self._property(declaration, node)
        if node.format is None:
            symbol = self._type_symbol(grammar, prop, node)
        else:
            symbol = self._format_symbol(grammar, self._format_parser(prop, node), node.format, node)
        self._binding_rule(grammar, name, symbol, prop)

    @_element.register
    def _(self, node: BooleanBinding, grammar, declaration, name):
        prop = self._property(declaration, node)
        if prop.type != 'Boolean':
            raise InvalidBooleanBindingError(f'An if block can only be used with a boolean property. Property {prop.name} has type {prop.type}',
                                             node.line, node.column, node.field_name)
        if node.else_literal is None:
            rule = GrammarRule(name, f'[{literal(node.literal)}]', lambda d: bool(d), 'bool(d)')
        else:
            when_true = node.literal
            rule = GrammarRule(name, f'{literal(node.literal)} | {literal(node.else_literal)}', lambda d: d[0] == when_true,
                               f'd[0] == {literal(when_true)}')
        grammar.add_text_rule(rule)

    @_element.register
    def _(self, node: ClauseBinding, grammar, declaration, name):
        self._block_rules(grammar, declaration, node, name, node.template.nodes)

    @_element.register
    def _(self, node: WithBinding, grammar, declaration, name):
        self._block_rules(grammar, declaration, node, name, node.template.nodes)

    @_element.register
    def _(self, node: ListBinding, grammar, declaration, name):
        nodes = node.template.nodes
        if node.separator:
            nodes = (Chunk(node.line, node.column, node.separator),) + nodes
        self._block_rules(grammar, declaration, node, name, nodes)

    def _block_rules(self, grammar, declaration, node, name, nodes):
        prop = self._property(declaration, node)
        nested = self._nested_class(prop, node)
        nested_name = f'{name}_{symbol_name(node.field_name)}'
        self._record_rules(grammar, nodes, nested, nested_name, nested_name)
        self._binding_rule(grammar, name, nested_name, prop)

    def _binding_rule(self, grammar, name, symbol, prop):
        tokens, action, source = _multiplicity(symbol, prop)
        grammar.add_text_rule(GrammarRule(name, tokens, action, source))

    def _property(self, declaration: ClassDeclaration, node: Binding) -> Property:
        prop = declaration.get_property(node.field_name)
        if prop is None:
            raise UnresolvedPropertyError(f"Template references a property '{node.field_name}' that is not declared in the template model "
                                          f"'{declaration.fully_qualified_name}'", node.line, node.column, node.field_name)
        return prop

    def _nested_class(self, prop: Property, node: Binding) -> ClassDeclaration:
        if prop.is_primitive or prop.is_relationship or prop.is_enum:
            raise InvalidBlockBindingError(f'A block can only be used with a record property. Property {prop.name} has type {prop.type}',
                                           node.line, node.column, node.field_name)
        declaration = self._declaration(prop.fully_qualified_type_name, node)
        if not isinstance(declaration, ClassDeclaration):
            raise InvalidBlockBindingError(f'A block can only be used with a record property. Property {prop.name} has type {prop.type}',
                                           node.line, node.column, node.field_name)
        return declaration

    def _declaration(self, fqn: str, node: Binding) -> ClassDeclaration | EnumDeclaration:
        try:
            return self.catalog.get_type(fqn)
        except KeyError:
            raise UnresolvedPropertyError(f"Type '{fqn}' of property '{node.field_name}' is not declared in the model catalog", node.line,
                                          node.column, node.field_name) from None

    def _format_parser(self, prop: Property, node: FormattedBinding) -> FormatParser:
        if prop.type == 'DateTime':
            return datetime_format_parser
        if prop.type == 'Double':
            return amount_format_parser
        if prop.fully_qualified_type_name == MONETARY_AMOUNT_TYPE or prop.type == 'MonetaryAmount':
            return monetary_amount_format_parser
        raise InvalidFormattedTypeError('Formatted types are currently only supported for DateTime, Double and MonetaryAmount properties. '
                                        f'Property {prop.name} has type {prop.type}', node.line, node.column, node.field_name)

    def _format_symbol(self, grammar: Grammar, parser: FormatParser, pattern: str, node: Binding) -> str:
        name = parser.rule_name(pattern)
        if name not in grammar:
            try:
                rules = parser.build_rules(pattern)
            except FormatPatternError as e:
                raise e.locate(node.line, node.column)
            for fragment in parser.fragments:
                grammar.include(fragment)
            for rule in rules:
                grammar.add_model_rule(rule)
        return name

    def _type_symbol(self, grammar: Grammar, prop: Property, node: Binding) -> str:
        if prop.is_relationship:
            return 'string'
        if prop.type == 'DateTime':
            return self._format_symbol(grammar, datetime_format_parser, self.config.default_datetime_format, node)
        if prop.type in PRIMITIVE_SYMBOLS:
            return PRIMITIVE_SYMBOLS[prop.type]
        return self._model_symbol(grammar, prop.fully_qualified_type_name, node)

    def _model_symbol(self, grammar: Grammar, fqn: str, node: Binding) -> str:
        declaration = self._declaration(fqn, node)
        if self.catalog.is_enum(fqn):
            name = f'enum_{symbol_name(fqn)}'
            grammar.add_model_rule(GrammarRule(name, ' | '.join(literal(value) for value in declaration.values), lambda d: str(d[0]), 'd[0]'))
            return name

        name = f'concept_{symbol_name(fqn)}'
        if name in grammar:
            return name
        properties = [(prop, f'{name}_{symbol_name(prop.name)}') for prop in declaration.properties]
        slots = {prop.name: index for index, (prop, _) in enumerate(properties)}
        grammar.add_model_rule(GrammarRule(name, ' '.join(element for _, element in properties), _record_action(fqn, None, slots),
                                           _record_source(fqn, None, slots)))
        for index, (prop, element) in enumerate(properties):
            tokens, action, source = _multiplicity(self._type_symbol(grammar, prop, node), prop, 'ws ' if index > 0 else '')
            grammar.add_model_rule(GrammarRule(element, tokens, action, source))
        return name


def synthesize(template: TemplateAst, root_type: str | ClassDeclaration, catalog: ModelCatalog, config: CompilerConfig | None = None) -> Grammar:
    """Synthesizes the grammar of a template.

    Args:
        template: The abstract syntax tree of the template.
        root_type: The record type bound by the template, or its fully qualified name.
        catalog: The catalog holding the types bound by the template.
        config: The configuration of the synthesis.

    Returns:
        The grammar of the documents produced by the template.

    Examples:
        >>> from libtdl.language import parse_template
        >>> catalog = ModelCatalog.from_dict({'namespace': 'org.acme', 'declarations': [
        ...     {'name': 'Greeting', 'kind': 'concept', 'properties': [{'name': 'name', 'type': 'String'}]}]})
        >>> print(synthesize(parse_template('Hello {{name}}!'), 'org.acme.Greeting', catalog).to_lark())
        org_acme_greeting: rule0 rule1 rule2
        rule0: "Hello "
        rule1: string
        rule2: "!"
        ...
    """
    return GrammarSynthesizer(catalog, config).synthesize(template, root_type)
