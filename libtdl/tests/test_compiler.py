import uuid

import pytest

from libtdl.compiler import CompilerConfig, compile_grammar, parse_document, synthesize
from libtdl.errors import DocumentSyntaxError, AmbiguousDocumentParseError
from libtdl.language import parse_template


def test_config():
    assert CompilerConfig.default().lexer == 'dynamic'
    assert CompilerConfig.default().default_datetime_format == 'MM/DD/YYYY'
    assert CompilerConfig.default().generate_identifiers is True
    assert CompilerConfig.exhaustive().lexer == 'dynamic_complete'
    with pytest.raises(ValueError):
        CompilerConfig(lexer='basic')


@pytest.mark.parametrize('source, root_type, text, expected', [
    ('Hello {{name}}!', 'org.acme.Greeting', 'Hello "World"!', {'name': 'World'}),
    ('Hello {{name}}!', 'org.acme.Greeting', 'Hello "W\\"orld\\u00e9"!', {'name': 'W"orldé'}),
    ('Wait {{delay}}.', 'org.acme.Shipment', 'Wait 10 days.', {'delay': {'$class': 'org.acme.Duration', 'amount': 10, 'unit': 'days'}}),
    ('Unit: {{unit}}', 'org.acme.Shipment', 'Unit: weeks', {'unit': 'weeks'}),
    ('Penalty {{penalty}}%', 'org.acme.LateDelivery', 'Penalty -10.5%', {'penalty': -10.5}),
    ('Due {{deliveryDate}}.', 'org.acme.LateDelivery', 'Due 12/19/2017.',
     {'deliveryDate': {'$class': 'ParsedDateTime', 'month': 12, 'day': 19, 'year': 2017}}),
    ('Due {{deliveryDate as "D MMM YYYY"}}.', 'org.acme.LateDelivery', 'Due 19 Dec 2017.',
     {'deliveryDate': {'$class': 'ParsedDateTime', 'day': 19, 'month': 12, 'year': 2017}}),
    ('Pay {{price as "K0,0.0"}}', 'org.acme.LateDelivery', 'Pay K1,234.5',
     {'price': {'$class': 'ParsedMonetaryAmount', 'currencySymbol': 'K', 'doubleValue': 1234.5}}),
    ('Fee {{fee as "0,0.00"}}', 'org.acme.LateDelivery', 'Fee 1,000.50', {'fee': {'$class': 'ParsedAmount', 'doubleValue': 1000.5}}),
    ('Fee {{fee}}.', 'org.acme.LateDelivery', 'Fee .', {'fee': None}),
    ('Buyer {{buyer}}', 'org.acme.LateDelivery', 'Buyer "p1"', {'buyer': 'p1'}),
    ('Note: {{note}}', 'org.acme.Order', 'Note: ', {'note': None}),
    ('Tags: {{tags}}', 'org.acme.Order', 'Tags: "a""b"', {'tags': ['a', 'b']}),
    ('Tags: {{tags}}', 'org.acme.Order', 'Tags: ', {'tags': None}),
    ('{{"Force majeure applies." :? forceMajeure}}', 'org.acme.Shipment', 'Force majeure applies.', {'forceMajeure': True}),
    ('{{"Force majeure applies." :? forceMajeure}}', 'org.acme.Shipment', '', {'forceMajeure': False}),
    ('{{#if forceMajeure}}Late.{{else}}On time.{{/if}}', 'org.acme.Shipment', 'On time.', {'forceMajeure': False}),
    ('Total {{% 1 + 2 %}} due', 'org.acme.Greeting', 'Total {{% 1 + 2 %}} due', {}),
    ('Say {{% "hello" %}} to {{name}}', 'org.acme.Greeting', 'Say hello to "Bob"', {'name': 'Bob'}),
])
def test_parse(compile_template, source, root_type, text, expected):
    compiled = compile_template(source, root_type, CompilerConfig(generate_identifiers=False))
    assert compiled.parse(text) == {'$class': root_type, **expected}


def test_parse_list(compile_template):
    compiled = compile_template('Order:\n{{#list items}}- {{label}} x{{quantity}}\n{{/list}}', 'org.acme.Order')
    assert compiled.parse('Order:\n- "apple" x2\n- "pear" x13\n') == {
        '$class': 'org.acme.Order',
        'items': [{'$class': 'org.acme.Item', 'label': 'apple', 'quantity': 2},
                  {'$class': 'org.acme.Item', 'label': 'pear', 'quantity': 13}]}


def test_parse_olist(compile_template):
    compiled = compile_template('Items:{{#olist items}}{{label}}{{/olist}}', 'org.acme.Order')
    assert compiled.parse('Items:\n1. "apple"\n1. "pear"') == {
        '$class': 'org.acme.Order', 'items': [{'$class': 'org.acme.Item', 'label': 'apple'}, {'$class': 'org.acme.Item', 'label': 'pear'}]}


def test_parse_clause(compile_template):
    compiled = compile_template('Seller: {{#clause seller}}{{name}}{{/clause}}. Buyer {{buyer}}.', 'org.acme.LateDelivery')
    result = compiled.parse('Seller: "ACME". Buyer "p1".')
    assert result['seller']['name'] == 'ACME'
    assert result['buyer'] == 'p1'
    assert uuid.UUID(result['contractId'])
    assert uuid.UUID(result['seller']['partyId'])
    assert result['contractId'] != result['seller']['partyId']


def test_generated_identifiers(compile_template):
    compiled = compile_template('Party {{name}}', 'org.acme.Party')
    first = compiled.parse('Party "A"')
    second = compiled.parse('Party "A"')
    assert uuid.UUID(first['partyId'])
    assert first['partyId'] != second['partyId']
    assert first['name'] == second['name'] == 'A'


def test_identifier_generation_off(compile_template):
    compiled = compile_template('Party {{name}}', 'org.acme.Party', CompilerConfig(generate_identifiers=False))
    assert compiled.parse('Party "A"') == {'$class': 'org.acme.Party', 'name': 'A'}


def test_bound_identifier(compile_template):
    assert compile_template('Party {{partyId}}', 'org.acme.Party').parse('Party "p1"') == {'$class': 'org.acme.Party', 'partyId': 'p1'}


def test_first_binding_wins(compile_template):
    compiled = compile_template('{{name}} and {{name}}', 'org.acme.Greeting')
    assert compiled.parse('"first" and "second"') == {'$class': 'org.acme.Greeting', 'name': 'first'}


@pytest.mark.parametrize('text, line, column, token', [('Hello World!', 1, 7, 'W'), ('Hello "World"?', 1, 14, '?'),
                                                       ('Hello "World"\n!', 1, 14, '\n'), ('Hello "World"', 1, 14, None)])
def test_syntax_error(compile_template, text, line, column, token):
    compiled = compile_template('Hello {{name}}!', 'org.acme.Greeting')
    with pytest.raises(DocumentSyntaxError) as e:
        compiled.parse(text)
    assert (e.value.line, e.value.column, e.value.token) == (line, column, token)
    assert e.value.message.startswith(f'invalid syntax at line {line} col {column}')


def test_syntax_error_on_later_line(compile_template):
    with pytest.raises(DocumentSyntaxError) as e:
        compile_template('Hello\n{{name}}!', 'org.acme.Greeting').parse('Hello\n"World"?')
    assert (e.value.line, e.value.column, e.value.token) == (2, 8, '?')
    assert str(e.value).endswith('(line 2, column 8)')
    assert e.value.file_location == {'start': {'line': 2, 'column': 8}, 'end': {'line': 2, 'column': 9}}


def test_end_of_input_message(compile_template):
    with pytest.raises(DocumentSyntaxError) as e:
        compile_template('Hello {{name}}!', 'org.acme.Greeting').parse('Hello "World"')
    assert e.value.message == 'invalid syntax at line 1 col 14: unexpected end of input'
    assert e.value.file_location == {'start': {'line': 1, 'column': 14}, 'end': {'line': 1, 'column': 14}}


def test_ambiguous_document(compile_template):
    compiled = compile_template('{{"x" :? a}}{{"x" :? b}}', 'org.acme.Flags')
    with pytest.raises(AmbiguousDocumentParseError) as e:
        compiled.parse('x')
    assert e.value.derivations >= 2
    assert compiled.parse('xx') == {'$class': 'org.acme.Flags', 'a': True, 'b': True}
    assert compiled.parse('') == {'$class': 'org.acme.Flags', 'a': False, 'b': False}


@pytest.mark.parametrize('source, root_type, text, config', [
    ('{{first}}{{second}}', 'org.acme.Phrase', 'aba', None),
    ('{{low}}{{high}}', 'org.acme.Span', '123', CompilerConfig.exhaustive()),
])
def test_ambiguous_split(compile_template, source, root_type, text, config):
    with pytest.raises(AmbiguousDocumentParseError) as e:
        compile_template(source, root_type, config).parse(text)
    assert e.value.derivations >= 2


def test_unambiguous_split(compile_template):
    compiled = compile_template('{{first}}{{second}}', 'org.acme.Phrase')
    assert compiled.parse('abb') == {'$class': 'org.acme.Phrase', 'first': 'ab', 'second': 'b'}


def test_agreeing_derivations(compile_template):
    compiled = compile_template('{{"a" :? a}}{{"b" :? a}}{{"b" :? a}}', 'org.acme.Flags')
    assert compiled.parse('ab') == {'$class': 'org.acme.Flags', 'a': True}


def test_compiled_grammar_is_reusable(catalog):
    grammar = synthesize(parse_template('Hello {{name}}!'), 'org.acme.Greeting', catalog)
    compiled = compile_grammar(grammar)
    with pytest.raises(DocumentSyntaxError):
        compiled.parse('Hello World!')
    assert parse_document(compiled, 'Hello "World"!') == {'$class': 'org.acme.Greeting', 'name': 'World'}
    assert compiled.parser() is not compiled.parser()
    assert compiled.grammar is grammar


def test_exhaustive_lexer(compile_template):
    compiled = compile_template('{{delay}}', 'org.acme.Shipment', CompilerConfig.exhaustive())
    assert compiled.config.lexer == 'dynamic_complete'
    assert compiled.parse('3 weeks') == {'$class': 'org.acme.Shipment', 'delay': {'$class': 'org.acme.Duration', 'amount': 3, 'unit': 'weeks'}}
