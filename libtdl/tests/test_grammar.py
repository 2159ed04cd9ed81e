import pytest

from libtdl.errors import TemplateSyntaxError
from libtdl.language import (parse_template, tdl_parser, Chunk, LastChunk, ExprChunk, Expr, Binding, FormattedBinding, BooleanBinding,
                             ClauseBinding, WithBinding, ListBinding)


@pytest.mark.parametrize('source', ['', 'Hello world', 'Hello {{name}}!', '{{ name }}', 'Café {{name}} ☕', 'a { b } c',
                                    '{{date as "DD/MM/YYYY"}}', '{{"Force majeure applies." :? forceMajeure}}',
                                    '{{#if flag}}yes{{/if}}', '{{#if flag}}yes{{else}}no{{/if}}', '{{#clause seller}}Seller {{name}}{{/clause}}',
                                    '{{#with seller}}{{name}}{{/with}}', '{{#list items}}- {{label}}\n{{/list}}', '{{#ulist items}}{{label}}{{/ulist}}',
                                    '{{#olist items}}{{label}}{{/olist}}', 'Total {{% now() %}}', 'Line one\nLine two {{x}}\n'])
def test_accepts(source):
    tree = tdl_parser.parse(source)
    assert tree.data == 'template'
    parse_template(source)


@pytest.mark.parametrize('source', ['{{', '{{name', '{{na me}}', '{{ünï}}', '{{a.b}}', '{{1name}}', '{{#clause x}}abc', '{{#if flag}}{{/if}}',
                                    '{{"" :? flag}}', '{{name as DD}}', '{{#list items}}x{{/with}}'])
def test_rejects(source):
    with pytest.raises(TemplateSyntaxError):
        parse_template(source)


def test_syntax_error_position():
    with pytest.raises(TemplateSyntaxError) as e:
        parse_template('Hello\n{{ünï}}')
    assert e.value.line == 2
    assert e.value.column == 3
    assert e.value.token == 'ü'


def test_node_positions():
    ast = parse_template('Pay {{amount}} now.')
    assert ast.nodes == (Chunk(1, 1, 'Pay '), Binding(1, 7, 'amount'), LastChunk(1, 15, ' now.'))


@pytest.mark.parametrize('source, last', [('Hello {{name}}!', LastChunk), ('Hello {{name}}', Binding), ('Hello', LastChunk)])
def test_last_chunk(source, last):
    ast = parse_template(source)
    assert type(ast[-1]) is last
    assert all(type(node) is not LastChunk for node in ast.nodes[:-1])


def test_empty_template():
    assert len(parse_template('')) == 0


@pytest.mark.parametrize('source, node', [
    ('{{name}}', Binding(1, 3, 'name')),
    ('{{ name }}', Binding(1, 4, 'name')),
    ('{{date as "D MMM YYYY"}}', FormattedBinding(1, 3, 'date', 'D MMM YYYY')),
    ('{{"Late." :? late}}', BooleanBinding(1, 14, 'late', 'Late.')),
    ('{{#if late}}Late.{{/if}}', BooleanBinding(1, 7, 'late', 'Late.')),
    ('{{#if late}}Late.{{else}}On time.{{/if}}', BooleanBinding(1, 7, 'late', 'Late.', 'On time.')),
])
def test_bindings(source, node):
    assert parse_template(source)[0] == node


@pytest.mark.parametrize('source, kind, separator', [('{{#clause seller}}{{name}}{{/clause}}', ClauseBinding, None),
                                                     ('{{#with seller}}{{name}}{{/with}}', WithBinding, None),
                                                     ('{{#list items}}{{name}}{{/list}}', ListBinding, ''),
                                                     ('{{#ulist items}}{{name}}{{/ulist}}', ListBinding, '\n- '),
                                                     ('{{#olist items}}{{name}}{{/olist}}', ListBinding, '\n1. ')])
def test_blocks(source, kind, separator):
    node = parse_template(source)[0]
    assert type(node) is kind
    assert node.template.nodes == (Binding(1, node.column + len(node.field_name) + 4, 'name'),)
    if separator is not None:
        assert node.separator == separator


def test_nested_template_keeps_trailing_chunk():
    node = parse_template('{{#list items}}- {{label}}\n{{/list}}')[0]
    assert node.template.nodes[0] == Chunk(1, 16, '- ')
    assert type(node.template.nodes[-1]) is Chunk
    assert node.template.nodes[-1].value == '\n'


@pytest.mark.parametrize('source, node', [('{{% "hello" %}}', ExprChunk(1, 4, 'hello')), ('{{%"a\\"b"%}}', ExprChunk(1, 4, 'a"b')),
                                          ('{{% now() %}}', Expr(1, 4, ' now() '))])
def test_expressions(source, node):
    assert parse_template(source)[0] == node
