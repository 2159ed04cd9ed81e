"""Defines the grammar and parser of the Template Definition Language (TDL)

This module defines the objects holding the TDL grammar, the Earley parser built on it, and the transformer turning TDL parse trees into
template abstract syntax trees. A template is literal prose interleaved with markers enclosed in double braces:

- ``{{name}}`` binds the property ``name``
- ``{{name as "FORMAT"}}`` binds the property ``name`` written with a custom layout
- ``{{"phrase" :? name}}``, ``{{#if name}}phrase{{/if}}`` and ``{{#if name}}phrase{{else}}other{{/if}}`` bind a Boolean property to a phrase
- ``{{#clause name}}...{{/clause}}``, ``{{#with name}}...{{/with}}`` bind a nested template to a record property
- ``{{#list name}}...{{/list}}``, ``{{#ulist name}}...{{/ulist}}``, ``{{#olist name}}...{{/olist}}`` repeat a nested template for each
  item of an array property
- ``{{% expression %}}`` passes an expression through

Property names are ASCII identifiers.

The module contains the following classes:
- ``TemplateAstBuilder``

The module contains the following functions:
- ``parse_template(source)``

The module contains the following objects:
- ``tdl_grammar``
- ``tdl_parser``
"""
import json
import re

from lark import Lark, Transformer, v_args, Tree
from lark.exceptions import UnexpectedInput, VisitError

from libtdl.errors import TemplateError, TemplateSyntaxError, AmbiguousTemplateParseError, input_location
from libtdl.language.ast import (TemplateAst, Chunk, LastChunk, ExprChunk, Expr, Binding, FormattedBinding, BooleanBinding, ClauseBinding,
                                 WithBinding, ListBinding)

tdl_grammar = r"""
                template: _item*

                _item: chunk
                     | binding
                     | formatted_binding
                     | boolean_binding
                     | if_binding
                     | if_else_binding
                     | clause_binding
                     | with_binding
                     | list_binding
                     | ulist_binding
                     | olist_binding
                     | expr

                chunk: TEXT

                binding: "{{" _SP? NAME _SP? "}}"
                formatted_binding: "{{" _SP? NAME _SP "as" _SP STRING _SP? "}}"
                boolean_binding: "{{" _SP? STRING _SP? ":?" _SP? NAME _SP? "}}"
                if_binding: "{{#if" _SP NAME _SP? "}}" TEXT "{{/if}}"
                if_else_binding: "{{#if" _SP NAME _SP? "}}" TEXT "{{else}}" TEXT "{{/if}}"
                clause_binding: "{{#clause" _SP NAME _SP? "}}" template "{{/clause}}"
                with_binding: "{{#with" _SP NAME _SP? "}}" template "{{/with}}"
                list_binding: "{{#list" _SP NAME _SP? "}}" template "{{/list}}"
                ulist_binding: "{{#ulist" _SP NAME _SP? "}}" template "{{/ulist}}"
                olist_binding: "{{#olist" _SP NAME _SP? "}}" template "{{/olist}}"
                expr: "{{%" EXPRESSION "%}}"

                NAME: /[A-Za-z_][A-Za-z0-9_]*/
                STRING: /"[^"\n]*"/
                TEXT: /(?:(?!\{\{)[\s\S])+/
                EXPRESSION: /(?:(?!%\}\})[\s\S])+/
                _SP: / +/
                """

tdl_parser = Lark(tdl_grammar, start='template', parser='earley', lexer='dynamic', ambiguity='explicit', propagate_positions=True,
                  maybe_placeholders=False)
"""
Parser instance on which to call ``parse``. Prefer ``parse_template``, which also checks for ambiguity and builds the abstract syntax tree.

Examples:
    >>> tdl_parser.parse('Hello {{name}}!')
    Tree(Token('RULE', 'template'), [Tree(Token('RULE', 'chunk'), [Token('TEXT', 'Hello ')]), ...])
"""

STRING_LITERAL = re.compile(r'\s*("(?:[^"\\]|\\.)*")\s*')


@v_args(inline=True)
class TemplateAstBuilder(Transformer):
    """Transforms a TDL parse tree into a template abstract syntax tree."""

    def template(self, *nodes):
        return TemplateAst(tuple(nodes))

    def chunk(self, text):
        return Chunk(text.line, text.column, str(text))

    def binding(self, name):
        return Binding(name.line, name.column, str(name))

    def formatted_binding(self, name, fmt):
        return FormattedBinding(name.line, name.column, str(name), fmt[1:-1])

    def boolean_binding(self, phrase, name):
        if len(phrase) == 2:
            raise TemplateSyntaxError('A boolean binding needs a non-empty phrase', phrase.line, phrase.column, str(phrase))
        return BooleanBinding(name.line, name.column, str(name), phrase[1:-1])

    def if_binding(self, name, text):
        return BooleanBinding(name.line, name.column, str(name), str(text))

    def if_else_binding(self, name, text, else_text):
        return BooleanBinding(name.line, name.column, str(name), str(text), str(else_text))

    def clause_binding(self, name, template):
        return ClauseBinding(name.line, name.column, str(name), template)

    def with_binding(self, name, template):
        return WithBinding(name.line, name.column, str(name), template)

    def list_binding(self, name, template):
        return ListBinding(name.line, name.column, str(name), template)

    def ulist_binding(self, name, template):
        return ListBinding(name.line, name.column, str(name), template, '\n- ')

    def olist_binding(self, name, template):
        return ListBinding(name.line, name.column, str(name), template, '\n1. ')

    def expr(self, expression):
        constant = STRING_LITERAL.fullmatch(expression)
        if constant:
            return ExprChunk(expression.line, expression.column, json.loads(constant.group(1)))
        return Expr(expression.line, expression.column, str(expression))


def parse_template(source: str) -> TemplateAst:
    """Parses a TDL template.

    Args:
        source: The text of the template.

    Returns:
        The abstract syntax tree of the template. When the template ends with literal text, its last node is a ``LastChunk``.

    Raises:
        TemplateSyntaxError: If the source is not valid TDL.
        AmbiguousTemplateParseError: If the source has more than one derivation.

    Examples:
        >>> parse_template('Pay {{amount}} now.')
        TemplateAst(nodes=(Chunk(line=1, column=1, value='Pay '), Binding(line=1, column=7, field_name='amount'), LastChunk(...)))
    """
    try:
        tree = tdl_parser.parse(source)
    except UnexpectedInput as e:
        line, column, token = input_location(e, source)
        raise TemplateSyntaxError(f'Invalid template syntax, unexpected {token!r}' if token else 'Unexpected end of template',
                                  line, column, token) from e
    if isinstance(tree, Tree) and any(True for _ in tree.find_data('_ambig')):
        raise AmbiguousTemplateParseError('Ambiguous parse!')
    try:
        ast = TemplateAstBuilder().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, TemplateError):
            raise e.orig_exc from None
        raise
    if ast.nodes and type(ast.nodes[-1]) is Chunk:
        last = ast.nodes[-1]
        ast = TemplateAst(ast.nodes[:-1] + (LastChunk(last.line, last.column, last.value),))
    return ast
