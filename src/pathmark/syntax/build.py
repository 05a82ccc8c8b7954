"""Small constructors for syntax nodes.

Adapters use these to assemble trees; tests use them to write trees by
hand. Keyword tokens default to position 0 and can be overridden with the
``keywords=`` / ``name_token=`` / ``line=`` keyword arguments.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pathmark.syntax.nodes import NodeKind, SyntaxNode, Token

Node = Optional[SyntaxNode]


def _node(kind: NodeKind, fields: dict, attrs: dict, default_keywords: Sequence[str] = ()) -> SyntaxNode:
    if "keywords" not in attrs and default_keywords:
        attrs["keywords"] = tuple(Token(k) for k in default_keywords)
    return SyntaxNode(kind, fields, **attrs)


def stmt(*nested: SyntaxNode, **attrs) -> SyntaxNode:
    """A statement with no measured substructure (worth 1).

    *nested* holds constructs inside it that carry anchors of their own
    (lambdas, anonymous classes, switch expressions).
    """
    return _node(NodeKind.STATEMENT, {"nested": tuple(nested)} if nested else {}, attrs)


def expr(*nested: SyntaxNode, **attrs) -> SyntaxNode:
    """An expression with no measured substructure (worth 0)."""
    return _node(NodeKind.EXPRESSION, {"nested": tuple(nested)} if nested else {}, attrs)


def block(*statements: SyntaxNode, **attrs) -> SyntaxNode:
    return _node(NodeKind.BLOCK, {"statements": tuple(statements)}, attrs)


def method(body: Node, name: str = "method", **attrs) -> SyntaxNode:
    attrs.setdefault("name_token", Token(name))
    return _node(NodeKind.METHOD, {"body": body}, attrs)


def type_decl(*members: SyntaxNode, name: str | None = "Type", **attrs) -> SyntaxNode:
    if name is not None:
        attrs.setdefault("name_token", Token(name))
    return _node(NodeKind.TYPE_DECLARATION, {"members": tuple(members)}, attrs)


def lambda_(body: Node = None, **attrs) -> SyntaxNode:
    return _node(NodeKind.LAMBDA, {"body": body}, attrs)


def if_(condition: Node, then: Node, else_: Node = None, **attrs) -> SyntaxNode:
    keywords = ("if", "else") if else_ is not None else ("if",)
    return _node(NodeKind.IF, {"condition": condition, "then": then, "else": else_}, attrs, keywords)


def while_(condition: Node, body: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.WHILE, {"condition": condition, "body": body}, attrs, ("while",))


def do_while(body: Node, condition: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.DO_WHILE, {"body": body, "condition": condition}, attrs, ("do",))


def for_(initializer: Node, condition: Node, update: Node, body: Node, **attrs) -> SyntaxNode:
    fields = {"initializer": initializer, "condition": condition, "update": update, "body": body}
    return _node(NodeKind.FOR, fields, attrs, ("for",))


def for_each(iterable: Node, body: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.FOR_EACH, {"iterable": iterable, "body": body}, attrs, ("for",))


def label(text: str = "case", **attrs) -> SyntaxNode:
    """A ``case``/``default`` label inside a flattened switch body."""
    return _node(NodeKind.SWITCH_LABEL, {}, attrs, (text,))


def switch(selector: Node, *statements: SyntaxNode, expression: bool = False, **attrs) -> SyntaxNode:
    kind = NodeKind.SWITCH_EXPRESSION if expression else NodeKind.SWITCH_STATEMENT
    return _node(kind, {"selector": selector, "statements": tuple(statements)}, attrs, ("switch",))


def conditional(condition: Node, then: Node, else_: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.CONDITIONAL, {"condition": condition, "then": then, "else": else_}, attrs)


def logical(*operands: SyntaxNode, operator: str = "&&", **attrs) -> SyntaxNode:
    return _node(NodeKind.LOGICAL, {"operands": tuple(operands)}, dict(attrs, operator=operator))


def binary(*operands: SyntaxNode, operator: str = "+", **attrs) -> SyntaxNode:
    return _node(NodeKind.BINARY, {"operands": tuple(operands)}, dict(attrs, operator=operator))


def unary(operand: Node, operator: str = "!", **attrs) -> SyntaxNode:
    return _node(NodeKind.UNARY, {"operand": operand}, dict(attrs, operator=operator))


def assign(target: Node, value: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.ASSIGNMENT, {"operands": tuple(n for n in (target, value) if n is not None)}, attrs)


def index(array: Node, idx: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.ARRAY_INDEX, {"operands": tuple(n for n in (array, idx) if n is not None)}, attrs)


def arguments(*operands: SyntaxNode, **attrs) -> SyntaxNode:
    return _node(NodeKind.ARGUMENT_LIST, {"operands": tuple(operands)}, attrs)


def call(*args: SyntaxNode, class_body: Node = None, **attrs) -> SyntaxNode:
    return _node(NodeKind.CALL, {"arguments": arguments(*args), "class_body": class_body}, attrs)


def assert_(condition: Node, message: Node = None, **attrs) -> SyntaxNode:
    return _node(NodeKind.ASSERT, {"condition": condition, "message": message}, attrs)


def return_(value: Node = None, **attrs) -> SyntaxNode:
    return _node(NodeKind.RETURN, {"value": value}, attrs)


def catch(body: Node, **attrs) -> SyntaxNode:
    return _node(NodeKind.CATCH, {"body": body}, attrs, ("catch",))


def try_(body: Node, *catches: SyntaxNode, finally_: Node = None, **attrs) -> SyntaxNode:
    fields = {"body": body, "catches": tuple(catches), "finally": finally_}
    return _node(NodeKind.TRY, fields, attrs, ("try",))
