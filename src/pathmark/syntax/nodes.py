"""Language-neutral syntax nodes consumed by the complexity metrics.

A parser adapter (see ``pathmark.languages``) turns a concrete tree-sitter
tree into these nodes. Each node carries a discriminating ``kind`` plus
named child slots; which slots exist depends on the kind:

=====================  =====================================================
kind                   slots
=====================  =====================================================
BLOCK                  statements
METHOD                 body
IF                     condition, then, else
WHILE                  condition, body
DO_WHILE               body, condition
FOR                    initializer, condition, update, body
FOR_EACH               iterable, body
SWITCH_*               selector, statements (labels and statements, flat)
CONDITIONAL            condition, then, else
LOGICAL / BINARY       operands
UNARY                  operand
ASSIGNMENT             operands
ARRAY_INDEX            operands
CALL                   arguments, class_body
ARGUMENT_LIST          operands
ASSERT                 condition, message
RETURN                 value
TRY                    body, catches, finally
CATCH                  body
TYPE_DECLARATION       members
LAMBDA                 body
STATEMENT/EXPRESSION   nested (anchor-bearing constructs, never measured)
=====================  =====================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Union


class NodeKind(Enum):
    BLOCK = "block"
    METHOD = "method"
    IF = "if"
    WHILE = "while"
    DO_WHILE = "do_while"
    FOR = "for"
    FOR_EACH = "for_each"
    SWITCH_STATEMENT = "switch_statement"
    SWITCH_EXPRESSION = "switch_expression"
    SWITCH_LABEL = "switch_label"
    CONDITIONAL = "conditional"
    LOGICAL = "logical"
    BINARY = "binary"
    UNARY = "unary"
    ASSIGNMENT = "assignment"
    ARRAY_INDEX = "array_index"
    CALL = "call"
    ARGUMENT_LIST = "argument_list"
    ASSERT = "assert"
    RETURN = "return"
    TRY = "try"
    CATCH = "catch"
    TYPE_DECLARATION = "type_declaration"
    LAMBDA = "lambda"
    STATEMENT = "statement"
    EXPRESSION = "expression"

    @property
    def is_expression(self) -> bool:
        """True for kinds that occupy an expression slot."""
        return self in _EXPRESSION_KINDS

    @property
    def is_opaque(self) -> bool:
        """True for nested scopes that are measured on their own."""
        return self in _OPAQUE_KINDS


_EXPRESSION_KINDS = frozenset({
    NodeKind.SWITCH_EXPRESSION,
    NodeKind.CONDITIONAL,
    NodeKind.LOGICAL,
    NodeKind.BINARY,
    NodeKind.UNARY,
    NodeKind.ASSIGNMENT,
    NodeKind.ARRAY_INDEX,
    NodeKind.CALL,
    NodeKind.ARGUMENT_LIST,
    NodeKind.LAMBDA,
    NodeKind.EXPRESSION,
})

_OPAQUE_KINDS = frozenset({NodeKind.TYPE_DECLARATION, NodeKind.LAMBDA})


class Token(NamedTuple):
    """A keyword or declaration name in the source (1-based position)."""

    text: str
    line: int = 0
    column: int = 0


Slot = Union["SyntaxNode", "tuple[SyntaxNode, ...]", None]


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    kind: NodeKind
    fields: dict[str, Slot] = field(default_factory=dict)
    keywords: tuple[Token, ...] = ()
    name_token: Token | None = None
    operator: str | None = None
    line: int = 0
    # set on declarations whose conversion failed; their anchor reports it
    error: str | None = None

    def child(self, name: str) -> SyntaxNode | None:
        """Return the single child in slot *name*, or None when absent."""
        value = self.fields.get(name)
        if isinstance(value, tuple):
            raise TypeError(f"slot {name!r} of {self.kind.value} holds a sequence")
        return value

    def children(self, name: str) -> tuple[SyntaxNode, ...]:
        """Return the children in sequence slot *name* (empty when absent)."""
        value = self.fields.get(name)
        if value is None:
            return ()
        if isinstance(value, SyntaxNode):
            return (value,)
        return value

    def has(self, name: str) -> bool:
        return self.fields.get(name) is not None

    def keyword(self, text: str) -> Token | None:
        for tok in self.keywords:
            if tok.text == text:
                return tok
        return None

    def iter_children(self) -> Iterator[SyntaxNode]:
        """Yield every child node, slot by slot, in insertion order."""
        for value in self.fields.values():
            if value is None:
                continue
            if isinstance(value, SyntaxNode):
                yield value
            else:
                yield from value

    @property
    def name(self) -> str | None:
        return self.name_token.text if self.name_token else None

    def __repr__(self) -> str:
        label = f" {self.name}" if self.name_token else ""
        return f"<SyntaxNode {self.kind.value}{label} line={self.line}>"
