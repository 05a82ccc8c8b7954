"""Anchor selection: which subtrees a marker on a given token measures.

An anchor is a declaration name or control keyword plus the subtree(s)
whose metric is shown next to it. When an anchor selects more than one
subtree, each one is measured by its own traversal and the results are
summed.

Rules:

- method or type name   -> the declaration (a method measures its body)
- ``while``/``for``/``do``/``switch``/``try`` -> the whole construct
- ``case``              -> the enclosing switch
- ``catch``             -> the catch clause
- ``if`` with ``else``  -> condition and then-branch, measured separately
- ``if`` without else   -> the whole ``if`` (folds in the skip path)
- ``else``              -> the else-branch, unless it is another ``if``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from pathmark.metrics.cyclomatic import cyclomatic_complexity
from pathmark.metrics.npath import DEFAULT_MAX_DEPTH, NPathVisitor
from pathmark.syntax.nodes import NodeKind, SyntaxNode, Token

_WHOLE_CONSTRUCT = {
    NodeKind.WHILE: "while",
    NodeKind.DO_WHILE: "do",
    NodeKind.FOR: "for",
    NodeKind.FOR_EACH: "for",
    NodeKind.SWITCH_STATEMENT: "switch",
    NodeKind.SWITCH_EXPRESSION: "switch",
    NodeKind.TRY: "try",
    NodeKind.CATCH: "catch",
}

_SWITCHES = (NodeKind.SWITCH_STATEMENT, NodeKind.SWITCH_EXPRESSION)


@dataclass(frozen=True)
class Anchor:
    """A trigger token and the subtrees measured for it."""

    token: Token
    trigger: str
    construct: SyntaxNode
    targets: tuple[SyntaxNode, ...]


def select_anchor(node: SyntaxNode, token: Token, parent: SyntaxNode | None = None) -> Anchor | None:
    """Apply the selection rules to *token* owned by *node*.

    Returns None when the token is not a trigger point.
    """
    kind = node.kind

    if token is node.name_token:
        if kind is NodeKind.METHOD:
            return Anchor(token, "method", node, (node,))
        if kind is NodeKind.TYPE_DECLARATION:
            # Type bodies are opaque, so this always measures as trivial.
            return Anchor(token, "type", node, (node,))
        return None

    if _WHOLE_CONSTRUCT.get(kind) == token.text:
        return Anchor(token, token.text, node, (node,))

    if kind is NodeKind.SWITCH_LABEL and token.text == "case":
        if parent is not None and parent.kind in _SWITCHES:
            return Anchor(token, "case", parent, (parent,))
        return None

    if kind is NodeKind.IF:
        if token.text == "if":
            if not node.has("else"):
                return Anchor(token, "if", node, (node,))
            condition, then = node.child("condition"), node.child("then")
            if condition is None or then is None:
                return None
            return Anchor(token, "if", node, (condition, then))
        if token.text == "else":
            else_branch = node.child("else")
            if else_branch is None or else_branch.kind is NodeKind.IF:
                return None
            return Anchor(token, "else", node, (else_branch,))

    return None


def _tokens(node: SyntaxNode) -> Iterator[Token]:
    if node.name_token is not None:
        yield node.name_token
    yield from node.keywords


def find_anchors(root: SyntaxNode) -> list[Anchor]:
    """Every anchor in the tree rooted at *root*, in source order.

    Opaque scopes (lambdas, nested and anonymous types) are searched too:
    their contents get anchors of their own.
    """
    anchors: list[Anchor] = []
    pending: list[tuple[SyntaxNode, SyntaxNode | None]] = [(root, None)]
    while pending:
        node, parent = pending.pop()
        for token in _tokens(node):
            anchor = select_anchor(node, token, parent)
            if anchor is not None:
                anchors.append(anchor)
        children = list(node.iter_children())
        pending.extend((child, node) for child in reversed(children))
    anchors.sort(key=lambda a: (a.token.line, a.token.column))
    return anchors


def measure_npath(anchor: Anchor, max_depth: int = DEFAULT_MAX_DEPTH) -> int | None:
    """Summed NPath of the anchor's targets, or None when it is <= 1."""
    visitor = NPathVisitor(max_depth=max_depth)
    total = 0
    for target in anchor.targets:
        total += visitor.compute(target)
    return total if total > 1 else None


def measure_cyclomatic(anchor: Anchor) -> int | None:
    """Cyclomatic complexity accumulated over the targets, or None when <= 1."""
    total = cyclomatic_complexity(*anchor.targets)
    return total if total > 1 else None
