"""McCabe cyclomatic complexity over the same syntax nodes.

One decision point per branching construct; the count starts at 1 and
accumulates across every subtree handed to the same visitor.
"""

from __future__ import annotations

from pathmark.syntax.nodes import NodeKind, SyntaxNode

_DECISIONS = {
    NodeKind.IF,
    NodeKind.WHILE,
    NodeKind.DO_WHILE,
    NodeKind.FOR,
    NodeKind.FOR_EACH,
    NodeKind.CONDITIONAL,
}


class CyclomaticVisitor:
    def __init__(self):
        self.complexity = 1

    def visit(self, node: SyntaxNode) -> None:
        pending = [node]
        while pending:
            current = pending.pop()
            if current.kind.is_opaque:
                continue
            self.complexity += _decision_points(current)
            pending.extend(current.iter_children())


def _decision_points(node: SyntaxNode) -> int:
    if node.kind in _DECISIONS:
        return 1
    if node.kind is NodeKind.SWITCH_LABEL:
        return 0 if node.keyword("default") else 1
    if node.kind is NodeKind.LOGICAL:
        return max(len(node.children("operands")) - 1, 0)
    return 0


def cyclomatic_complexity(*nodes: SyntaxNode) -> int:
    visitor = CyclomaticVisitor()
    for node in nodes:
        visitor.visit(node)
    return visitor.complexity
