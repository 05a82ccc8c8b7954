"""Language-neutral syntax tree model."""

from pathmark.syntax.nodes import NodeKind, SyntaxNode, Token

__all__ = ["NodeKind", "SyntaxNode", "Token"]
