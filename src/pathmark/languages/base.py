from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager

from pathmark.metrics.errors import NestingTooDeepError
from pathmark.metrics.npath import DEFAULT_MAX_DEPTH
from pathmark.syntax.nodes import SyntaxNode, Token

COMMENT_TYPES = frozenset({"comment", "line_comment", "block_comment"})


class TreeAdapter(ABC):
    """Base class for converting a tree-sitter tree into syntax nodes."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self._source = b""
        self._depth = 0

    @property
    @abstractmethod
    def language_name(self) -> str: ...

    @abstractmethod
    def convert(self, root) -> SyntaxNode:
        """Convert the tree-sitter root node of a compilation unit.

        The result is a BLOCK whose statements are the top-level
        declarations.
        """
        ...

    def adapt(self, tree, source: bytes) -> SyntaxNode:
        self._source = source
        self._depth = 0
        return self.convert(tree.root_node)

    def node_text(self, node) -> str:
        if node is None:
            return ""
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def token(self, node, text: str | None = None) -> Token:
        row, column = node.start_point[0], node.start_point[1]
        return Token(text if text is not None else self.node_text(node), row + 1, column + 1)

    def keyword_tokens(self, node, *keywords: str) -> tuple[Token, ...]:
        """Tokens for the anonymous keyword children of *node* named in *keywords*."""
        return tuple(self.token(c, c.type) for c in node.children if not c.is_named and c.type in keywords)

    def line_of(self, node) -> int:
        return node.start_point[0] + 1

    @staticmethod
    def meaningful_children(node) -> list:
        return [c for c in node.named_children if c.type not in COMMENT_TYPES]

    @contextmanager
    def nesting(self):
        if self._depth >= self.max_depth:
            raise NestingTooDeepError(self.max_depth)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
