"""NPath complexity of a syntax subtree.

NPath counts the acyclic execution paths through a piece of code (Nejmeh,
1988; the CheckStyle ``NPathComplexity`` check uses the same definition):

- statements in sequence multiply,
- alternative branches add,
- every ``&&``/``||`` operand after the first adds one short-circuit path,
- a ternary adds two paths of its own.

The traversal is post-order and keeps its intermediate results on a
:class:`PathCountStack`. Visiting any node leaves exactly one extra value on
the stack: the node's own path count. Statement kinds count paths through
themselves (a plain statement is worth 1). Expression kinds count only the
*additional* paths they introduce (a plain expression is worth 0).

Lambdas and nested/anonymous type declarations are opaque: their bodies are
measured as separate anchors and never fold into the enclosing measurement.
"""

from __future__ import annotations

from pathmark.metrics.errors import NestingTooDeepError, StackImbalanceError
from pathmark.metrics.stack import PathCountStack
from pathmark.syntax.nodes import NodeKind, SyntaxNode

DEFAULT_MAX_DEPTH = 128


class NPathVisitor:
    """Single-use-at-a-time NPath calculator.

    One instance may be reused for sequential measurements (``compute`` resets
    it first). It is not safe to share between threads; build one visitor per
    concurrent measurement.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self._stack = PathCountStack()
        self._max_depth = max_depth
        self._depth = 0

    # ── Public API ───────────────────────────────────────────────────

    def visit(self, node: SyntaxNode) -> None:
        """Visit *node* and push its path count."""
        if self._depth >= self._max_depth:
            raise NestingTooDeepError(self._max_depth)
        self._depth += 1
        try:
            self._RULES[node.kind](self, node)
        finally:
            self._depth -= 1

    def compute(self, node: SyntaxNode) -> int:
        """Reset, traverse *node*, and return its NPath complexity."""
        self.reset()
        self.visit(node)
        return self.complexity

    @property
    def complexity(self) -> int:
        """Result of the last top-level visit.

        Raises StackImbalanceError unless exactly one value is on the stack.
        """
        if len(self._stack) != 1:
            raise StackImbalanceError(len(self._stack))
        return self._stack.peek()

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    def reset(self) -> None:
        self._stack.reset()
        self._depth = 0

    # ── Slot helpers ─────────────────────────────────────────────────

    def _statement(self, node: SyntaxNode | None) -> None:
        # An absent statement is the implicit "skip" path.
        if node is None:
            self._stack.push(1)
        else:
            self.visit(node)

    def _expression(self, node: SyntaxNode | None) -> None:
        if node is None:
            self._stack.push(0)
        else:
            self.visit(node)

    def _sum_expressions(self, nodes) -> int:
        total = 0
        for n in nodes:
            self._expression(n)
            total += self._stack.pop()
        return total

    # ── Combination rules ────────────────────────────────────────────

    def _visit_block(self, node: SyntaxNode) -> None:
        total = 1
        for statement in node.children("statements"):
            self._statement(statement)
            total *= self._stack.pop()
        self._stack.push(total)

    def _visit_method(self, node: SyntaxNode) -> None:
        self._statement(node.child("body"))

    def _visit_if(self, node: SyntaxNode) -> None:
        self._expression(node.child("condition"))
        self._statement(node.child("then"))
        self._statement(node.child("else"))
        else_paths = self._stack.pop()
        then_paths = self._stack.pop()
        condition = self._stack.pop()
        self._stack.push(then_paths + else_paths + condition)

    def _visit_while(self, node: SyntaxNode) -> None:
        self._expression(node.child("condition"))
        self._statement(node.child("body"))
        body = self._stack.pop()
        condition = self._stack.pop()
        self._stack.push(condition + body + 1)

    def _visit_do_while(self, node: SyntaxNode) -> None:
        self._statement(node.child("body"))
        self._expression(node.child("condition"))
        condition = self._stack.pop()
        body = self._stack.pop()
        self._stack.push(body + condition + 1)

    def _visit_for(self, node: SyntaxNode) -> None:
        self._statement(node.child("initializer"))
        self._expression(node.child("condition"))
        self._statement(node.child("update"))
        self._statement(node.child("body"))
        body = self._stack.pop()
        update = self._stack.pop()
        condition = self._stack.pop()
        initializer = self._stack.pop()
        # init/update clauses are plain statements: normalise them to 0
        self._stack.push((initializer - 1) + condition + (update - 1) + body + 1)

    def _visit_for_each(self, node: SyntaxNode) -> None:
        self._expression(node.child("iterable"))
        self._statement(node.child("body"))
        body = self._stack.pop()
        iterable = self._stack.pop()
        self._stack.push(iterable + body + 1)

    def _visit_switch(self, node: SyntaxNode) -> None:
        self._expression(node.child("selector"))
        total = 1 + self._stack.pop()

        # Each label opens a branch accumulator seeded at 1; statements
        # multiply into the most recently opened one.
        opened = 0
        for item in node.children("statements"):
            if item.kind is NodeKind.SWITCH_LABEL:
                self._stack.push(1)
                opened += 1
                continue
            if opened == 0:
                self._stack.push(1)
                opened += 1
            self._statement(item)
            paths = self._stack.pop()
            self._stack.push(self._stack.pop() * paths)

        for _ in range(opened):
            total += self._stack.pop()
        self._stack.push(total)

    def _visit_conditional(self, node: SyntaxNode) -> None:
        total = self._sum_expressions((node.child("condition"), node.child("then"), node.child("else")))
        self._stack.push(total + 2)

    def _visit_logical(self, node: SyntaxNode) -> None:
        operands = node.children("operands")
        extra = max(len(operands) - 1, 0)
        self._stack.push(extra + self._sum_expressions(operands))

    def _visit_operands(self, node: SyntaxNode) -> None:
        self._stack.push(self._sum_expressions(node.children("operands")))

    def _visit_unary(self, node: SyntaxNode) -> None:
        self._expression(node.child("operand"))

    def _visit_call(self, node: SyntaxNode) -> None:
        # Only the arguments; an anonymous class body is its own scope.
        self._expression(node.child("arguments"))

    def _visit_assert(self, node: SyntaxNode) -> None:
        total = self._sum_expressions((node.child("condition"), node.child("message")))
        self._stack.push(1 + total)

    def _visit_return(self, node: SyntaxNode) -> None:
        self._expression(node.child("value"))
        self._stack.push(1 + self._stack.pop())

    def _visit_try(self, node: SyntaxNode) -> None:
        self._statement(node.child("body"))
        total = self._stack.pop()

        # N catch clauses give N+1 independent ways out of the try body.
        catch_total = 1
        for clause in node.children("catches"):
            self._statement(clause)
            catch_total += self._stack.pop()
        total *= catch_total

        if node.has("finally"):
            self._statement(node.child("finally"))
            total *= self._stack.pop()
        self._stack.push(total)

    def _visit_catch(self, node: SyntaxNode) -> None:
        self._statement(node.child("body"))

    def _visit_opaque(self, node: SyntaxNode) -> None:
        self._stack.push(0 if node.kind.is_expression else 1)

    def _visit_statement(self, node: SyntaxNode) -> None:
        self._stack.push(1)

    def _visit_expression(self, node: SyntaxNode) -> None:
        self._stack.push(0)

    _RULES = {
        NodeKind.BLOCK: _visit_block,
        NodeKind.METHOD: _visit_method,
        NodeKind.IF: _visit_if,
        NodeKind.WHILE: _visit_while,
        NodeKind.DO_WHILE: _visit_do_while,
        NodeKind.FOR: _visit_for,
        NodeKind.FOR_EACH: _visit_for_each,
        NodeKind.SWITCH_STATEMENT: _visit_switch,
        NodeKind.SWITCH_EXPRESSION: _visit_switch,
        NodeKind.SWITCH_LABEL: _visit_statement,
        NodeKind.CONDITIONAL: _visit_conditional,
        NodeKind.LOGICAL: _visit_logical,
        NodeKind.BINARY: _visit_operands,
        NodeKind.UNARY: _visit_unary,
        NodeKind.ASSIGNMENT: _visit_operands,
        NodeKind.ARRAY_INDEX: _visit_operands,
        NodeKind.CALL: _visit_call,
        NodeKind.ARGUMENT_LIST: _visit_operands,
        NodeKind.ASSERT: _visit_assert,
        NodeKind.RETURN: _visit_return,
        NodeKind.TRY: _visit_try,
        NodeKind.CATCH: _visit_catch,
        NodeKind.TYPE_DECLARATION: _visit_opaque,
        NodeKind.LAMBDA: _visit_opaque,
        NodeKind.STATEMENT: _visit_statement,
        NodeKind.EXPRESSION: _visit_expression,
    }


def npath_complexity(node: SyntaxNode, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """NPath complexity of *node* computed by a fresh visitor."""
    return NPathVisitor(max_depth=max_depth).compute(node)
