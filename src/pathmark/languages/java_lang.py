from __future__ import annotations

import logging

from pathmark.metrics.errors import NestingTooDeepError
from pathmark.syntax import build
from pathmark.syntax.nodes import SyntaxNode

from .base import COMMENT_TYPES, TreeAdapter

log = logging.getLogger(__name__)

_TYPE_DECLARATIONS = frozenset({
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
})

_METHOD_DECLARATIONS = frozenset({
    "method_declaration",
    "constructor_declaration",
    "compact_constructor_declaration",
})

_BLOCKS = frozenset({"block", "constructor_body"})

# Statements that count as one path and never recurse
_PLAIN_STATEMENTS = frozenset({
    "expression_statement",
    "local_variable_declaration",
    "explicit_constructor_invocation",
    "break_statement",
    "continue_statement",
    "throw_statement",
    "yield_statement",
    "labeled_statement",
    "synchronized_statement",
    "empty_statement",
    "field_declaration",
    "constant_declaration",
    "static_initializer",
    "enum_constant",
    "import_declaration",
    "package_declaration",
    "module_declaration",
})

# Expressions that add no paths and are not descended into
_PLAIN_EXPRESSIONS = frozenset({
    "identifier",
    "this",
    "super",
    "field_access",
    "instanceof_expression",
    "array_creation_expression",
    "array_initializer",
    "method_reference",
    "class_literal",
    "string_literal",
    "character_literal",
    "decimal_integer_literal",
    "hex_integer_literal",
    "octal_integer_literal",
    "binary_integer_literal",
    "decimal_floating_point_literal",
    "hex_floating_point_literal",
    "true",
    "false",
    "null_literal",
    "text_block",
})

_LOGICAL_OPERATORS = frozenset({"&&", "||"})


class JavaTreeAdapter(TreeAdapter):
    """Java syntax adapter for tree-sitter-java trees."""

    @property
    def language_name(self) -> str:
        return "java"

    def convert(self, root) -> SyntaxNode:
        if root.has_error:
            log.warning("Java source has syntax errors; markers may be incomplete")
        members = [self._member(child) for child in self.meaningful_children(root)]
        return build.block(*members, line=self.line_of(root))

    # ---- Declarations ----

    def _member(self, node) -> SyntaxNode:
        if node.type not in _METHOD_DECLARATIONS and node.type not in _TYPE_DECLARATIONS:
            return self._plain_statement(node)
        try:
            if node.type in _METHOD_DECLARATIONS:
                return self._method(node)
            return self._type(node)
        except (NestingTooDeepError, RecursionError) as exc:
            return self._failed_declaration(node, exc)

    def _failed_declaration(self, node, exc: Exception) -> SyntaxNode:
        """Placeholder for a declaration that could not be converted.

        Only this declaration's anchor fails; its siblings are unaffected.
        """
        name = node.child_by_field_name("name")
        name_token = self.token(name) if name is not None else self.token(node, node.type)
        error = str(exc) or type(exc).__name__
        log.warning("Java declaration %r at line %d could not be converted: %s", name_token.text, name_token.line, error)
        if node.type in _METHOD_DECLARATIONS:
            return build.method(None, name_token=name_token, line=self.line_of(node), error=error)
        return build.type_decl(name=None, name_token=name_token, line=self.line_of(node), error=error)

    def _method(self, node) -> SyntaxNode:
        name = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        return build.method(
            self.statement(body) if body is not None else None,
            name_token=self.token(name) if name is not None else None,
            line=self.line_of(node),
        )

    def _type(self, node) -> SyntaxNode:
        name = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        return build.type_decl(
            *self._type_members(body),
            name=None,
            name_token=self.token(name) if name is not None else None,
            line=self.line_of(node),
        )

    def _anonymous_type(self, class_body) -> SyntaxNode:
        return build.type_decl(*self._type_members(class_body), name=None, line=self.line_of(class_body))

    def _type_members(self, body) -> list[SyntaxNode]:
        if body is None:
            return []
        members = []
        with self.nesting():
            for child in self.meaningful_children(body):
                if child.type == "enum_body_declarations":
                    members.extend(self._member(c) for c in self.meaningful_children(child))
                else:
                    members.append(self._member(child))
        return members

    # ---- Statements ----

    def statement(self, node) -> SyntaxNode | None:
        """Convert a node sitting in a statement slot (None stays None)."""
        if node is None:
            return None
        with self.nesting():
            return self._statement(node)

    def _statement(self, node) -> SyntaxNode:
        ntype = node.type
        line = self.line_of(node)

        if ntype in _BLOCKS:
            return build.block(*self._statements(node), line=line)

        if ntype == "if_statement":
            return build.if_(
                self.expression(node.child_by_field_name("condition")),
                self.statement(node.child_by_field_name("consequence")),
                self.statement(node.child_by_field_name("alternative")),
                keywords=self.keyword_tokens(node, "if", "else"),
                line=line,
            )

        if ntype == "while_statement":
            return build.while_(
                self.expression(node.child_by_field_name("condition")),
                self.statement(node.child_by_field_name("body")),
                keywords=self.keyword_tokens(node, "while"),
                line=line,
            )

        if ntype == "do_statement":
            return build.do_while(
                self.statement(node.child_by_field_name("body")),
                self.expression(node.child_by_field_name("condition")),
                keywords=self.keyword_tokens(node, "do"),
                line=line,
            )

        if ntype == "for_statement":
            return build.for_(
                self._for_clause(node.children_by_field_name("init")),
                self.expression(node.child_by_field_name("condition")),
                self._for_clause(node.children_by_field_name("update")),
                self.statement(node.child_by_field_name("body")),
                keywords=self.keyword_tokens(node, "for"),
                line=line,
            )

        if ntype == "enhanced_for_statement":
            return build.for_each(
                self.expression(node.child_by_field_name("value")),
                self.statement(node.child_by_field_name("body")),
                keywords=self.keyword_tokens(node, "for"),
                line=line,
            )

        if ntype in ("switch_expression", "switch_statement"):
            return self._switch(node, expression=False)

        if ntype in ("try_statement", "try_with_resources_statement"):
            return self._try(node)

        if ntype == "return_statement":
            values = self.meaningful_children(node)
            return build.return_(self.expression(values[0]) if values else None, line=line)

        if ntype == "assert_statement":
            parts = self.meaningful_children(node)
            return build.assert_(
                self.expression(parts[0]) if parts else None,
                self.expression(parts[1]) if len(parts) > 1 else None,
                line=line,
            )

        if ntype in _TYPE_DECLARATIONS:
            return self._type(node)

        if ntype not in _PLAIN_STATEMENTS:
            log.debug("Unhandled Java statement %r at line %d treated as plain statement", ntype, line)
        return self._plain_statement(node)

    def _statements(self, node) -> list[SyntaxNode]:
        return [self.statement(c) for c in self.meaningful_children(node)]

    def _plain_statement(self, node) -> SyntaxNode:
        return build.stmt(*self._nested(node), line=self.line_of(node))

    def _for_clause(self, parts) -> SyntaxNode | None:
        # init/update clauses are plain statements whatever they contain
        parts = [p for p in parts if p.type not in COMMENT_TYPES]
        if not parts:
            return None
        nested = []
        for part in parts:
            nested.extend(self._nested(part, include_self=True))
        return build.stmt(*nested, line=self.line_of(parts[0]))

    def _switch(self, node, expression: bool) -> SyntaxNode:
        body = node.child_by_field_name("body")
        items: list[SyntaxNode] = []
        if body is not None:
            for group in self.meaningful_children(body):
                if group.type in ("switch_block_statement_group", "switch_rule"):
                    for child in self.meaningful_children(group):
                        if child.type == "switch_label":
                            items.append(self._label(child))
                        else:
                            items.append(self.statement(child))
                elif group.type == "switch_label":
                    items.append(self._label(group))
                else:
                    items.append(self.statement(group))
        return build.switch(
            self.expression(node.child_by_field_name("condition")),
            *items,
            expression=expression,
            keywords=self.keyword_tokens(node, "switch"),
            line=self.line_of(node),
        )

    def _label(self, node) -> SyntaxNode:
        return build.label(
            keywords=self.keyword_tokens(node, "case", "default"),
            line=self.line_of(node),
        )

    def _try(self, node) -> SyntaxNode:
        catches = []
        finally_block = None
        for child in self.meaningful_children(node):
            if child.type == "catch_clause":
                catches.append(build.catch(
                    self.statement(child.child_by_field_name("body")),
                    keywords=self.keyword_tokens(child, "catch"),
                    line=self.line_of(child),
                ))
            elif child.type == "finally_clause":
                blocks = [c for c in self.meaningful_children(child) if c.type == "block"]
                finally_block = self.statement(blocks[0]) if blocks else build.block()
        return build.try_(
            self.statement(node.child_by_field_name("body")),
            *catches,
            finally_=finally_block,
            keywords=self.keyword_tokens(node, "try"),
            line=self.line_of(node),
        )

    # ---- Expressions ----

    def expression(self, node) -> SyntaxNode | None:
        """Convert a node sitting in an expression slot (None stays None)."""
        node = self._unwrap(node)
        if node is None:
            return None
        with self.nesting():
            return self._expression(node)

    def _expression(self, node) -> SyntaxNode:
        ntype = node.type
        line = self.line_of(node)

        if ntype == "ternary_expression":
            return build.conditional(
                self.expression(node.child_by_field_name("condition")),
                self.expression(node.child_by_field_name("consequence")),
                self.expression(node.child_by_field_name("alternative")),
                line=line,
            )

        if ntype == "binary_expression":
            operator = self.node_text(node.child_by_field_name("operator"))
            operands = [self.expression(o) for o in self._chain(node, operator)]
            if operator in _LOGICAL_OPERATORS:
                return build.logical(*operands, operator=operator, line=line)
            return build.binary(*operands, operator=operator, line=line)

        if ntype == "unary_expression":
            operator = self.node_text(node.child_by_field_name("operator"))
            return build.unary(self.expression(node.child_by_field_name("operand")), operator=operator, line=line)

        if ntype == "update_expression":
            operands = self.meaningful_children(node)
            operator = "".join(c.type for c in node.children if not c.is_named)
            return build.unary(self.expression(operands[0]) if operands else None, operator=operator, line=line)

        if ntype == "assignment_expression":
            return build.assign(
                self.expression(node.child_by_field_name("left")),
                self.expression(node.child_by_field_name("right")),
                line=line,
            )

        if ntype == "array_access":
            return build.index(
                self.expression(node.child_by_field_name("array")),
                self.expression(node.child_by_field_name("index")),
                line=line,
            )

        if ntype in ("method_invocation", "object_creation_expression"):
            return self._call(node)

        if ntype == "lambda_expression":
            body = node.child_by_field_name("body")
            if body is not None and body.type == "block":
                converted = self.statement(body)
            else:
                converted = self.expression(body)
            return build.lambda_(converted, line=line)

        if ntype in ("switch_expression", "switch_statement"):
            return self._switch(node, expression=True)

        if ntype not in _PLAIN_EXPRESSIONS:
            log.debug("Unhandled Java expression %r at line %d treated as plain expression", ntype, line)
        return build.expr(*self._nested(node), line=line)

    def _call(self, node) -> SyntaxNode:
        args_node = node.child_by_field_name("arguments")
        args = [self.expression(a) for a in self.meaningful_children(args_node)] if args_node is not None else []
        class_body = None
        for child in node.named_children:
            if child.type == "class_body":
                class_body = self._anonymous_type(child)
        return build.call(*args, class_body=class_body, line=self.line_of(node))

    def _chain(self, node, operator: str) -> list:
        """Operands of a left-to-right chain of the same binary *operator*."""
        operands = []
        pending = [node]
        while pending:
            current = pending.pop()
            if current.type == "binary_expression" and self.node_text(current.child_by_field_name("operator")) == operator:
                pending.append(current.child_by_field_name("right"))
                pending.append(current.child_by_field_name("left"))
            else:
                operands.append(current)
        return operands

    def _unwrap(self, node):
        while node is not None:
            if node.type == "parenthesized_expression":
                inner = self.meaningful_children(node)
                node = inner[0] if inner else None
            elif node.type == "cast_expression":
                node = node.child_by_field_name("value")
            else:
                break
        return node

    # ---- Nested scopes ----

    def _nested(self, node, include_self: bool = False) -> list[SyntaxNode]:
        """Anchor-bearing constructs inside a node that is itself not measured.

        Lambdas, anonymous and local classes, switch expressions and nested
        statements keep their own anchors even when the enclosing statement
        or expression counts as a single path.
        """
        found: list[SyntaxNode] = []
        pending = [node] if include_self else list(reversed(self.meaningful_children(node)))
        while pending:
            current = pending.pop()
            ctype = current.type
            if ctype == "lambda_expression" or ctype in ("switch_expression", "switch_statement"):
                found.append(self.expression(current))
            elif ctype == "class_body":
                with self.nesting():
                    found.append(self._anonymous_type(current))
            elif ctype in _TYPE_DECLARATIONS:
                with self.nesting():
                    found.append(self._type(current))
            elif ctype in _METHOD_DECLARATIONS:
                with self.nesting():
                    found.append(self._method(current))
            elif ctype in _BLOCKS or (ctype.endswith("_statement") and ctype not in _PLAIN_STATEMENTS):
                found.append(self.statement(current))
            else:
                pending.extend(reversed(self.meaningful_children(current)))
        return found
