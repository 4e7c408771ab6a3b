"""
Abstract Syntax Tree node definitions for Lox expressions.

The expression tree is a closed union of four immutable node types:
Literal, Unary, Binary and Grouping. Consumers dispatch over the union with
isinstance checks (see AstPrinter) rather than a visitor hierarchy.

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Union

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all expression node types."""
    LITERAL = "Literal"
    UNARY = "Unary"
    BINARY = "Binary"
    GROUPING = "Grouping"


@dataclass(frozen=True)
class Literal:
    """Literal value: float, str, bool, or None for nil."""
    value: Any

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.LITERAL

    def children(self) -> List['Expression']:
        return []


@dataclass(frozen=True)
class Unary:
    """Prefix operator applied to a single operand."""
    operator: Token
    right: 'Expression'

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.UNARY

    def children(self) -> List['Expression']:
        return [self.right]


@dataclass(frozen=True)
class Binary:
    """Infix operator with a left and a right operand."""
    left: 'Expression'
    operator: Token
    right: 'Expression'

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.BINARY

    def children(self) -> List['Expression']:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping:
    """Parenthesized expression."""
    expression: 'Expression'

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.GROUPING

    def children(self) -> List['Expression']:
        return [self.expression]


Expression = Union[Literal, Unary, Binary, Grouping]


class AstPrinter:
    """
    Renders an expression as a parenthesized prefix string.

    `1 + 2 * 3` prints as `(+ 1 (* 2 3))` and `(1)` as `(group 1)`.
    """

    def print(self, expr: Expression) -> str:
        if isinstance(expr, Literal):
            return self._literal(expr.value)

        if isinstance(expr, Unary):
            return self._parenthesize(expr.operator.lexeme, expr.right)

        if isinstance(expr, Binary):
            return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

        if isinstance(expr, Grouping):
            return self._parenthesize("group", expr.expression)

        raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    def _parenthesize(self, name: str, *exprs: Expression) -> str:
        parts = [name] + [self.print(expr) for expr in exprs]
        return "(" + " ".join(parts) + ")"

    @staticmethod
    def _literal(value: Any) -> str:
        if value is None:
            return "nil"

        # bool first: True is also an int
        if isinstance(value, bool):
            return "true" if value else "false"

        if isinstance(value, float):
            if value.is_integer():
                return str(int(value))

            return repr(value)

        return str(value)
