"""
Lox Parser Package

Implements a recursive descent parser for Lox expressions.
Produces immutable expression trees with correct operator precedence.

Key Features:
- One grammar rule per precedence level (precedence cascade)
- Closed union of expression nodes (Literal, Unary, Binary, Grouping)
- Syntax errors reported to an ErrorReporter; parse yields None on failure
- Panic-mode synchronization for statement-level callers

Author: xwest
"""

from .ast_nodes import (
    ASTNodeType, Expression, Literal, Unary, Binary, Grouping, AstPrinter
)
from .parser import Parser, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNodeType", "Expression",
    "Literal", "Unary", "Binary", "Grouping",
    "AstPrinter",

    # Error handling
    "ParseError",
]
