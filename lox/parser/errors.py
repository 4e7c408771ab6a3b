"""
Error handling for the Lox expression parser.

Provides the ParseError exception, helper factories for
common syntax errors, and the statement-boundary tables used for
panic-mode recovery.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic
from ..reporter import describe_token


class ParseError(Exception):
    """
    Exception carrying a syntax diagnostic.

    The parser reports errors and returns None; only the convenience
    functions (parse_string, parse_file) raise this.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            line=token.line,
            severity="error",
            code=code,
            location=token.location,
            where=describe_token(token),
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Tables and hints for recovering from syntax errors.
    """

    # Keywords that begin a statement; synchronization stops in front of them
    STATEMENT_STARTERS = frozenset({
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    })

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
        }

        return list(token_suggestions.get(expected, []))


# Helper functions for creating common parser errors

def create_expected_token_error(expected: TokenType, found: Token, message: str) -> ParseError:
    """Create an error for a required token that is absent."""
    return ParseError(
        message=message,
        token=found,
        code="P001",
        help_text=f"The parser expected {expected.name} here, but found {found.type.name}.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected)
    )


def create_expected_expression_error(found: Token) -> ParseError:
    """Create an error for a position where no expression could start."""
    return ParseError(
        message="Expect expression.",
        token=found,
        code="P005",
        help_text="An expression must start with a number, string, true, false, nil, '(', '!' or '-'.",
        suggestions=["Check for a missing operand", "Ensure all operators have operands"]
    )


def create_too_much_nesting_error(found: Token, limit: int) -> ParseError:
    """Create an error for parentheses or unary operators nested too deeply."""
    return ParseError(
        message="Too much nesting.",
        token=found,
        code="P002",
        help_text=f"Expressions may nest at most {limit} levels of parentheses and unary operators.",
        suggestions=["Split the expression into smaller parts"]
    )
