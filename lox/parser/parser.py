"""
Lox Expression Parser

Recursive descent over a precedence cascade, one method per level, lowest
precedence outermost:

    expression → equality
    equality   → comparison ( ( "!=" | "==" ) comparison )*
    comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       → factor ( ( "-" | "+" ) factor )*
    factor     → unary ( ( "/" | "*" ) unary )*
    unary      → ( "!" | "-" ) unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Author: xwest
"""

import logging
from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..reporter import ErrorReporter, DiagnosticCollector
from .ast_nodes import Expression, Literal, Unary, Binary, Grouping
from .errors import (
    ParseError, SyntaxErrorRecovery, create_expected_token_error,
    create_expected_expression_error, create_too_much_nesting_error
)


class _ParseAbort(Exception):
    """Unwinds a failed production back to Parser.parse(); never escapes it."""


class Parser:
    """
    Lox expression parser.

    Reports syntax errors to an ErrorReporter and abandons the whole parse
    on the first one.

    Grouping and unary operators may nest at most MAX_NESTING levels deep;
    deeper input is reported as a syntax error instead of exhausting the
    Python stack.
    """

    MAX_NESTING = 64

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the scanner, terminated by EOF
            reporter: Where syntax errors go; a private DiagnosticCollector
                is used when omitted
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token list must end with an EOF token")

        self.tokens = tokens
        self.current = 0
        self.reporter = reporter if reporter is not None else DiagnosticCollector()
        self.errors: List[ParseError] = []
        self._depth = 0
        self._logger = logging.getLogger("Parser")

    def parse(self) -> Optional[Expression]:
        """
        Parse a single expression from the token stream.

        Returns:
            The expression tree, or None if a syntax error was reported
        """
        self._depth = 0

        try:
            return self._expression()

        except _ParseAbort:
            self._logger.debug("Parse abandoned at token %d: %s", self.current, self._peek())
            return None

    def _expression(self) -> Expression:
        return self._equality()

    def _equality(self) -> Expression:
        expr = self._comparison()

        while self._match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = Binary(expr, operator, right)

        return expr

    def _comparison(self) -> Expression:
        expr = self._term()

        while self._match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                          TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self._previous()
            right = self._term()
            expr = Binary(expr, operator, right)

        return expr

    def _term(self) -> Expression:
        expr = self._factor()

        while self._match(TokenType.MINUS, TokenType.PLUS):
            operator = self._previous()
            right = self._factor()
            expr = Binary(expr, operator, right)

        return expr

    def _factor(self) -> Expression:
        expr = self._unary()

        while self._match(TokenType.SLASH, TokenType.STAR):
            operator = self._previous()
            right = self._unary()
            expr = Binary(expr, operator, right)

        return expr

    def _unary(self) -> Expression:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            self._enter(operator)
            right = self._unary()
            self._depth -= 1
            return Unary(operator, right)

        return self._primary()

    def _primary(self) -> Expression:
        if self._match(TokenType.FALSE):
            return Literal(False)

        if self._match(TokenType.TRUE):
            return Literal(True)

        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.LEFT_PAREN):
            self._enter(self._previous())
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            self._depth -= 1
            return Grouping(expr)

        raise self._error(create_expected_expression_error(self._peek()))

    def _enter(self, token: Token) -> None:
        """Count one more level of nesting; abort when over the limit."""
        self._depth += 1
        if self._depth > self.MAX_NESTING:
            raise self._error(create_too_much_nesting_error(token, self.MAX_NESTING))

    def synchronize(self) -> None:
        """
        Skip tokens up to the next statement boundary (panic-mode recovery).

        The current token is the one that caused the error and is always
        skipped. A ';' boundary is consumed; a statement keyword is left as
        the next token. Stops at EOF.
        """
        self._advance()

        while not self._is_at_end():
            if self._previous().type == TokenType.SEMICOLON:
                return

            if self._peek().type in SyntaxErrorRecovery.STATEMENT_STARTERS:
                return

            self._advance()

    # Utility methods

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it is any of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True

        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False

        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1

        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]

    def _previous(self) -> Token:
        """Return the most recently consumed token."""
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or abort the parse."""
        if self._check(token_type):
            return self._advance()

        raise self._error(create_expected_token_error(token_type, self._peek(), message))

    def _error(self, error: ParseError) -> _ParseAbort:
        """Report a syntax error and return the signal that unwinds to parse()."""
        self.errors.append(error)
        diagnostic = error.diagnostic
        self.reporter.token_error(
            error.token, diagnostic.message,
            code=diagnostic.code,
            help_text=diagnostic.help_text,
            suggestions=diagnostic.suggestions
        )
        return _ParseAbort()

    def has_errors(self) -> bool:
        """Check if parser encountered any errors."""
        return len(self.errors) > 0


def parse_string(source: str, filename: str = "<string>") -> Expression:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Expression AST

    Raises:
        LexerError: If scanning fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    parser = Parser(tokens)
    expr = parser.parse()

    if expr is None:
        raise parser.errors[0]

    return expr


def parse_file(filepath: str) -> Expression:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file

    Returns:
        Expression AST

    Raises:
        LexerError: If scanning fails
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    from ..lexer import tokenize_file

    tokens = tokenize_file(filepath)
    parser = Parser(tokens)
    expr = parser.parse()

    if expr is None:
        raise parser.errors[0]

    return expr
