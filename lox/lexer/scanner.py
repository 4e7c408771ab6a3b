"""
Lox Scanner - turns source text into tokens

Single left-to-right pass with one character of lookahead (two for
number literals and comment delimiters). Bad input never stops the scan:
each problem goes to the reporter and scanning resumes with the next
character, so the parser always gets a token list ending in EOF.

xwest
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS, ONE_OR_TWO_CHAR_TOKENS
)
from .errors import (
    Diagnostic, LexerError, create_unexpected_character_error,
    create_unterminated_string_error, create_unterminated_comment_error
)
from ..reporter import ErrorReporter, DiagnosticCollector


class Scanner:
    """
    Lox lexical analyzer.

    Converts source code text into a list of tokens, reporting lexical
    errors to an ErrorReporter rather than raising them.
    """

    def __init__(self, source: str, filename: str = "<unknown>",
                 reporter: Optional[ErrorReporter] = None):
        """
        Initialize the scanner with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            reporter: Where lexical errors go; a private DiagnosticCollector
                is used when omitted
        """
        self.source = source
        self.filename = filename
        self.reporter = reporter if reporter is not None else DiagnosticCollector()
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

        # Working position
        self.start = 0
        self.current = 0
        self.line = 1
        self.line_start = 0  # Offset of the first character on the current line

        # Where the token being scanned began
        self._start_line = 1
        self._start_column = 1

        self._logger = logging.getLogger("Scanner")

    def scan_tokens(self) -> List[Token]:
        """
        Scan the entire source.

        Returns:
            List of tokens, always terminated by exactly one EOF token
        """
        self.start = 0
        self.current = 0
        self.line = 1
        self.line_start = 0
        self.tokens = []
        self.errors = []

        while not self._is_at_end():
            self.start = self.current
            self._start_line = self.line
            self._start_column = self.current - self.line_start + 1
            self._scan_token()

        eof_location = SourceLocation(
            self.filename, self.line, self.current - self.line_start + 1, self.current
        )
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location))

        self._logger.debug(
            "Scanned %d tokens from %s (%d errors)", len(self.tokens), self.filename, len(self.errors)
        )
        return self.tokens

    def _scan_token(self) -> None:
        """Categorise the token starting at self.start."""
        c = self._advance()

        if c in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[c])
            return

        if c in ONE_OR_TWO_CHAR_TOKENS:
            one_char, two_char = ONE_OR_TWO_CHAR_TOKENS[c]
            self._add_token(two_char if self._match('=') else one_char)
            return

        if c == '/':
            if self._match('/'):
                # Line comment runs to (not including) the newline
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()

            elif self._match('*'):
                self._block_comment()

            else:
                self._add_token(TokenType.SLASH)

            return

        if c in (' ', '\r', '\t'):
            return

        if c == '\n':
            self._newline()
            return

        if c == '"':
            self._string()
            return

        if self._is_digit(c):
            self._number()
            return

        if self._is_alpha(c):
            self._identifier()
            return

        self._report(create_unexpected_character_error(c, self._start_location()))

    def _block_comment(self) -> None:
        """Skip a block comment; comments nest, so track the depth."""
        depth = 1
        while depth > 0 and not self._is_at_end():
            if self._peek() == '/' and self._peek_next() == '*':
                self._advance()
                self._advance()
                depth += 1

            elif self._peek() == '*' and self._peek_next() == '/':
                self._advance()
                self._advance()
                depth -= 1

            elif self._advance() == '\n':
                self._newline()

        if depth > 0:
            self._report(create_unterminated_comment_error(self._start_location(), depth))

    def _string(self) -> None:
        """Scan a string literal; the opening quote is already consumed."""
        while self._peek() != '"' and not self._is_at_end():
            if self._advance() == '\n':
                self._newline()

        if self._is_at_end():
            # Still emit what we have so the parser sees a STRING
            self._report(create_unterminated_string_error(self._start_location()))
            self._add_token(TokenType.STRING, self.source[self.start + 1:self.current])
            return

        self._advance()  # Closing quote

        # Strip the quotes from the literal value
        self._add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def _number(self) -> None:
        """Scan a number literal: digits, optionally '.' and more digits."""
        while self._is_digit(self._peek()):
            self._advance()

        # A trailing '.' is not part of the number ("1." is NUMBER then DOT)
        if self._peek() == '.' and self._is_digit(self._peek_next()):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def _identifier(self) -> None:
        """Scan an identifier, then check it against the keyword table."""
        while self._is_alpha_numeric(self._peek()):
            self._advance()

        text = self.source[self.start:self.current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _add_token(self, token_type: TokenType, literal: object = None) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self._start_location()))

    def _start_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._start_line, self._start_column, self.start)

    def _report(self, error: LexerError) -> None:
        self.errors.append(error)
        diagnostic = error.diagnostic
        self.reporter.error(
            diagnostic.line, diagnostic.message,
            code=diagnostic.code,
            location=diagnostic.location,
            help_text=diagnostic.help_text,
            suggestions=diagnostic.suggestions
        )

    def _newline(self) -> None:
        """Account for a newline that has just been consumed."""
        self.line += 1
        self.line_start = self.current

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is the expected one."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False

        self.current += 1
        return True

    def _advance(self) -> str:
        """Consume and return the next character."""
        c = self.source[self.current]
        self.current += 1
        return c

    def _peek(self) -> str:
        """Look at the next character without consuming it."""
        if self._is_at_end():
            return '\0'

        return self.source[self.current]

    def _peek_next(self) -> str:
        """Look two characters ahead without consuming anything."""
        if self.current + 1 >= len(self.source):
            return '\0'

        return self.source[self.current + 1]

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    @staticmethod
    def _is_digit(c: str) -> bool:
        return '0' <= c <= '9'

    @staticmethod
    def _is_alpha(c: str) -> bool:
        return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'

    @staticmethod
    def _is_alpha_numeric(c: str) -> bool:
        return Scanner._is_alpha(c) or Scanner._is_digit(c)

    def has_errors(self) -> bool:
        """Check if the last scan encountered any errors."""
        return len(self.errors) > 0

    def get_diagnostics(self) -> List[Diagnostic]:
        """Get the diagnostics produced by the last scan."""
        return [error.diagnostic for error in self.errors]


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If scanning reported any error
    """
    scanner = Scanner(source, filename)
    tokens = scanner.scan_tokens()

    if scanner.has_errors():
        # Raise the first error encountered
        raise scanner.errors[0]

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file

    Returns:
        List of tokens

    Raises:
        LexerError: If scanning reported any error
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
