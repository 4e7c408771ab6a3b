"""
Error reporting collaborator shared by the scanner and the parser.

The front end never prints and never exits; it hands every problem to an
ErrorReporter and lets the caller decide what to do with it. The scanner
calls error(line, message) and the parser calls token_error(token, message);
both pass the error code and any help along as keyword arguments.

Author: xwest
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .lexer.errors import Diagnostic
from .lexer.tokens import Token, TokenType, SourceLocation


class ErrorReporter(ABC):
    """Sink for lexical and syntax errors."""

    @abstractmethod
    def error(
        self,
        line: int,
        message: str,
        *,
        code: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        """Report a lexical error at a line."""

    @abstractmethod
    def token_error(
        self,
        token: Token,
        message: str,
        *,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        """Report a syntax error at a token."""


def describe_token(token: Token) -> str:
    """Describe where a syntax error occurred, relative to the token."""
    if token.type == TokenType.EOF:
        return "at end"

    return f"at '{token.lexeme}'"


class DiagnosticCollector(ErrorReporter):
    """
    Default reporter: keeps every diagnostic in order of arrival.

    A driver typically checks `had_error` after scanning and parsing and
    skips evaluation when it is set.
    """

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []
        self._logger = logging.getLogger("DiagnosticCollector")

    @property
    def had_error(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    def error(
        self,
        line: int,
        message: str,
        *,
        code: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        self.report(Diagnostic(
            message=message,
            line=line,
            code=code,
            location=location,
            help_text=help_text,
            suggestions=suggestions
        ))

    def token_error(
        self,
        token: Token,
        message: str,
        *,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        self.report(Diagnostic(
            message=message,
            line=token.line,
            code=code,
            location=token.location,
            where=describe_token(token),
            help_text=help_text,
            suggestions=suggestions
        ))

    def report(self, diagnostic: Diagnostic) -> None:
        """Add an already-built diagnostic, e.g. a warning."""
        self._logger.debug("Collected diagnostic: %s", diagnostic.summary())
        self.diagnostics.append(diagnostic)

    def reset(self) -> None:
        """Forget everything collected so far (e.g. between REPL lines)."""
        self.diagnostics.clear()
