"""
Error handling for the Lox scanner.

Provides diagnostic records with source location information and error
codes, plus the exception type raised by the convenience tokenizers.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A single error or warning produced by the scanner or the parser."""
    message: str
    line: int
    severity: str = "error"  # "error", "warning"
    code: Optional[str] = None
    location: Optional[SourceLocation] = None
    where: str = ""  # e.g. "at end", "at ')'"
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"

        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}"
        else:
            result += f"  --> line {self.line}"

        if self.where:
            result += f" {self.where}"

        result += "\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result

    def summary(self) -> str:
        """One-line form: '[line N] Error at 'x': message'."""
        where = f" {self.where}" if self.where else ""
        return f"[line {self.line}] {self.severity.capitalize()}{where}: {self.message}"


class LexerError(Exception):
    """
    Exception carrying a lexical diagnostic.

    The scanner itself never raises this; it reports diagnostics and keeps
    going. The convenience tokenizers raise the first one they collected.
    """

    def __init__(
        self,
        message: str,
        line: int,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="error",
            code=code,
            location=location,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


# Helper functions for creating common errors
def create_unexpected_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character that cannot start any token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Lox source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message="Unexpected character.",
        line=location.line,
        location=location,
        code="L001",
        help_text=help_text
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for a string literal that runs to the end of input."""
    return LexerError(
        message="Unterminated string.",
        line=location.line,
        location=location,
        code="L002",
        help_text="String literals must be closed with a matching \" quote.",
        suggestions=["Add a closing \" quote"]
    )


def create_unterminated_comment_error(location: SourceLocation, depth: int) -> LexerError:
    """Create an error for a block comment still open at end of input."""
    closers = "*/" * depth
    return LexerError(
        message="Unterminated block comment.",
        line=location.line,
        location=location,
        code="L003",
        help_text=f"Block comments nest; {depth} level(s) were still open at end of input.",
        suggestions=[f"Add '{closers}' to close the comment"]
    )
