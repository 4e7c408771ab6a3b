"""
Lox Lexer Package

Implements the hand-written scanner for Lox source text.

Key Features:
- Single-pass scanning with one/two character lookahead
- Nested block comments with depth tracking
- Error-tolerant scanning: errors are reported, scanning continues
- Line and column tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .errors import Diagnostic, LexerError
from .scanner import Scanner, tokenize_string, tokenize_file

__all__ = [
    "Scanner",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
