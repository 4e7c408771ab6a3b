"""
Lox Front End Package

Scanner and expression parser for the Lox scripting language. Turns source
text into tokens, and tokens into expression trees ready for an evaluator.

Architecture:
    lox/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Expression parsing and AST generation
    └── reporter.py      # Error reporting collaborator

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Scanner, Token, TokenType
from .parser import Parser, AstPrinter
from .reporter import ErrorReporter, DiagnosticCollector

__all__ = [
    # Core classes
    "Scanner",
    "Parser",
    "Token",
    "TokenType",
    "AstPrinter",
    "ErrorReporter",
    "DiagnosticCollector",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
