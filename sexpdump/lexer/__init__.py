"""
sexpdump Lexer Package

Implements the token reader for S-expression AST dumps produced by a
compiler front end (for example ``swiftc -dump-ast``).

Key Features:
- Lookahead-then-consume protocol driven by the AST-builder
- Identifiers with embedded balanced parentheses
- Multi-word composed keys configured per reader
- Source location tracking for diagnostics
- Typed errors instead of aborting on misuse

Author: xwest
"""

from .tokens import Token, TokenKind, SourceLocation, DEFAULT_COMPOSED_KEYS
from .reader import TokenReader
from .errors import (
    ScannerError, ContractViolationError, UnrecognizedTokenError, ScannerWarning
)

__all__ = [
    "TokenReader",
    "Token",
    "TokenKind",
    "SourceLocation",
    "DEFAULT_COMPOSED_KEYS",
    "ScannerError",
    "ContractViolationError",
    "UnrecognizedTokenError",
    "ScannerWarning",
]
