"""
sexpdump Package

Reads the S-expression AST dump of a compiler front end one token at a time,
for an AST-builder that turns it back into a tree.

Architecture:
    sexpdump/
    └── lexer/           # Token reader, grammar rules, diagnostics

Author: xwest
License: MIT
"""

__version__ = "0.1.0-alpha"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .lexer import TokenReader, TokenKind, ScannerError

__all__ = [
    # Core classes
    "TokenReader",
    "TokenKind",
    "ScannerError",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
