"""
Token definitions for the sexpdump token reader.

This module defines the token kinds an S-expression AST dump is made of:
- Structural tokens (open/close parentheses)
- Identifiers (which may embed balanced parenthesized groups)
- Quoted and bracketed string literals
- Keys (``name=`` attributes, including multi-word composed keys)
- Source locations (``file:line:column``) and declaration locations

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Tuple


class TokenKind(Enum):
    """
    Enumeration of all token kinds in an AST dump.

    Each kind has a matching lookahead predicate and consume operation
    on the TokenReader.
    """

    # ========================================================================
    # Structure
    # ========================================================================
    OPEN_PAREN = auto()                 # (
    CLOSE_PAREN = auto()                # )

    # ========================================================================
    # Names and literals
    # ========================================================================
    IDENTIFIER = auto()                 # func_decl, Swift.(file).Int
    DOUBLE_QUOTED_STRING = auto()       # "hello"
    SINGLE_QUOTED_STRING = auto()       # 'x'
    BRACKETED_STRING = auto()           # [with_type]
    IDENTIFIER_OR_STRING = auto()       # any of the four above

    # ========================================================================
    # Attributes
    # ========================================================================
    KEY = auto()                        # type=, interface type=
    LOCATION = auto()                   # test.swift:1:7
    DECLARATION_LOCATION = auto()       # main.(file).foo@test.swift:1:7

    @property
    def description(self) -> str:
        """Human readable name used in diagnostics and traces."""
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a position in the dump text.

    Used for error reporting and token history.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of the dump

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A token consumed by the TokenReader.

    ``lexeme`` is the exact text removed from the cursor, ``value`` is the
    payload handed back to the caller (quotes stripped, ``=`` dropped, ...).
    """
    kind: TokenKind
    lexeme: str
    value: Any
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.kind.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.kind.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.kind.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_structural(self) -> bool:
        """Check if this token opens or closes a group."""
        return self.kind in {TokenKind.OPEN_PAREN, TokenKind.CLOSE_PAREN}


# Multi-word keys that must be read as a single key token.
# Checked in order before the generic ``name=`` rule.
DEFAULT_COMPOSED_KEYS: Tuple[str, ...] = (
    "interface type=",
)

# Only these characters are skipped between tokens
WHITESPACE_CHARS = frozenset(" \n")
