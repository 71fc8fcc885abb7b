"""
sexpdump TokenReader - pulls tokens out of an S-expression AST dump

The dump is not regular enough to tokenize up front: whether `type=` is a key
or `foo` is an identifier or a declaration name depends on where the
AST-builder is in the tree. So the reader never decides on its own. The
caller asks (can_read_*), then takes (read_*), one token at a time.

Whitespace (spaces and newlines only) is skipped lazily, once per cursor
position, the first time any predicate looks at it.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .tokens import (
    Token, TokenKind, SourceLocation, DEFAULT_COMPOSED_KEYS, WHITESPACE_CHARS
)
from .rules import RULES
from .errors import (
    ContractViolationError, ScannerWarning, UnrecognizedTokenError,
    create_contract_violation_error, create_unrecognized_token_error,
    create_unbalanced_close_warning
)

logger = logging.getLogger(__name__)

TraceSink = Callable[[str], None]


class TokenReader:
    """
    Cursor over one top-level expression of an AST dump.

    Every read_* operation requires its can_read_* predicate to hold and
    raises ContractViolationError otherwise, without consuming anything.
    An instance is owned by a single caller; it is not thread safe.
    """

    def __init__(
        self,
        source: str,
        composed_keys: Iterable[str] = DEFAULT_COMPOSED_KEYS,
        trace: Optional[TraceSink] = None,
        filename: str = "<dump>"
    ):
        """
        Initialize the reader with the dump text.

        Args:
            source: Text of one top-level expression
            composed_keys: Multi-word keys, each ending in '=', tried in order
                before the generic key rule
            trace: Optional sink receiving a description of every token read
            filename: Name used in source locations for error reporting
        """
        self.source = source
        self.filename = filename
        self.trace = trace
        self.composed_keys: Tuple[str, ...] = self._validate_composed_keys(composed_keys)

        self.pos = 0
        self.line = 1
        self.column = 1
        self.depth = 0
        self.tokens: List[Token] = []
        self.warnings: List[ScannerWarning] = []

        self._needs_trim = True

    @staticmethod
    def _validate_composed_keys(composed_keys: Iterable[str]) -> Tuple[str, ...]:
        keys = tuple(composed_keys)
        for key in keys:
            if not isinstance(key, str) or len(key) < 2 or not key.endswith("="):
                raise ValueError(f"Composed key must be a name ending in '=': {key!r}")
        return keys

    # ------------------------------------------------------------------
    # Cursor state
    # ------------------------------------------------------------------

    @property
    def remaining(self) -> str:
        """The unconsumed suffix of the dump."""
        return self.source[self.pos:]

    @property
    def location(self) -> SourceLocation:
        """Location of the cursor."""
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    @property
    def is_balanced(self) -> bool:
        return self.depth == 0

    def _trim(self):
        if not self._needs_trim:
            return
        self._needs_trim = False

        end = self.pos
        while end < len(self.source) and self.source[end] in WHITESPACE_CHARS:
            end += 1
        if end > self.pos:
            self._advance_by(end - self.pos)

    def _advance_by(self, count: int):
        for char in self.source[self.pos:self.pos + count]:
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += count

    def _commit(self, kind: TokenKind, lexeme: str, value, detail: str = "") -> Token:
        """Consume lexeme from the cursor and record it."""
        token = Token(kind, lexeme, value, self.location)
        self._advance_by(len(lexeme))
        self.tokens.append(token)
        self._needs_trim = True

        message = f"{kind.description}: {lexeme!r}"
        if detail:
            message += f" ({detail})"
        logger.debug(message)
        if self.trace is not None:
            self.trace(message)

        return token

    def _contract_violation(self, expected: TokenKind) -> ContractViolationError:
        error = create_contract_violation_error(expected, self.remaining, self.location)
        logger.debug("Refusing to read %s at %s", expected.description, error.location)
        return error

    def _match(self, kind: TokenKind) -> Optional[str]:
        self._trim()
        return RULES[kind].match(self.source, self.pos)

    def _match_composed_key(self) -> Optional[str]:
        self._trim()
        for key in self.composed_keys:
            if self.source.startswith(key, self.pos):
                return key
        return None

    def _read_rule(self, kind: TokenKind) -> str:
        lexeme = self._match(kind)
        if lexeme is None:
            raise self._contract_violation(kind)
        value = RULES[kind].unwrap(lexeme)
        self._commit(kind, lexeme, value)
        return value

    # ------------------------------------------------------------------
    # Lookahead predicates
    # ------------------------------------------------------------------

    def at_end(self) -> bool:
        """Check if only whitespace is left."""
        self._trim()
        return self.pos >= len(self.source)

    def can_read_open_paren(self) -> bool:
        return self._match(TokenKind.OPEN_PAREN) is not None

    def can_read_close_paren(self) -> bool:
        return self._match(TokenKind.CLOSE_PAREN) is not None

    def can_read_identifier(self) -> bool:
        return self._match(TokenKind.IDENTIFIER) is not None

    def can_read_double_quoted_string(self) -> bool:
        return self._match(TokenKind.DOUBLE_QUOTED_STRING) is not None

    def can_read_single_quoted_string(self) -> bool:
        return self._match(TokenKind.SINGLE_QUOTED_STRING) is not None

    def can_read_bracketed_string(self) -> bool:
        return self._match(TokenKind.BRACKETED_STRING) is not None

    def can_read_identifier_or_string(self) -> bool:
        return (self.can_read_identifier() or
                self.can_read_double_quoted_string() or
                self.can_read_single_quoted_string() or
                self.can_read_bracketed_string())

    def can_read_key(self) -> bool:
        """Check for a composed key, then for a generic ``name=`` key."""
        if self._match_composed_key() is not None:
            return True
        return self._match(TokenKind.KEY) is not None

    def can_read_location(self) -> bool:
        return self._match(TokenKind.LOCATION) is not None

    def can_read_declaration_location(self) -> bool:
        return self._match_declaration_location() is not None

    def _match_declaration_location(self) -> Optional[Tuple[str, str]]:
        name = self._match(TokenKind.DECLARATION_LOCATION)
        if name is None:
            return None
        # The location follows the @ directly, nothing is trimmed in between
        location = RULES[TokenKind.LOCATION].match(self.source, self.pos + len(name))
        if location is None:
            return None
        return name, location

    # ------------------------------------------------------------------
    # Consume operations
    # ------------------------------------------------------------------

    def read_open_paren(self):
        if not self.can_read_open_paren():
            raise self._contract_violation(TokenKind.OPEN_PAREN)

        self.depth += 1
        self._commit(TokenKind.OPEN_PAREN, "(", None, f"level {self.depth}")

    def read_close_paren(self):
        if not self.can_read_close_paren():
            raise self._contract_violation(TokenKind.CLOSE_PAREN)

        self.depth -= 1
        if self.depth < 0:
            warning = create_unbalanced_close_warning(self.depth, self.location)
            logger.warning("%s at %s", warning.diagnostic.message, warning.diagnostic.location)
            self.warnings.append(warning)
        self._commit(TokenKind.CLOSE_PAREN, ")", None, f"level {self.depth}")

    def read_identifier(self) -> str:
        """
        Read an identifier, including any balanced parenthesized groups in it.

        A ``)`` that closes more than the identifier opened is left for the
        caller as a structural close paren. A space or newline always ends
        the identifier.
        """
        if not self.can_read_identifier():
            raise self._contract_violation(TokenKind.IDENTIFIER)

        # Balance inside this identifier only, not the reader's depth
        level = 0
        end = self.pos
        while end < len(self.source):
            char = self.source[end]
            if char == "(":
                level += 1
            elif char == ")":
                level -= 1
                if level < 0:
                    break
            elif char in WHITESPACE_CHARS:
                break
            end += 1

        identifier = self.source[self.pos:end]
        self._commit(TokenKind.IDENTIFIER, identifier, identifier)
        return identifier

    def read_double_quoted_string(self) -> str:
        return self._read_rule(TokenKind.DOUBLE_QUOTED_STRING)

    def read_single_quoted_string(self) -> str:
        return self._read_rule(TokenKind.SINGLE_QUOTED_STRING)

    def read_bracketed_string(self) -> str:
        return self._read_rule(TokenKind.BRACKETED_STRING)

    def read_identifier_or_string(self) -> str:
        """
        Read whichever identifier or string comes next, unwrapped.

        An open paren means the value is missing: an empty string is
        returned and the paren is left in place.
        """
        if self.can_read_open_paren():
            return ""
        elif self.can_read_double_quoted_string():
            return self.read_double_quoted_string()
        elif self.can_read_single_quoted_string():
            return self.read_single_quoted_string()
        elif self.can_read_bracketed_string():
            return self.read_bracketed_string()
        elif self.can_read_identifier():
            return self.read_identifier()

        raise self._contract_violation(TokenKind.IDENTIFIER_OR_STRING)

    def read_key(self) -> str:
        """Read a key and return its name without the trailing '='."""
        composed_key = self._match_composed_key()
        if composed_key is not None:
            key = composed_key[:-1]
            self._commit(TokenKind.KEY, composed_key, key, "composed")
            return key

        return self._read_rule(TokenKind.KEY)

    def read_location(self) -> str:
        return self._read_rule(TokenKind.LOCATION)

    def read_declaration_location(self) -> str:
        """Read ``name@file:line:column`` and return it unmodified."""
        match = self._match_declaration_location()
        if match is None:
            raise self._contract_violation(TokenKind.DECLARATION_LOCATION)

        declaration = "".join(match)
        self._commit(TokenKind.DECLARATION_LOCATION, declaration, declaration)
        return declaration

    # ------------------------------------------------------------------
    # Caller-level diagnostics
    # ------------------------------------------------------------------

    def unrecognized_token_error(self, *expected: TokenKind) -> UnrecognizedTokenError:
        """
        Build the error a caller raises when none of the rules it tried match.

        The reader does not look past the cursor; the error quotes a bounded
        prefix of the remaining text.
        """
        self._trim()
        return create_unrecognized_token_error(expected, self.remaining, self.location)
