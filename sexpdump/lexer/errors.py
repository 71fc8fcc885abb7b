"""
Error handling for the sexpdump token reader.

Every consume operation on the reader checks its own grammar rule first and
raises a ContractViolationError instead of consuming anything when the rule
does not match. Callers that find no matching rule at all report an
UnrecognizedTokenError.

Author: xwest
"""

from typing import Optional, List, Tuple
from dataclasses import dataclass
from .tokens import SourceLocation, TokenKind


@dataclass
class Diagnostic:
    """Base class for scanner diagnostics (errors, warnings)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}"
        if self.code:
            result += f"[{self.code}]"
        result += f": {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class ScannerError(Exception):
    """
    Exception raised when the token reader cannot continue.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class ContractViolationError(ScannerError):
    """A consume operation was called while its lookahead predicate was false."""

    def __init__(self, expected: TokenKind, location: SourceLocation, **kwargs):
        super().__init__(f"Expected {expected.description}", location, **kwargs)
        self.expected = expected


class UnrecognizedTokenError(ScannerError):
    """No grammar rule the caller tried matches the text at the cursor."""

    def __init__(
        self,
        expected: Tuple[TokenKind, ...],
        snippet: str,
        location: SourceLocation,
        **kwargs
    ):
        if expected:
            wanted = " or ".join(kind.description for kind in expected)
            message = f"No recognized token (expected {wanted}) at {snippet!r}"
        else:
            message = f"No recognized token at {snippet!r}"
        super().__init__(message, location, **kwargs)
        self.expected = expected
        self.snippet = snippet


class ScannerWarning:
    """
    Represents a scanner warning that doesn't stop reading.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "S001": "Consume called without a matching token",
    "S002": "No recognized token",
    "S101": "Close parenthesis without matching open",
}

# Longest piece of remaining text quoted in a diagnostic
SNIPPET_LENGTH = 40


def make_snippet(text: str, limit: int = SNIPPET_LENGTH) -> str:
    """Bound remaining text for display in a diagnostic."""
    snippet = text.split("\n", 1)[0][:limit]
    if snippet != text:
        return snippet + "..."
    return snippet


# Helper functions for creating common errors
def create_contract_violation_error(
    expected: TokenKind, remaining: str, location: SourceLocation
) -> ContractViolationError:
    """Create an error for a consume whose predicate does not hold."""
    snippet = make_snippet(remaining)
    if snippet:
        help_text = f"The text at the cursor is {snippet!r}."
    else:
        help_text = "The dump ended before this token."

    return ContractViolationError(
        expected,
        location,
        code="S001",
        help_text=help_text,
        suggestions=[f"Check can_read_{expected.name.lower()}() before reading"]
    )


def create_unrecognized_token_error(
    expected: Tuple[TokenKind, ...], remaining: str, location: SourceLocation
) -> UnrecognizedTokenError:
    """Create an error for text that matches none of the expected rules."""
    return UnrecognizedTokenError(
        expected,
        make_snippet(remaining),
        location,
        code="S002",
        help_text="The dump does not match the expected grammar at this point."
    )


def create_unbalanced_close_warning(depth: int, location: SourceLocation) -> ScannerWarning:
    """Create a warning for a close parenthesis that was never opened."""
    return ScannerWarning(
        f"Close parenthesis without matching open (depth {depth})",
        location,
        code="S101",
        help_text="Nesting depth went below zero."
    )
