"""
Grammar rules for the sexpdump token reader.

Each rule pairs a compiled pattern (the lookahead predicate) with an unwrap
function (the extractor). Predicates and consume operations share the same
pattern, so a consume always removes exactly the prefix the predicate saw.

Identifiers are the one rule whose consume is not a plain pattern match,
see TokenReader.read_identifier.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .tokens import TokenKind


@dataclass(frozen=True)
class GrammarRule:
    kind: TokenKind
    pattern: "re.Pattern[str]"
    unwrap: Callable[[str], str]

    def match(self, text: str, pos: int = 0) -> Optional[str]:
        """Return the matched prefix of ``text[pos:]`` or None."""
        match = self.pattern.match(text, pos)
        if match is None:
            return None
        return match.group(0)


def _verbatim(lexeme: str) -> str:
    return lexeme


def _strip_delimiters(lexeme: str) -> str:
    return lexeme[1:-1]


def _strip_equals(lexeme: str) -> str:
    return lexeme[:-1]


# Patterns are matched with Pattern.match(text, pos), which anchors at pos,
# so none of them start with ^.
RULES: Dict[TokenKind, GrammarRule] = {
    TokenKind.OPEN_PAREN: GrammarRule(
        TokenKind.OPEN_PAREN, re.compile(r"\("), _verbatim
    ),
    TokenKind.CLOSE_PAREN: GrammarRule(
        TokenKind.CLOSE_PAREN, re.compile(r"\)"), _verbatim
    ),
    # No whitespace, parentheses or quotes
    TokenKind.IDENTIFIER: GrammarRule(
        TokenKind.IDENTIFIER, re.compile(r"[^\s()\"']+"), _verbatim
    ),
    TokenKind.DOUBLE_QUOTED_STRING: GrammarRule(
        TokenKind.DOUBLE_QUOTED_STRING, re.compile(r'"[^"]+"'), _strip_delimiters
    ),
    TokenKind.SINGLE_QUOTED_STRING: GrammarRule(
        TokenKind.SINGLE_QUOTED_STRING, re.compile(r"'[^']+'"), _strip_delimiters
    ),
    TokenKind.BRACKETED_STRING: GrammarRule(
        TokenKind.BRACKETED_STRING, re.compile(r"\[[^\]]+\]"), _strip_delimiters
    ),
    # Generic key; composed keys are looked up before this one
    TokenKind.KEY: GrammarRule(
        TokenKind.KEY, re.compile(r"[^\s()\"'=]+="), _strip_equals
    ),
    # Non-greedy so it stops at the first file:line:column
    TokenKind.LOCATION: GrammarRule(
        TokenKind.LOCATION, re.compile(r"[^:()]*?:[0-9]+:[0-9]+"), _verbatim
    ),
    # Only the name@ part; the location after it is matched separately
    TokenKind.DECLARATION_LOCATION: GrammarRule(
        TokenKind.DECLARATION_LOCATION, re.compile(r"[^(][^@\s]*?@"), _verbatim
    ),
}