"""
Tests for scanner diagnostics.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from sexpdump.lexer import (
    TokenReader, TokenKind, SourceLocation, ScannerError,
    ContractViolationError, UnrecognizedTokenError
)
from sexpdump.lexer.errors import ERROR_CODES, make_snippet


class TestSnippets(unittest.TestCase):
    """Test how remaining text is quoted in diagnostics."""

    def test_short_text_is_kept(self):
        self.assertEqual(make_snippet("abc"), "abc")
        self.assertEqual(make_snippet(""), "")

    def test_long_text_is_cut(self):
        self.assertEqual(make_snippet("a" * 50), "a" * 40 + "...")

    def test_stops_at_newline(self):
        self.assertEqual(make_snippet("ab\ncd"), "ab...")


class TestContractViolation(unittest.TestCase):

    def test_rendering(self):
        reader = TokenReader("foo", filename="test.ast")
        with self.assertRaises(ContractViolationError) as context:
            reader.read_open_paren()

        rendered = str(context.exception)
        self.assertIn("ERROR[S001]: Expected open paren", rendered)
        self.assertIn("--> test.ast:1:1", rendered)
        self.assertIn("'foo'", rendered)
        self.assertIn("can_read_open_paren()", rendered)

    def test_at_end_of_dump(self):
        reader = TokenReader("")
        with self.assertRaises(ContractViolationError) as context:
            reader.read_identifier()
        self.assertEqual(context.exception.diagnostic.help_text,
                         "The dump ended before this token.")

    def test_is_a_scanner_error(self):
        reader = TokenReader(")")
        with self.assertRaises(ScannerError):
            reader.read_key()


class TestUnrecognizedToken(unittest.TestCase):

    def test_error_is_returned_not_raised(self):
        reader = TokenReader("  )x")
        error = reader.unrecognized_token_error(TokenKind.KEY, TokenKind.LOCATION)

        self.assertIsInstance(error, UnrecognizedTokenError)
        self.assertEqual(error.expected, (TokenKind.KEY, TokenKind.LOCATION))
        self.assertEqual(error.snippet, ")x")
        self.assertEqual(error.location, SourceLocation("<dump>", 1, 3, 2))
        self.assertIn("expected key or location", str(error))
        self.assertIn("S002", str(error))
        self.assertEqual(reader.remaining, ")x")

    def test_without_expected_kinds(self):
        error = TokenReader("???").unrecognized_token_error()
        self.assertEqual(error.expected, ())
        self.assertIn("No recognized token at '???'", str(error))

    def test_error_codes_are_documented(self):
        for code in ("S001", "S002", "S101"):
            self.assertIn(code, ERROR_CODES)


if __name__ == "__main__":
    unittest.main()
