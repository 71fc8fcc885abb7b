#!/usr/bin/env python3
"""
Main test runner for the sexpdump token reader.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


SAMPLE_DUMP = """(source_file
  (func_decl "main()" interface type='() -> ()' access=internal
    (brace_stmt)))
"""


def run_smoke_test():
    """Walk a small dump token by token and print what was read."""

    print("🚀 sexpdump Token Reader Test Suite")
    print("=" * 60)

    try:
        from sexpdump.lexer import TokenReader, ScannerError
        print("✅ Token reader imported successfully")
        print()
    except ImportError as e:
        print(f"❌ Failed to import token reader: {e}")
        return False

    print("Reading sample dump...")
    reader = TokenReader(SAMPLE_DUMP, trace=lambda message: print(f"     {message}"))
    try:
        while not reader.at_end():
            if reader.can_read_open_paren():
                reader.read_open_paren()
            elif reader.can_read_close_paren():
                reader.read_close_paren()
            elif reader.can_read_key():
                reader.read_key()
                reader.read_identifier_or_string()
            elif reader.can_read_identifier_or_string():
                reader.read_identifier_or_string()
            else:
                raise reader.unrecognized_token_error()
    except ScannerError as e:
        print(f"❌ Smoke test FAILED:\n{e}")
        return False

    if not reader.is_balanced:
        print(f"❌ Unbalanced dump, depth {reader.depth}")
        return False

    print(f"  ✅ Read {len(reader.tokens)} tokens")
    print()
    return True


def run_unit_tests():
    """Discover and run everything under tests/."""
    print("Running unit tests...")
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    ok = run_smoke_test() and run_unit_tests()
    print("=" * 60)
    print("✅ All tests passed" if ok else "❌ Some tests failed")
    sys.exit(0 if ok else 1)
