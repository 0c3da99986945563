#!/usr/bin/env python3
"""
Main test runner for mathval tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_smoke_tests():
    """Push a few expressions through the lexer and parser."""

    print("🚀 mathval Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from mathval.lexer.lexer import Lexer
        from mathval.parser.parser import Parser
        from mathval.parser.ast_nodes import to_source
        from mathval.parser.errors import ParseError

        print("✅ All mathval modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import mathval modules: {e}")
        return False

    # Test the lexing and parsing pipeline
    print("Testing lexing and parsing pipeline...")
    source = "(49 + 77)*((14-2)/11)\\2"
    try:
        print("  🔧 Lexing...")
        tokens = Lexer(source).tokenize()
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        expression = Parser(source).parse()
        print(f"     Parsed {len(expression.chain())} top-level operands: {to_source(expression)}")
        print()

    except ParseError as e:
        print(f"❌ Parsing pipeline test FAILED: {e}")
        return False

    # Test exact decimal literals
    print("  🧮 Testing exact decimal literals...")
    number = Parser("0.1").parse_number()
    if number.value.denominator != 10:
        print(f"     ❌ Expected 1/10, got {number.value}")
        return False
    print(f"     ✅ 0.1 parsed as {number.value}")

    # Test error handling
    print("  ❌ Testing error handling...")
    for bad in ["", "10^", "(10", "2 × 3"]:
        try:
            Parser(bad).parse()
        except ParseError as e:
            print(f"     ✅ {bad!r} rejected with {e.code} ({e.kind.value})")
        else:
            print(f"     ❌ {bad!r} was accepted")
            return False

    print()
    return True


def run_unit_tests():
    """Discover and run every unittest module under tests/."""
    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return result.wasSuccessful()


def run_all_tests():
    """Run all mathval tests."""
    if not run_smoke_tests():
        return False

    if not run_unit_tests():
        print("❌ Unit tests FAILED")
        return False

    print()
    print("🎉 All tests PASSED!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
