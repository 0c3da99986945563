"""
Tests for AST node definitions.

Tests cover:
- Structural invariants enforced at construction
- Immutability and structural equality
- chain()/operands() flattening
- Visitor dispatch and reserialization

Author: xwest
"""

import dataclasses
import os
import sys
import unittest
from fractions import Fraction

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mathval.lexer.tokens import TokenType, Precedence
from mathval.parser.ast_nodes import (
    ASTNodeType, ASTVisitor, Expression, Factor, Power, Term, Number,
    AddOp, MultiplyOp, ExponentOp, to_source,
)
from mathval.parser.parser import parse_string


def number_term(text):
    return Term(number=Number.from_text(text))


def lone_factor(text):
    return Factor(Power(number_term(text)))


class TestNodeInvariants(unittest.TestCase):
    """Construction-time checks."""

    def test_term_holds_exactly_one(self):
        with self.assertRaises(ValueError):
            Term()
        with self.assertRaises(ValueError):
            Term(expression=Expression(lone_factor("1")), number=Number.from_text("1"))

    def test_chain_requires_operand(self):
        with self.assertRaises(ValueError):
            Power(None)

    def test_chain_op_and_rest_together(self):
        with self.assertRaises(ValueError):
            Expression(lone_factor("1"), AddOp(TokenType.PLUS))
        with self.assertRaises(ValueError):
            Factor(Power(number_term("1")), None, lone_factor("2"))

    def test_operator_classes(self):
        with self.assertRaises(ValueError):
            AddOp(TokenType.MULTIPLY)
        with self.assertRaises(ValueError):
            ExponentOp(TokenType.PLUS)
        with self.assertRaises(ValueError):
            MultiplyOp(TokenType.POW)

    def test_operator_lexeme_defaults(self):
        self.assertEqual(AddOp(TokenType.MINUS).lexeme, "-")
        self.assertEqual(MultiplyOp(TokenType.INT_DIVIDE).lexeme, "\\")
        self.assertEqual(MultiplyOp(TokenType.MODULO).lexeme, "%")
        self.assertEqual(ExponentOp(TokenType.POW).lexeme, "^")

    def test_operator_precedence(self):
        self.assertEqual(AddOp(TokenType.PLUS).precedence, Precedence.ADDITIVE)
        self.assertEqual(MultiplyOp(TokenType.DIVIDE).precedence, Precedence.MULTIPLICATIVE)
        self.assertEqual(ExponentOp(TokenType.POW).precedence, Precedence.EXPONENTIATION)

    def test_number_text_and_value_agree(self):
        number = Number("2.5", Fraction(5, 2))
        self.assertEqual(number.value, Fraction(5, 2))

        with self.assertRaises(ValueError):
            Number("2.5", Fraction(1, 2))

    def test_number_value_is_fraction(self):
        number = Number("3", 3)
        self.assertIsInstance(number.value, Fraction)


class TestNodeBehaviour(unittest.TestCase):
    """Equality, immutability and traversal helpers."""

    def test_frozen(self):
        number = Number.from_text("1")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            number.text = "2"

        expression = Expression(lone_factor("1"))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            expression.op = AddOp(TokenType.PLUS)

    def test_equality_ignores_spans(self):
        self.assertEqual(parse_string("1 + 2"), parse_string("1+2"))
        self.assertNotEqual(parse_string("1+2"), parse_string("1-2"))
        self.assertNotEqual(Number.from_text("2.5"), Number.from_text("2.50"))

    def test_node_types(self):
        expression = parse_string("(1)+2*3^4")
        self.assertEqual(expression.node_type, ASTNodeType.EXPRESSION)
        self.assertEqual(expression.factor.node_type, ASTNodeType.FACTOR)
        self.assertEqual(expression.op.node_type, ASTNodeType.ADD_OP)
        self.assertEqual(expression.factor.power.node_type, ASTNodeType.POWER)
        self.assertEqual(expression.factor.power.term.node_type, ASTNodeType.TERM)

    def test_children(self):
        expression = parse_string("1+2")
        children = expression.children()
        self.assertEqual(len(children), 3)
        self.assertIsInstance(children[0], Factor)
        self.assertIsInstance(children[1], AddOp)
        self.assertIsInstance(children[2], Expression)

        self.assertEqual(Number.from_text("1").children(), [])
        self.assertEqual(len(Expression(lone_factor("1")).children()), 1)

    def test_chain(self):
        expression = parse_string("1-2+3")
        links = expression.chain()

        self.assertEqual([op.lexeme if op else None for op, _ in links], [None, "-", "+"])
        self.assertEqual([to_source(operand) for _, operand in links], ["1", "2", "3"])

    def test_chain_of_single_operand(self):
        power = Power(number_term("5"))
        self.assertEqual(power.chain(), ((None, number_term("5")),))

    def test_is_parenthesized(self):
        self.assertTrue(parse_string("(1)").factor.power.term.is_parenthesized)
        self.assertFalse(parse_string("1").factor.power.term.is_parenthesized)

    def test_spans(self):
        expression = parse_string("12 + 3", "expr.txt")
        self.assertEqual(expression.span.start.column, 1)
        self.assertEqual(expression.span.end.column, 6)
        self.assertEqual(str(expression.span), "expr.txt:1:1-1:6")

        term = parse_string("(1)").factor.power.term
        self.assertEqual((term.span.start.column, term.span.end.column), (1, 3))

    def test_hand_built_nodes_have_no_span(self):
        self.assertIsNone(Expression(lone_factor("1")).span)


class TestVisitor(unittest.TestCase):
    """Visitor dispatch."""

    def test_generic_visit_reaches_every_number(self):
        class NumberCollector(ASTVisitor):
            def __init__(self):
                self.values = []

            def visit_Number(self, node):
                self.values.append(node.value)

        collector = NumberCollector()
        parse_string("(1+2.5)*3^0.5").accept(collector)
        self.assertEqual(collector.values, [Fraction(1), Fraction(5, 2), Fraction(3), Fraction(1, 2)])

    def test_operator_dispatch(self):
        class OperatorCounter(ASTVisitor):
            def __init__(self):
                self.count = 0

            def visit_AddOp(self, node):
                self.count += 1

            visit_MultiplyOp = visit_AddOp
            visit_ExponentOp = visit_AddOp

        counter = OperatorCounter()
        counter.visit(parse_string("1+2*3^4-5%6"))
        self.assertEqual(counter.count, 5)


class TestToSource(unittest.TestCase):
    """Reserialization."""

    def test_round_trip(self):
        for source in ["1", "2.50", "(49+77)*((14-2)/11)\\2", "2^3^2", "1%2-3"]:
            with self.subTest(source=source):
                self.assertEqual(to_source(parse_string(source)), source)

    def test_whitespace_removed(self):
        self.assertEqual(to_source(parse_string(" ( 1 +\n2 ) ")), "(1+2)")

    def test_str_is_source(self):
        self.assertEqual(str(parse_string("1 + 2")), "1+2")
        self.assertEqual(str(AddOp(TokenType.PLUS)), "+")

    def test_hand_built_tree(self):
        tree = Expression(
            lone_factor("10"),
            AddOp(TokenType.MINUS),
            Expression(Factor(Power(number_term("2"), ExponentOp(TokenType.POW), Power(number_term("3"))))),
        )
        self.assertEqual(to_source(tree), "10-2^3")


if __name__ == "__main__":
    unittest.main()
