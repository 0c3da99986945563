"""
mathval Parser Package

Implements a recursive descent parser for arithmetic expressions.
Produces immutable Abstract Syntax Trees whose nesting encodes operator
precedence, with numeric literals held as exact rationals.

Key Features:
- One parse routine per grammar production
- Single-token lookahead and pushback over a pull-based lexer
- Exact decimal literals (fractions.Fraction), no floating point
- Structured errors with source locations and partial trees

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, SourceSpan,
    Expression, Factor, Power, Term, Number,
    Operator, AddOp, MultiplyOp, ExponentOp,
    to_source,
)
from .parser import Parser, parse_string, parse_file
from .rational import decimal_to_fraction
from .errors import (
    ErrorKind, ParseError, UnexpectedTokenError, MissingRightParenError,
    UnexpectedEndOfInputError, IllegalCharacterError, NumberConversionError,
)

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "SourceSpan",
    "Expression", "Factor", "Power", "Term", "Number",
    "Operator", "AddOp", "MultiplyOp", "ExponentOp",
    "to_source",

    # Exact numbers
    "decimal_to_fraction",

    # Error handling
    "ErrorKind", "ParseError", "UnexpectedTokenError", "MissingRightParenError",
    "UnexpectedEndOfInputError", "IllegalCharacterError", "NumberConversionError",
]
