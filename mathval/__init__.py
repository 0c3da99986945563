"""
mathval Package

A lexer and recursive descent parser for arithmetic expressions with
exact rational literals.

Architecture:
    mathval/
    ├── lexer/           # Tokenization and lexical analysis
    └── parser/          # Syntax analysis, AST generation, exact decimals

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@mathval.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexerError, tokenize_string, tokenize_file
from .parser import (
    Parser, parse_string, parse_file, to_source,
    Expression, Factor, Power, Term, Number, AddOp, MultiplyOp, ExponentOp,
    ParseError, UnexpectedTokenError, MissingRightParenError,
    UnexpectedEndOfInputError, IllegalCharacterError, NumberConversionError,
)

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",

    # Convenience functions
    "tokenize_string",
    "tokenize_file",
    "parse_string",
    "parse_file",
    "to_source",

    # AST nodes
    "Expression", "Factor", "Power", "Term", "Number",
    "AddOp", "MultiplyOp", "ExponentOp",

    # Errors
    "LexerError",
    "ParseError",
    "UnexpectedTokenError",
    "MissingRightParenError",
    "UnexpectedEndOfInputError",
    "IllegalCharacterError",
    "NumberConversionError",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
