"""
mathval Lexer Package

Implements the lexical analyzer for arithmetic expressions.

Key Features:
- Pull-based scanning, one token per scan() call
- Maximal-munch runs of Unicode whitespace, letters and decimal digits
- Single-character operator and punctuation tokens
- Illegal characters reported as tokens, not exceptions
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import (
    Token, TokenType, SourceLocation, Precedence,
    ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS, EXPONENT_OPERATORS,
)
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Precedence",
    "ADDITIVE_OPERATORS",
    "MULTIPLICATIVE_OPERATORS",
    "EXPONENT_OPERATORS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
