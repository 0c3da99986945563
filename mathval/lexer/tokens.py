"""
Token definitions for the mathval lexer.

This module defines every token category the scanner can produce:
- Special tokens (end of input, whitespace runs)
- Arithmetic operators, grouped into three precedence classes
- Digit runs and the decimal point
- Parentheses
- Unrecognized identifiers and illegal characters

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional


class TokenType(Enum):
    """
    Enumeration of all token types produced by the lexer.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    WHITESPACE = auto()             # Run of Unicode whitespace

    # ========================================================================
    # Identifiers
    # ========================================================================
    UNKNOWN_KEYWORD = auto()        # Run of letters, not used by the grammar

    # ========================================================================
    # Operators
    # ========================================================================

    # Additive
    PLUS = auto()                   # +
    MINUS = auto()                  # -

    # Multiplicative
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    INT_DIVIDE = auto()             # \
    MODULO = auto()                 # %

    # Exponentiation
    POW = auto()                    # ^

    # ========================================================================
    # Literals
    # ========================================================================
    DIGITS = auto()                 # Contiguous block of decimal digits

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    DOT = auto()                    # . (decimal point)

    # ========================================================================
    # Error Tokens
    # ========================================================================
    ILLEGAL = auto()                # Single unrecognized character


class Precedence(Enum):
    """Operator precedence classes, lowest binding first."""
    ADDITIVE = 1
    MULTIPLICATIVE = 2
    EXPONENTIATION = 3


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting and for the source spans stored on AST nodes.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, the exact literal text that produced it,
    and the source location of its first character.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_operator(self) -> bool:
        """Check if this token is an arithmetic operator."""
        return self.type in OPERATOR_PRECEDENCE

    @property
    def precedence(self) -> Optional[Precedence]:
        """Precedence class of an operator token, None for anything else."""
        return OPERATOR_PRECEDENCE.get(self.type)

    @property
    def is_whitespace(self) -> bool:
        return self.type == TokenType.WHITESPACE


# Operator classes. Membership in one of these sets is what the grammar
# checks, never the ordering of TokenType members.
ADDITIVE_OPERATORS: FrozenSet[TokenType] = frozenset({
    TokenType.PLUS,
    TokenType.MINUS,
})

MULTIPLICATIVE_OPERATORS: FrozenSet[TokenType] = frozenset({
    TokenType.MULTIPLY,
    TokenType.DIVIDE,
    TokenType.INT_DIVIDE,
    TokenType.MODULO,
})

EXPONENT_OPERATORS: FrozenSet[TokenType] = frozenset({
    TokenType.POW,
})

OPERATOR_PRECEDENCE: Dict[TokenType, Precedence] = {
    **{t: Precedence.ADDITIVE for t in ADDITIVE_OPERATORS},
    **{t: Precedence.MULTIPLICATIVE for t in MULTIPLICATIVE_OPERATORS},
    **{t: Precedence.EXPONENTIATION for t in EXPONENT_OPERATORS},
}

# Characters that always form a token on their own
SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    # Operators
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "\\": TokenType.INT_DIVIDE,
    "^": TokenType.POW,
    "%": TokenType.MODULO,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ".": TokenType.DOT,
}

# Human readable names used in diagnostics
TOKEN_DESCRIPTIONS: Dict[TokenType, str] = {
    TokenType.EOF: "end of input",
    TokenType.WHITESPACE: "whitespace",
    TokenType.UNKNOWN_KEYWORD: "identifier",
    TokenType.DIGITS: "digits",
    TokenType.LEFT_PAREN: "'('",
    TokenType.RIGHT_PAREN: "')'",
    TokenType.DOT: "'.'",
    TokenType.ILLEGAL: "illegal character",
    **{token_type: f"'{char}'" for char, token_type in SINGLE_CHAR_TOKENS.items()
       if token_type in OPERATOR_PRECEDENCE},
}


def describe_token_type(token_type: TokenType) -> str:
    """Return a short human readable description of a token type."""
    return TOKEN_DESCRIPTIONS.get(token_type, token_type.name)
