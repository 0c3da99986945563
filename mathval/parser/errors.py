"""
Error handling for the mathval parser.

Every failure stops the parse immediately and is raised to the caller as a
ParseError subclass carrying a Diagnostic. The grammar routine that fails
may attach whatever part of the tree it had already built as `partial`,
which is informative only.

Author: xwest
"""

from enum import Enum
from typing import Any, List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation, describe_token_type
from ..lexer.errors import Diagnostic, ErrorRecovery, invalid_character_help


class ErrorKind(Enum):
    """Failure categories reported by the parser."""
    UNEXPECTED_EOF = "unexpected_eof"
    SYNTAX = "syntax"
    NUMERIC_CONVERSION = "numeric_conversion"
    ILLEGAL_CHARACTER = "illegal_character"


class ParseError(Exception):
    """
    Exception raised when the parser encounters malformed input.

    Contains detailed diagnostic information for error reporting.
    """

    kind = ErrorKind.SYNTAX

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        partial: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token
        self.partial = partial

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """A token appeared where a specific category was required."""
    kind = ErrorKind.SYNTAX


class MissingRightParenError(UnexpectedTokenError):
    """A parenthesized expression was not closed."""


class UnexpectedEndOfInputError(UnexpectedTokenError):
    """Input ran out while a grammar rule still needed tokens."""
    kind = ErrorKind.UNEXPECTED_EOF


class IllegalCharacterError(UnexpectedTokenError):
    """The lexer produced an ILLEGAL token."""
    kind = ErrorKind.ILLEGAL_CHARACTER


class NumberConversionError(ParseError):
    """A numeric literal could not be turned into an exact rational."""
    kind = ErrorKind.NUMERIC_CONVERSION


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unclosed delimiter",
    "P010": "Unexpected end of input",
    "P013": "Invalid numeric literal",
    "P014": "Illegal character",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: str, found: Token, partial: Any = None) -> ParseError:
    """Create an error for an unexpected token."""
    if found.type == TokenType.ILLEGAL:
        return create_illegal_character_error(found, expected, partial)
    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(expected, found.location, partial)

    found_str = describe_token_type(found.type)
    return UnexpectedTokenError(
        message=f"Expected {expected}, found {found_str} {found.lexeme!r}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found_str} instead.",
        partial=partial
    )


def create_missing_right_paren_error(open_token: Token, found: Token, partial: Any = None) -> ParseError:
    """Create an error for a '(' that was never closed."""
    found_str = describe_token_type(found.type)
    return MissingRightParenError(
        message=f"Expected ')', found {found_str}",
        location=found.location,
        token=found,
        code="P004",
        help_text=f"The opening '(' at {open_token.location} was never closed.",
        suggestions=["Add a closing ')'", "Check for missing delimiters"],
        partial=partial
    )


def create_unexpected_eof_error(expected: str, location: Optional[SourceLocation],
                                partial: Any = None) -> ParseError:
    """Create an error for unexpected end of input."""
    return UnexpectedEndOfInputError(
        message=f"Unexpected end of input, expected {expected}",
        location=location,
        code="P010",
        help_text=f"The parser reached the end of the input while expecting {expected}.",
        suggestions=[f"Add the missing {expected}", "Check for a trailing operator"],
        partial=partial
    )


def create_illegal_character_error(found: Token, expected: Optional[str] = None,
                                   partial: Any = None) -> ParseError:
    """Create an error for a character the lexer could not classify."""
    char = found.lexeme
    message = f"Illegal character {char!r}"
    if expected:
        message += f", expected {expected}"

    return IllegalCharacterError(
        message=message,
        location=found.location,
        token=found,
        code="P014",
        help_text=invalid_character_help(char),
        suggestions=ErrorRecovery.suggest_ascii_alternatives(char),
        partial=partial
    )


def create_number_conversion_error(text: str, reason: str,
                                   location: Optional[SourceLocation] = None) -> ParseError:
    """Create an error for a literal that is not an exact decimal."""
    return NumberConversionError(
        message=f"Invalid numeric literal: {text!r}",
        location=location,
        code="P013",
        help_text=reason,
        suggestions=["Use digits with an optional single '.' and fractional digits"]
    )
