"""
Error handling for the mathval lexer.

Provides diagnostic records with source location information and
suggestions for characters that look like a supported operator.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation, SINGLE_CHAR_TOKENS


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised by strict tokenization when an illegal character is found.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """Suggestions offered alongside illegal-character diagnostics."""

    # Unicode look-alikes of the supported ASCII operators
    ASCII_ALTERNATIVES = {
        '×': ['*'],
        '⋅': ['*'],
        '·': ['*'],
        '∗': ['*'],
        '÷': ['/'],
        '∕': ['/'],
        '−': ['-'],
        '–': ['-'],
        '—': ['-'],
        '＋': ['+'],
        '∖': ['\\'],
        '＾': ['^'],
        ',': ['.'],
        '[': ['('],
        '{': ['('],
        ']': [')'],
        '}': [')'],
    }

    @staticmethod
    def suggest_ascii_alternatives(char: str) -> List[str]:
        """Suggest supported characters that the given character resembles."""
        return [alt for alt in ErrorRecovery.ASCII_ALTERNATIVES.get(char, [])
                if alt in SINGLE_CHAR_TOKENS]


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
}


def invalid_character_help(char: str) -> str:
    """Help text for a character the lexer does not recognize."""
    suggestions = ErrorRecovery.suggest_ascii_alternatives(char)

    if suggestions:
        return f"Did you mean {' or '.join(repr(s) for s in suggestions)}?"
    elif char.isprintable():
        return f"The character '{char}' is not valid in an arithmetic expression."
    return f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=invalid_character_help(char),
        suggestions=ErrorRecovery.suggest_ascii_alternatives(char)
    )
