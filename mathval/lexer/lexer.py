"""
mathval Lexer - turns a character stream into tokens

The scanner reads one character at a time and can push back exactly one
character, which is all the maximal-munch runs (whitespace, letters,
digits) need. Everything else is a single-character token.

xwest
"""

import logging
import unicodedata
from io import StringIO
from typing import Callable, Iterator, List, Optional, TextIO, Tuple, Union

from .tokens import Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS
from .errors import create_invalid_character_error

logger = logging.getLogger(__name__)


# str.isspace also accepts the information separators U+001C..U+001F,
# which lack the Unicode White_Space property
_NON_WHITE_SPACE_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(char: str) -> bool:
    """Character with the Unicode White_Space property."""
    return char.isspace() and char not in _NON_WHITE_SPACE_SEPARATORS


def is_letter(char: str) -> bool:
    """Any Unicode letter (categories Lu, Ll, Lt, Lm, Lo)."""
    return char.isalpha()


def is_digit(char: str) -> bool:
    """Unicode decimal digit (category Nd)."""
    return unicodedata.category(char) == 'Nd'


class Lexer:
    """
    mathval lexical analyzer.

    Pulls characters from a string or text stream and hands out one token
    per call to scan(). Whitespace is reported as a token; skipping it is
    the parser's decision.
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<string>"):
        """
        Initialize the lexer.

        Args:
            source: Expression text, or a text stream with a read(size) method
            filename: Name used in source locations
        """
        self._stream: TextIO = StringIO(source) if isinstance(source, str) else source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        # One character of pushback
        self._last: Optional[str] = None
        self._pending: Optional[str] = None
        self._previous_position: Tuple[int, int, int] = (0, 1, 1)

        logger.debug("Lexer created for %s", filename)

    def read(self) -> str:
        """Read the next character, or '' at end of input."""
        if self._pending is not None:
            char, self._pending = self._pending, None
        else:
            char = self._stream.read(1)

        self._last = char
        self._previous_position = (self.pos, self.line, self.column)
        if char:
            self._advance(char)
        return char

    def unread(self):
        """Place the previously read character back on the input."""
        if self._last is None:
            return
        if self._last:
            self._pending = self._last
            self.pos, self.line, self.column = self._previous_position
        self._last = None

    def scan(self) -> Token:
        """Return the next token from the input."""
        start = self.location()
        char = self.read()

        if not char:
            token = Token(TokenType.EOF, "", start)
        elif is_whitespace(char):
            self.unread()
            token = Token(TokenType.WHITESPACE, self.scan_contiguous(is_whitespace), start)
        elif is_letter(char):
            self.unread()
            token = self.scan_keyword()
        elif is_digit(char):
            self.unread()
            token = self.scan_digits()
        else:
            token = Token(SINGLE_CHAR_TOKENS.get(char, TokenType.ILLEGAL), char, start)

        logger.debug("Scanned %s at %s", token, start)
        return token

    def scan_keyword(self) -> Token:
        """Consume a run of letters.

        The grammar has no keywords yet, so every run is reported as an
        unknown keyword.
        """
        start = self.location()
        return Token(TokenType.UNKNOWN_KEYWORD, self.scan_contiguous(is_letter), start)

    def scan_digits(self) -> Token:
        """Consume a run of decimal digits."""
        start = self.location()
        return Token(TokenType.DIGITS, self.scan_contiguous(is_digit), start)

    def scan_contiguous(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters up to the first one that fails predicate."""
        chars = []

        while True:
            char = self.read()
            if not char:
                break
            if not predicate(char):
                self.unread()
                break
            chars.append(char)

        return ''.join(chars)

    def tokenize(self) -> List[Token]:
        """
        Scan the remaining input.

        Returns:
            List of tokens ending with the EOF token
        """
        return list(self)

    def location(self) -> SourceLocation:
        """Current read position."""
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.scan()
            yield token
            if token.type == TokenType.EOF:
                return

    def _advance(self, char: str):
        """Advance position past char, updating line/column."""
        self.pos += 1
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1


def tokenize_string(source: str, filename: str = "<string>", strict: bool = False) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Expression text
        filename: Filename for error reporting
        strict: Raise on the first illegal character instead of returning
            an ILLEGAL token for it

    Returns:
        List of tokens, whitespace included, ending with EOF

    Raises:
        LexerError: If strict and an illegal character is found
    """
    return _collect(Lexer(source, filename), strict)


def tokenize_file(filepath: str, strict: bool = False) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    The file is streamed through the lexer and closed before returning.

    Raises:
        LexerError: If strict and an illegal character is found
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return _collect(Lexer(f, filepath), strict)


def _collect(lexer: Lexer, strict: bool) -> List[Token]:
    tokens = []
    for token in lexer:
        if strict and token.type == TokenType.ILLEGAL:
            raise create_invalid_character_error(token.lexeme, token.location)
        tokens.append(token)
    return tokens
