"""
mathval Recursive Descent Parser

One routine per grammar production. Precedence and associativity come
from how the productions nest, not from a precedence table:

    Expression  = Factor | Factor AddOp Expression ;
    Factor      = Power | Power MultiplyOp Factor ;
    Power       = Term | Term ExponentOp Power ;
    Term        = '(' Expression ')' | Number ;
    Number      = Digits | Digits '.' Digits ;

The descent is driven by an explicit stack of open productions rather than
the Python call stack. Chains are collected in a loop and folded back into
the right-nested shape, so neither long chains like 1+1+...+1 nor deeply
parenthesized input run into the recursion limit.

Author: xwest
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional, TextIO, Tuple, Type, Union

from ..lexer.lexer import Lexer
from ..lexer.tokens import (
    Token, TokenType, ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS, EXPONENT_OPERATORS,
)
from .ast_nodes import (
    ASTNode, Expression, Factor, Power, Term, Number, Operator, AddOp, MultiplyOp,
    ExponentOp, SourceSpan, join_spans,
)
from .errors import (
    ParseError, create_unexpected_token_error, create_unexpected_eof_error,
    create_missing_right_paren_error,
)
from .rational import decimal_to_fraction

logger = logging.getLogger(__name__)

# Operand production of each chain production
OPERAND_CLASS: Dict[type, type] = {
    Expression: Factor,
    Factor: Power,
    Power: Term,
}

# Single-operand wrapping from a production to the one above it
_WRAPPER: Dict[type, type] = {
    Term: Power,
    Power: Factor,
    Factor: Expression,
}

_LEVEL: Dict[type, int] = {Expression: 0, Factor: 1, Power: 2, Term: 3}


@dataclass
class _ChainFrame:
    """A chain production that has read part of `operand (operator operand)*`."""
    node_class: type
    operator_types: FrozenSet[TokenType]
    parse_operator: Callable[[], Operator]
    operands: List[ASTNode] = field(default_factory=list)
    operators: List[Operator] = field(default_factory=list)

    @property
    def expected(self) -> str:
        if self.operators:
            return f"an operand after {self.operators[-1].lexeme!r}"
        return "an expression"


@dataclass
class _GroupFrame:
    """A '(' whose Expression is being read."""
    open_token: Token


def lift(node: Optional[ASTNode], target: type) -> Optional[ASTNode]:
    """
    Wrap node in single-operand productions until it is a target.

    Term -> Power -> Factor -> Expression. Returns None when node is None or
    already sits above target, since going back down would need parentheses.
    """
    if node is None or type(node) not in _LEVEL or _LEVEL[type(node)] < _LEVEL[target]:
        return None
    while not isinstance(node, target):
        node = _WRAPPER[type(node)](node, span=node.span)
    return node


class Parser:
    """
    mathval parser.

    Pulls tokens from a Lexer through a single-slot buffer that supports
    one token of lookahead and one level of pushback.
    """

    def __init__(self, source: Union[Lexer, str, TextIO], filename: str = "<string>"):
        """
        Initialize parser.

        Args:
            source: A Lexer, expression text, or a text stream
            filename: Name used in source locations when a Lexer is created here
        """
        self.lexer = source if isinstance(source, Lexer) else Lexer(source, filename)

        # Last token read from the lexer and whether it is still unconsumed
        self._buffer: Optional[Token] = None
        self._pending = False

        self._chain_rules: Dict[type, Tuple[FrozenSet[TokenType], Callable[[], Operator]]] = {
            Expression: (ADDITIVE_OPERATORS, self.parse_add_op),
            Factor: (MULTIPLICATIVE_OPERATORS, self.parse_multiply_op),
            Power: (EXPONENT_OPERATORS, self.parse_exponent_op),
        }

    # Token buffer

    def scan(self) -> Token:
        """Return the pending token if there is one, else the next from the lexer."""
        if self._pending:
            self._pending = False
            return self._buffer

        self._buffer = self.lexer.scan()
        return self._buffer

    def unscan(self):
        """Push the last scanned token back. Only one level is supported."""
        if self._buffer is not None:
            self._pending = True

    def peek(self) -> Token:
        """Return the next non-whitespace token without consuming it."""
        if not self._pending:
            self._buffer = self.lexer.scan()
            self._pending = True

        # Whitespace runs are maximal, so one skip is enough
        if self._buffer.is_whitespace:
            self._buffer = self.lexer.scan()

        return self._buffer

    def scan_ignore_whitespace(self) -> Token:
        """Scan the next non-whitespace token."""
        token = self.scan()
        if token.is_whitespace:
            token = self.scan()
        return token

    # Entry point

    def parse(self) -> Expression:
        """
        Parse the whole input as one Expression.

        Returns:
            Root Expression node

        Raises:
            ParseError: On the first malformed or unexpected token,
                including anything left over after the expression
        """
        logger.debug("Parsing %s", self.lexer.filename)

        try:
            expression = self.parse_expression()

            trailing = self.peek()
            if trailing.type != TokenType.EOF:
                raise create_unexpected_token_error("an operator or end of input", trailing,
                                                    partial=expression)
        except ParseError as e:
            logger.debug("Parse of %s failed: %s", self.lexer.filename, e.message)
            raise

        logger.debug("Parsed %s: %s", self.lexer.filename, expression)
        return expression

    # Productions

    def parse_expression(self) -> Expression:
        """Expression = Factor | Factor AddOp Expression"""
        return self._parse_nested([self._chain_frame(Expression)])

    def parse_factor(self) -> Factor:
        """Factor = Power | Power MultiplyOp Factor"""
        return self._parse_nested([self._chain_frame(Factor)])

    def parse_power(self) -> Power:
        """Power = Term | Term ExponentOp Power"""
        return self._parse_nested([self._chain_frame(Power)])

    def parse_term(self) -> Term:
        """Term = '(' Expression ')' | Number"""
        return self._parse_nested([])

    def parse_number(self) -> Number:
        """Number = Digits | Digits '.' Digits"""
        token = self._expect_input("digits")
        if token.type != TokenType.DIGITS:
            raise create_unexpected_token_error("decimal or floating digits", token)

        integral = self.scan_ignore_whitespace()
        last = integral
        text = integral.lexeme

        if self.peek().type == TokenType.DOT:
            self.scan_ignore_whitespace()
            fractional = self.peek()
            if fractional.type != TokenType.DIGITS:
                raise create_unexpected_token_error("fractional digits", fractional)
            last = self.scan_ignore_whitespace()
            text += "." + last.lexeme

        value = decimal_to_fraction(text, integral.location)
        return Number(text, value, SourceSpan(integral.location, last.location))

    def parse_add_op(self) -> AddOp:
        """AddOp = '+' | '-'"""
        return self._parse_operator(AddOp, "additive operator")

    def parse_multiply_op(self) -> MultiplyOp:
        """MultiplyOp = '*' | '/' | '\\' | '%'"""
        return self._parse_operator(MultiplyOp, "multiplicative operator")

    def parse_exponent_op(self) -> ExponentOp:
        """ExponentOp = '^'"""
        return self._parse_operator(ExponentOp, "exponentiation operator")

    # Utility methods

    def _expect_input(self, expected: str) -> Token:
        """Peek at the next token, failing if the input is exhausted."""
        token = self.peek()
        if token.type == TokenType.EOF:
            raise create_unexpected_eof_error(expected, token.location)
        return token

    def _parse_operator(self, node_class: Type[Operator], expected: str) -> Operator:
        token = self._expect_input(expected)
        if token.type not in node_class.allowed:
            raise create_unexpected_token_error(expected, token)
        return node_class.from_token(self.scan_ignore_whitespace())

    def _chain_frame(self, node_class: type) -> _ChainFrame:
        operator_types, parse_operator = self._chain_rules[node_class]
        return _ChainFrame(node_class, operator_types, parse_operator)

    def _parse_nested(self, stack: list):
        """
        Run the productions on stack until the bottom one is complete.

        Each pass reads one Term: the chains below the top frame are opened
        down to Power, then either a Number is read or a '(' opens a group
        with a fresh Expression chain. A finished Term goes to _reduce. An
        empty stack reads a single Term.

        On failure the open frames are unwound into the partial tree
        attached to the error.
        """
        try:
            while True:
                if stack and isinstance(stack[-1], _ChainFrame):
                    self._expect_input(stack[-1].expected)
                    node_class = stack[-1].node_class
                    while node_class is not Power:
                        node_class = OPERAND_CLASS[node_class]
                        stack.append(self._chain_frame(node_class))

                token = self._expect_input("a number or '('")

                if token.type == TokenType.LEFT_PAREN:
                    stack.append(_GroupFrame(self.scan_ignore_whitespace()))
                    stack.append(self._chain_frame(Expression))
                    continue

                if token.type != TokenType.DIGITS:
                    raise create_unexpected_token_error("a number or '('", token)

                number = self.parse_number()
                node = self._reduce(stack, Term(number=number, span=number.span))
                if node is not None:
                    return node
        except ParseError as e:
            e.partial = self._unwind(stack, e.partial)
            raise

    def _reduce(self, stack: list, node: ASTNode) -> Optional[ASTNode]:
        """
        Close every frame that node completes.

        Returns the finished bottom node once the stack is empty, or None
        when a chain took another operator and needs its next operand.
        """
        while stack:
            frame = stack[-1]

            if isinstance(frame, _GroupFrame):
                stack.pop()
                closing = self.peek()
                if closing.type != TokenType.RIGHT_PAREN:
                    raise create_missing_right_paren_error(frame.open_token, closing,
                                                           partial=Term(expression=node))
                closing = self.scan_ignore_whitespace()
                node = Term(expression=node,
                            span=SourceSpan(frame.open_token.location, closing.location))
                continue

            frame.operands.append(node)
            if self.peek().type in frame.operator_types:
                frame.operators.append(frame.parse_operator())
                return None

            stack.pop()
            node = self._fold_right(frame.node_class, frame.operands, frame.operators)

        return node

    def _unwind(self, stack: list, partial: Optional[ASTNode]) -> Optional[ASTNode]:
        """
        Build the partial tree from the frames open when an error was raised.

        The failing production's own partial tree is lifted to fill the
        operand its parent was waiting for. A chain with nothing to fill
        the gap drops its dangling operator.
        """
        while stack:
            frame = stack.pop()

            if isinstance(frame, _GroupFrame):
                inner = lift(partial, Expression)
                partial = Term(expression=inner) if inner is not None else None
                continue

            operand = lift(partial, OPERAND_CLASS[frame.node_class])
            if operand is not None and len(frame.operators) == len(frame.operands):
                partial = self._fold_right(frame.node_class, frame.operands + [operand],
                                           frame.operators)
            elif frame.operands:
                partial = self._fold_right(frame.node_class, frame.operands,
                                           frame.operators[:len(frame.operands) - 1])

        return partial

    @staticmethod
    def _fold_right(node_class: type, operands: List[ASTNode], operators: List[Operator]):
        """Build node_class(o1, op1, node_class(o2, op2, ...)) from the innermost out."""
        node = node_class(operands[-1], span=operands[-1].span)
        for operand, operator in zip(reversed(operands[:-1]), reversed(operators)):
            node = node_class(operand, operator, node, span=join_spans(operand.span, node.span))
        return node


def parse_string(source: str, filename: str = "<string>") -> Expression:
    """
    Convenience function to parse an expression string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        Root Expression node

    Raises:
        ParseError: If parsing fails
    """
    return Parser(source, filename).parse()


def parse_file(filepath: str) -> Expression:
    """
    Convenience function to parse an expression stored in a file.

    Raises:
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return Parser(f, filepath).parse()
