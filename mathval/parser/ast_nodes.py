"""
Abstract Syntax Tree node definitions for mathval.

There is one node class per grammar production:

    Expression  = Factor | Factor AddOp Expression ;
    Factor      = Power | Power MultiplyOp Factor ;
    Power       = Term | Term ExponentOp Power ;
    Term        = '(' Expression ')' | Number ;
    Number      = Digits | Digits '.' Digits ;

Nodes are frozen dataclasses. They compare structurally; the optional
source span is carried along but ignored by equality and repr.

Author: xwest
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from fractions import Fraction
from typing import Any, ClassVar, FrozenSet, List, Optional, Tuple

from ..lexer.tokens import (
    SourceLocation, Token, TokenType, Precedence, OPERATOR_PRECEDENCE,
    ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS, EXPONENT_OPERATORS,
    SINGLE_CHAR_TOKENS,
)
from .rational import decimal_to_fraction


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    EXPRESSION = "Expression"
    FACTOR = "Factor"
    POWER = "Power"
    TERM = "Term"
    NUMBER = "Number"
    ADD_OP = "AddOp"
    MULTIPLY_OP = "MultiplyOp"
    EXPONENT_OP = "ExponentOp"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source text (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


def join_spans(first: Optional[SourceSpan], last: Optional[SourceSpan]) -> Optional[SourceSpan]:
    """Span from the start of first to the end of last."""
    if first is None or last is None:
        return None
    return SourceSpan(first.start, last.end)


class ASTVisitor:
    """
    Dispatching visitor.

    visit(node) calls visit_<NodeClass>(node) when the subclass defines it,
    otherwise generic_visit(node), which visits every child.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        for child in node.children():
            self.visit(child)


class ASTNode:
    """Behaviour shared by all node classes."""

    node_type: ClassVar[ASTNodeType]

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def children(self) -> List['ASTNode']:
        """Populated child nodes, left to right."""
        return [value for value in (getattr(self, f.name) for f in fields(self))
                if isinstance(value, ASTNode)]

    def __str__(self) -> str:
        return to_source(self)


# ============================================================================
# Operators
# ============================================================================

_SYMBOLS = {token_type: char for char, token_type in SINGLE_CHAR_TOKENS.items()}


@dataclass(frozen=True)
class Operator(ASTNode):
    """A single operator token in a fixed grammar position."""
    type: TokenType
    lexeme: str = ""
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    allowed: ClassVar[FrozenSet[TokenType]] = frozenset()

    def __post_init__(self):
        if self.type not in self.allowed:
            raise ValueError(f"{type(self).__name__} cannot hold {self.type.name}")
        if not self.lexeme:
            object.__setattr__(self, "lexeme", _SYMBOLS[self.type])

    @classmethod
    def from_token(cls, token: Token) -> 'Operator':
        return cls(token.type, token.lexeme, SourceSpan(token.location, token.location))

    @property
    def precedence(self) -> Precedence:
        return OPERATOR_PRECEDENCE[self.type]


@dataclass(frozen=True)
class AddOp(Operator):
    """AddOp = '+' | '-'"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.ADD_OP
    allowed: ClassVar[FrozenSet[TokenType]] = ADDITIVE_OPERATORS


@dataclass(frozen=True)
class MultiplyOp(Operator):
    """MultiplyOp = '*' | '/' | '\\' | '%'"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.MULTIPLY_OP
    allowed: ClassVar[FrozenSet[TokenType]] = MULTIPLICATIVE_OPERATORS


@dataclass(frozen=True)
class ExponentOp(Operator):
    """ExponentOp = '^'"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPONENT_OP
    allowed: ClassVar[FrozenSet[TokenType]] = EXPONENT_OPERATORS


# ============================================================================
# Terminals
# ============================================================================

@dataclass(frozen=True)
class Number(ASTNode):
    """
    A numeric literal.

    `text` is the literal exactly as written; `value` is its exact rational
    value and is the one to compute with.
    """
    text: str
    value: Fraction
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.NUMBER

    def __post_init__(self):
        exact = decimal_to_fraction(self.text)
        if exact != self.value:
            raise ValueError(f"Number text {self.text!r} does not denote {self.value!r}")
        object.__setattr__(self, "value", exact)

    @classmethod
    def from_text(cls, text: str, span: Optional[SourceSpan] = None) -> 'Number':
        return cls(text, decimal_to_fraction(text), span)


@dataclass(frozen=True)
class Term(ASTNode):
    """Term = '(' Expression ')' | Number"""
    expression: Optional['Expression'] = None
    number: Optional[Number] = None
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.TERM

    def __post_init__(self):
        if (self.expression is None) == (self.number is None):
            raise ValueError("Term holds exactly one of expression or number")

    @property
    def is_parenthesized(self) -> bool:
        return self.expression is not None


# ============================================================================
# Operator chains
# ============================================================================

class _Chain:
    """
    Shared behaviour of the right-nested productions.

    Each subclass names its left operand and continuation fields; `op` is
    common to all three.
    """

    _operand_field: ClassVar[str]
    _rest_field: ClassVar[str]

    def _check_shape(self):
        if getattr(self, self._operand_field) is None:
            raise ValueError(f"{type(self).__name__} requires a {self._operand_field}")
        if (self.op is None) != (getattr(self, self._rest_field) is None):
            raise ValueError(f"{type(self).__name__} needs both op and {self._rest_field}, or neither")

    def chain(self) -> Tuple[Tuple[Optional[Operator], ASTNode], ...]:
        """
        The chain as (operator, operand) pairs in source order.

        The first pair has no operator. "1-2-3" gives
        ((None, 1), (-, 2), (-, 3)), so applying operators leftmost-first
        needs no knowledge of the nesting.
        """
        links = []
        node, op = self, None
        while node is not None:
            links.append((op, getattr(node, self._operand_field)))
            op = node.op
            node = getattr(node, self._rest_field)
        return tuple(links)

    def operands(self) -> List[ASTNode]:
        return [operand for _, operand in self.chain()]


@dataclass(frozen=True)
class Power(_Chain, ASTNode):
    """Power = Term | Term ExponentOp Power"""
    term: Term
    op: Optional[ExponentOp] = None
    power: Optional['Power'] = None
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.POWER
    _operand_field: ClassVar[str] = "term"
    _rest_field: ClassVar[str] = "power"

    def __post_init__(self):
        self._check_shape()


@dataclass(frozen=True)
class Factor(_Chain, ASTNode):
    """Factor = Power | Power MultiplyOp Factor"""
    power: Power
    op: Optional[MultiplyOp] = None
    factor: Optional['Factor'] = None
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.FACTOR
    _operand_field: ClassVar[str] = "power"
    _rest_field: ClassVar[str] = "factor"

    def __post_init__(self):
        self._check_shape()


@dataclass(frozen=True)
class Expression(_Chain, ASTNode):
    """Expression = Factor | Factor AddOp Expression"""
    factor: Factor
    op: Optional[AddOp] = None
    expression: Optional['Expression'] = None
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPRESSION
    _operand_field: ClassVar[str] = "factor"
    _rest_field: ClassVar[str] = "expression"

    def __post_init__(self):
        self._check_shape()


# ============================================================================
# Reserialization
# ============================================================================

class SourcePrinter(ASTVisitor):
    """
    Renders a tree back to compact source text.

    Each visit_* returns the node's pieces, either text or child nodes still
    to render. render() expands them with an explicit stack, so deeply
    parenthesized trees do not recurse.
    """

    def render(self, node: ASTNode) -> str:
        parts = []
        stack: List[Any] = [node]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                stack.extend(reversed(self.visit(item)))
        return ''.join(parts)

    def visit_Expression(self, node: _Chain) -> List[Any]:
        pieces: List[Any] = []
        for op, operand in node.chain():
            if op is not None:
                pieces.append(op)
            pieces.append(operand)
        return pieces

    visit_Factor = visit_Expression
    visit_Power = visit_Expression

    def visit_Term(self, node: Term) -> List[Any]:
        if node.expression is not None:
            return ["(", node.expression, ")"]
        return [node.number]

    def visit_Number(self, node: Number) -> List[Any]:
        return [node.text]

    def visit_Operator(self, node: Operator) -> List[Any]:
        return [node.lexeme]

    visit_AddOp = visit_Operator
    visit_MultiplyOp = visit_Operator
    visit_ExponentOp = visit_Operator


def to_source(node: ASTNode) -> str:
    """
    Reserialize a node without whitespace.

    Number literals are copied verbatim, so "2.50" stays "2.50".
    """
    return SourcePrinter().render(node)
