"""
Statement tree for VALID8 arguments.

The parser produces these nodes; the evaluator, analyzer and serializers
consume them. The set of variants is closed:

    Label       PREMISE/THEREFORE wrapping an inner statement
    Atomic      IS/HAS/CAN/ARE(name, value)
    Compound    AND/OR/IMPLIES(left, right)
    Negation    NOT(operand)
    Quantifier  FORALL/EXISTS/ALL/SOME(name, body)
    Identifier  bare name
    Expression  parenthesised sub-statement

Every consumer dispatches over exactly these classes and raises on
anything else.

ARCHITECTURAL RULE:
    Nodes are structure only. They do not evaluate themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from valid8.tokens import Token, TokenKind


class Statement(ABC):
    """
    Base class for every statement node.

    Each node keeps the token it started from, exposes that token's
    literal, and renders a short debug string via str().
    """

    token: Token

    @property
    def kind(self) -> TokenKind:
        return self.token.kind

    @abstractmethod
    def token_literal(self) -> str:
        """Literal text of the originating token."""


@dataclass(frozen=True)
class Identifier(Statement):
    """
    A bare name.

    At top level or as a premise it is a propositional variable.
    Inside Atomic/Quantifier it names the subject.
    """

    token: Token
    value: str

    def token_literal(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Label(Statement):
    """
    PREMISE or THEREFORE prefix.

    value is None when nothing follows the colon (e.g. "THEREFORE: ;").
    The evaluator decides whether that is acceptable.
    """

    token: Token
    value: Optional[Statement] = None

    def token_literal(self) -> str:
        return self.token.literal or self.token.kind.value

    def __str__(self) -> str:
        inner = str(self.value) if self.value is not None else ""
        return f"{self.token_literal()}: {inner}"


@dataclass(frozen=True)
class Atomic(Statement):
    """
    Ground-fact predicate binding a name to a value.

    Example:
        IS(dog, animal)

    Becomes:
        Atomic(token=<IS>, name=Identifier("dog"), value=Identifier("animal"))

    The value may be any statement, not only an identifier.
    """

    token: Token
    name: Identifier
    value: Statement

    def token_literal(self) -> str:
        return self.token.literal or self.token.kind.value

    def __str__(self) -> str:
        return f"{self.name.token_literal()} {self.value}"


@dataclass(frozen=True)
class Compound(Statement):
    """Binary connective: AND, OR or IMPLIES."""

    token: Token
    left: Statement
    right: Statement

    def token_literal(self) -> str:
        return self.token.literal or self.token.kind.value

    def __str__(self) -> str:
        return f"{self.token_literal()}({self.left}, {self.right})"


@dataclass(frozen=True)
class Negation(Statement):
    """NOT(operand)."""

    token: Token
    operand: Statement

    def token_literal(self) -> str:
        return self.token.literal or self.token.kind.value

    def __str__(self) -> str:
        return f"{self.token_literal()}({self.operand})"


@dataclass(frozen=True)
class Quantifier(Statement):
    """
    FORALL/EXISTS (or ALL/SOME) over a bound name.

    Parsed faithfully, but evaluated propositionally: the body is read
    as if the quantifier were absent. There is no domain of individuals.
    """

    token: Token
    name: Identifier
    body: Statement

    def token_literal(self) -> str:
        return self.token.literal or self.token.kind.value

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} {self.body}"


@dataclass(frozen=True)
class Expression(Statement):
    """Fallback wrapper around a single parenthesised sub-statement."""

    token: Token
    inner: Statement

    def token_literal(self) -> str:
        return self.inner.token_literal()

    def __str__(self) -> str:
        return f"({self.inner})"


@dataclass
class Program:
    """
    Ordered top-level statements.

    Order is significant: premises are ingested in source order and the
    last THEREFORE label is the conclusion.
    """

    predicates: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.predicates:
            return self.predicates[0].token_literal()
        return ""

    def labels(self, kind: TokenKind) -> List[Label]:
        """All top-level labels of the given kind, in source order."""
        return [p for p in self.predicates if isinstance(p, Label) and p.kind == kind]

    def __str__(self) -> str:
        return "\n".join(str(p) for p in self.predicates)


__all__ = [
    "Statement",
    "Identifier",
    "Label",
    "Atomic",
    "Compound",
    "Negation",
    "Quantifier",
    "Expression",
    "Program",
]
