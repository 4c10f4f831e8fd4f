"""
Token definitions for the VALID8 lexer.

A Token is produced once and never changes afterwards.
Token kinds form a closed set; keyword lookup tables live here so the
lexer and the parser agree on them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class TokenKind(Enum):
    """
    Every kind of token the lexer can emit.

    Grouped as:
        - Labels (statement prefixes)
        - Atomic predicates
        - Connectives
        - Quantifiers
        - Punctuation
        - Content (identifiers, end of input)
    """

    # Labels
    PREMISE = "PREMISE"
    THEREFORE = "THEREFORE"

    # Atomic predicates
    IS = "IS"
    HAS = "HAS"
    CAN = "CAN"
    ARE = "ARE"

    # Connectives
    AND = "AND"
    OR = "OR"
    IMPLIES = "IMPLIES"
    NOT = "NOT"

    # Quantifiers
    FORALL = "FORALL"
    EXISTS = "EXISTS"
    ALL = "ALL"
    SOME = "SOME"

    # Punctuation
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"
    PERIOD = "PERIOD"
    COLON = "COLON"
    SEMICOLON = "SEMICOLON"

    # Content
    IDENTIFIER = "IDENTIFIER"
    EOF = "EOF"


LABELS: Dict[str, TokenKind] = {
    "PREMISE": TokenKind.PREMISE,
    "THEREFORE": TokenKind.THEREFORE,
}

KEYWORDS: Dict[str, TokenKind] = {
    "IS": TokenKind.IS,
    "HAS": TokenKind.HAS,
    "CAN": TokenKind.CAN,
    "ARE": TokenKind.ARE,
    "AND": TokenKind.AND,
    "OR": TokenKind.OR,
    "IMPLIES": TokenKind.IMPLIES,
    "NOT": TokenKind.NOT,
    "FORALL": TokenKind.FORALL,
    "EXISTS": TokenKind.EXISTS,
    "ALL": TokenKind.ALL,
    "SOME": TokenKind.SOME,
}

PUNCTUATION: Dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    ".": TokenKind.PERIOD,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
}

ATOMIC_KINDS = frozenset({TokenKind.IS, TokenKind.HAS, TokenKind.CAN, TokenKind.ARE})
COMPOUND_KINDS = frozenset({TokenKind.AND, TokenKind.OR, TokenKind.IMPLIES})
QUANTIFIER_KINDS = frozenset(
    {TokenKind.FORALL, TokenKind.EXISTS, TokenKind.ALL, TokenKind.SOME}
)
LABEL_KINDS = frozenset(LABELS.values())


@dataclass(frozen=True)
class Token:
    """
    A single positioned token.

    Properties:
        kind: TokenKind
        literal: Source text of the token (None for EOF)
        line: 1-based line of the token's first character
        column: 1-based column of the token's first character
    """

    kind: TokenKind
    literal: Optional[str] = None
    line: int = 1
    column: int = 1

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind == TokenKind.IDENTIFIER:
            return f"identifier '{self.literal}'"
        return f"'{self.literal}'"
