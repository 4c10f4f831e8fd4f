"""
Stateful lexer (Layer 1: Source Text → Tokens).

Tokens are produced one at a time by next_token(). The lexer keeps a
small state machine so that labels are only recognised where a statement
can start:

    EXPECTING_LABEL ──PREMISE/THEREFORE──► EXPECTING_STATEMENT
    EXPECTING_STATEMENT ──":"──► IN_LOGICAL_EXPRESSION
    any state ──letters──► IN_IDENTIFIER ──► IN_LOGICAL_EXPRESSION
    any state ──";"──► EXPECTING_LABEL

Keywords are case-sensitive. Input is not case-folded.
"""

import logging
import string
from enum import Enum
from typing import Iterator, List

from valid8.errors import LexicalError
from valid8.tokens import KEYWORDS, LABELS, PUNCTUATION, Token, TokenKind

logger = logging.getLogger(__name__)

_LETTERS = frozenset(string.ascii_letters)
_WHITESPACE = frozenset(" \t\r\n")


class LexerState(Enum):
    """Where the lexer is within the current statement."""
    EXPECTING_LABEL = "expecting_label"
    EXPECTING_STATEMENT = "expecting_statement"
    IN_LOGICAL_EXPRESSION = "in_logical_expression"
    IN_IDENTIFIER = "in_identifier"


class Lexer:
    """
    Converts source text into positioned tokens.

    Usage:
        lexer = Lexer("PREMISE: IMPLIES(x, y);")
        token = lexer.next_token()

    Once the input is exhausted every call returns an EOF token.

    Raises:
        LexicalError: On any character that is neither a letter,
            whitespace, nor one of ( ) , . : ;
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1
        self.state = LexerState.EXPECTING_LABEL

    @property
    def ch(self) -> str:
        if self.position < len(self.source):
            return self.source[self.position]
        return ""

    def next_token(self) -> Token:
        """Return the next token, or EOF when the input is exhausted."""
        self._skip_whitespace()
        line, column = self.line, self.column

        if not self.ch:
            return Token(TokenKind.EOF, None, line, column)

        if self.state == LexerState.EXPECTING_LABEL:
            word = self._peek_word()
            logger.debug("Lexer: expecting label, next word %r", word)
            if word in LABELS:
                self._advance(len(word))
                self.state = LexerState.EXPECTING_STATEMENT
                return Token(LABELS[word], word, line, column)

        elif self.state == LexerState.EXPECTING_STATEMENT:
            logger.debug("Lexer: expecting statement, current char %r", self.ch)

        if self.ch in _LETTERS:
            return self._read_word(line, column)

        return self._read_punctuation(line, column)

    def tokenize(self) -> List[Token]:
        """Read every remaining token, ending with EOF."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _read_word(self, line: int, column: int) -> Token:
        self.state = LexerState.IN_IDENTIFIER
        start = self.position
        while self.ch and self.ch in _LETTERS:
            self._advance()
        word = self.source[start:self.position]
        self.state = LexerState.IN_LOGICAL_EXPRESSION

        kind = KEYWORDS.get(word, TokenKind.IDENTIFIER)
        logger.debug("Lexer: read %s %r at %d:%d", kind.value, word, line, column)
        return Token(kind, word, line, column)

    def _read_punctuation(self, line: int, column: int) -> Token:
        char = self.ch
        kind = PUNCTUATION.get(char)
        if kind is None:
            logger.error("Lexer: unexpected character %r at line %d, column %d", char, line, column)
            raise LexicalError(f"Unexpected character '{char}'", line, column, char)

        self._advance()
        if kind == TokenKind.SEMICOLON:
            self.state = LexerState.EXPECTING_LABEL
        elif kind == TokenKind.COLON:
            self.state = LexerState.IN_LOGICAL_EXPRESSION
        return Token(kind, char, line, column)

    def _peek_word(self) -> str:
        end = self.position
        while end < len(self.source) and self.source[end] in _LETTERS:
            end += 1
        return self.source[self.position:end]

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.position >= len(self.source):
                return
            if self.source[self.position] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.position += 1

    def _skip_whitespace(self) -> None:
        while self.ch and self.ch in _WHITESPACE:
            self._advance()


def tokenize(source: str) -> List[Token]:
    """Tokenize a whole source string (convenience wrapper)."""
    return Lexer(source).tokenize()


__all__ = ["Lexer", "LexerState", "tokenize"]
