"""
Recursive-descent parser (Layer 2: Tokens → Statement Tree).

Grammar:
    Program    := Statement*            (each terminated by ";")
    Statement  := Label | Atomic | Compound | Negation
                | Quantifier | Identifier | "(" Statement ")"
    Label      := ("PREMISE"|"THEREFORE") ":" Statement?
    Atomic     := ("IS"|"HAS"|"CAN"|"ARE") "(" Identifier "," Statement ")"
    Compound   := ("AND"|"OR"|"IMPLIES") "(" Statement "," Statement ")"
    Negation   := "NOT" "(" Statement ")"
    Quantifier := ("FORALL"|"EXISTS"|"ALL"|"SOME") "(" Identifier "," Statement ")"

The parser keeps a two-token window (current + peek) and advances one
token at a time. The token kind under the cursor selects the sub-parser
through a fixed dispatch table, so any statement kind can appear as an
operand of any other.

Error surfaces:
    Parser.parse_program()          collect every ParseError, keep going
    Parser.parse_program(True)      raise on the first ParseError
    parse_source(text)              lex + parse, fail fast

Parsing is permissive about odd-but-well-formed nestings; judging them is
the evaluator's job. Nesting deeper than MAX_NESTING_DEPTH statements is
a ParseError.
"""

import logging
from typing import Callable, Dict, List

from valid8.errors import ParseError
from valid8.lexer import Lexer
from valid8.statements import (
    Atomic,
    Compound,
    Expression,
    Identifier,
    Label,
    Negation,
    Program,
    Quantifier,
    Statement,
)
from valid8.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

_TERMINATORS = (TokenKind.SEMICOLON, TokenKind.EOF)

# deepest statement nesting accepted; deeper input is a ParseError
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Builds a Program from a Lexer.

    Properties:
        errors: ParseErrors collected by parse_program()
        cur_token: Token under the cursor
        peek_token: The token after it
        depth: Statements currently open around the cursor
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[ParseError] = []
        self.depth = 0
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    def next_token(self) -> None:
        """Advance the two-token window by exactly one token."""
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def parse_program(self, fail_fast: bool = False) -> Program:
        """
        Parse the whole token stream.

        Args:
            fail_fast: Raise the first ParseError instead of collecting it

        Returns:
            Program with every statement that parsed cleanly

        Raises:
            ParseError: Only when fail_fast is set
            LexicalError: Always propagated, lexing cannot recover
        """
        program = Program()

        while self.cur_token.kind != TokenKind.EOF:
            if self.cur_token.kind == TokenKind.SEMICOLON:
                self.next_token()
                continue

            try:
                statement = self.parse_statement()
                self._expect_terminator()
            except ParseError as err:
                if fail_fast:
                    raise
                logger.debug("Parser: recorded error %s", err)
                self.errors.append(err)
                self._synchronize()
                continue

            program.predicates.append(statement)

        logger.debug(
            "Parser: parsed %d statements with %d errors",
            len(program.predicates),
            len(self.errors),
        )
        return program

    def parse_statement(self) -> Statement:
        """Parse one statement starting at the current token."""
        parse_fn = self._PREFIX_PARSERS.get(self.cur_token.kind)
        if parse_fn is None:
            raise self._error(
                self.cur_token,
                f"no statement can start with {self.cur_token.describe()}",
            )
        if self.depth >= MAX_NESTING_DEPTH:
            raise self._error(
                self.cur_token,
                f"statement nested deeper than {MAX_NESTING_DEPTH} levels",
            )

        self.depth += 1
        try:
            return parse_fn(self)
        finally:
            self.depth -= 1

    # ------------------------------------------------------------------
    # prefix parsers (cursor ends on the statement's last token)
    # ------------------------------------------------------------------

    def _parse_label(self) -> Label:
        token = self.cur_token
        self._expect_peek(TokenKind.COLON, f"':' after {token.literal}")

        if self.peek_token.kind in _TERMINATORS:
            return Label(token, None)

        self.next_token()
        return Label(token, self.parse_statement())

    def _parse_atomic(self) -> Atomic:
        token = self.cur_token
        self._expect_peek(TokenKind.LPAREN, f"'(' after {token.literal}")
        name = self._parse_name()
        self._expect_peek(TokenKind.COMMA, "','")
        self.next_token()
        value = self.parse_statement()
        self._expect_close(token)
        return Atomic(token, name, value)

    def _parse_compound(self) -> Compound:
        token = self.cur_token
        self._expect_peek(TokenKind.LPAREN, f"'(' after {token.literal}")
        self.next_token()
        left = self.parse_statement()
        self._expect_peek(TokenKind.COMMA, "','")
        self.next_token()
        right = self.parse_statement()
        self._expect_close(token)
        return Compound(token, left, right)

    def _parse_negation(self) -> Negation:
        token = self.cur_token
        self._expect_peek(TokenKind.LPAREN, f"'(' after {token.literal}")
        self.next_token()
        operand = self.parse_statement()
        self._expect_close(token)
        return Negation(token, operand)

    def _parse_quantifier(self) -> Quantifier:
        token = self.cur_token
        self._expect_peek(TokenKind.LPAREN, f"'(' after {token.literal}")
        name = self._parse_name()
        self._expect_peek(TokenKind.COMMA, "','")
        self.next_token()
        body = self.parse_statement()
        self._expect_close(token)
        return Quantifier(token, name, body)

    def _parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal or "")

    def _parse_group(self) -> Expression:
        token = self.cur_token
        self.next_token()
        inner = self.parse_statement()
        self._expect_close(token)
        return Expression(token, inner)

    _PREFIX_PARSERS: Dict[TokenKind, Callable[["Parser"], Statement]] = {
        TokenKind.PREMISE: _parse_label,
        TokenKind.THEREFORE: _parse_label,
        TokenKind.IS: _parse_atomic,
        TokenKind.HAS: _parse_atomic,
        TokenKind.CAN: _parse_atomic,
        TokenKind.ARE: _parse_atomic,
        TokenKind.AND: _parse_compound,
        TokenKind.OR: _parse_compound,
        TokenKind.IMPLIES: _parse_compound,
        TokenKind.NOT: _parse_negation,
        TokenKind.FORALL: _parse_quantifier,
        TokenKind.EXISTS: _parse_quantifier,
        TokenKind.ALL: _parse_quantifier,
        TokenKind.SOME: _parse_quantifier,
        TokenKind.IDENTIFIER: _parse_identifier,
        TokenKind.LPAREN: _parse_group,
    }

    # ------------------------------------------------------------------
    # token expectations
    # ------------------------------------------------------------------

    def _parse_name(self) -> Identifier:
        self._expect_peek(TokenKind.IDENTIFIER, "an identifier")
        return Identifier(self.cur_token, self.cur_token.literal or "")

    def _expect_peek(self, kind: TokenKind, expected: str) -> None:
        if self.peek_token.kind != kind:
            raise self._error(
                self.peek_token,
                f"expected {expected}, got {self.peek_token.describe()}",
            )
        self.next_token()

    def _expect_close(self, opening: Token) -> None:
        peek = self.peek_token
        if peek.kind == TokenKind.RPAREN:
            self.next_token()
            return
        if peek.kind in _TERMINATORS:
            raise self._error(
                peek,
                f"unterminated group opened by '{opening.literal}' at "
                f"{opening.line}:{opening.column}, expected ')' before {peek.describe()}",
            )
        raise self._error(peek, f"expected ')', got {peek.describe()}")

    def _expect_terminator(self) -> None:
        if self.peek_token.kind == TokenKind.SEMICOLON:
            self.next_token()
            self.next_token()
        elif self.peek_token.kind == TokenKind.EOF:
            self.next_token()
        else:
            raise self._error(
                self.peek_token,
                f"expected ';', got {self.peek_token.describe()}",
            )

    def _synchronize(self) -> None:
        """Skip to just past the next ';' so parsing can resume."""
        while self.cur_token.kind not in _TERMINATORS:
            self.next_token()
        if self.cur_token.kind == TokenKind.SEMICOLON:
            self.next_token()

    def _error(self, token: Token, message: str) -> ParseError:
        offending = token.literal if token.literal is not None else token.kind.value
        return ParseError(message, token.line, token.column, offending)


def parse_source(source: str) -> Program:
    """
    Lex and parse source text, failing on the first error.

    Raises:
        LexicalError: Unexpected character
        ParseError: First syntax error found
    """
    return Parser(Lexer(source)).parse_program(fail_fast=True)


__all__ = ["MAX_NESTING_DEPTH", "Parser", "parse_source"]
