"""
Tests for the VALID8 Lexer

These tests verify:
    - Token kind sequences for labelled and bare statements
    - Keyword vs identifier recognition
    - Line/column tracking
    - Lexical errors on unknown characters
"""

import pytest
from valid8.errors import LexicalError
from valid8.lexer import Lexer, LexerState, tokenize
from valid8.tokens import Token, TokenKind


def kinds(source):
    return [t.kind for t in tokenize(source)]


class TestPunctuation:
    """Test single-character tokens."""

    def test_symbols(self):
        """Each punctuation mark maps to one token."""
        assert kinds("((),.:;)") == [
            TokenKind.LPAREN,
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.COMMA,
            TokenKind.PERIOD,
            TokenKind.COLON,
            TokenKind.SEMICOLON,
            TokenKind.RPAREN,
            TokenKind.EOF,
        ]

    def test_empty_input_is_eof(self):
        assert kinds("") == [TokenKind.EOF]
        assert kinds("   \n\t ") == [TokenKind.EOF]

    def test_eof_repeats(self):
        lexer = Lexer("x")
        lexer.next_token()
        assert lexer.next_token().kind == TokenKind.EOF
        assert lexer.next_token().kind == TokenKind.EOF


class TestStatements:
    """Test token streams for whole statements."""

    def test_premise_all(self):
        """PREMISE: ALL(cat, animal); tokenizes with ALL as a keyword."""
        tokens = tokenize("PREMISE: ALL(cat, animal);")
        assert [t.kind for t in tokens] == [
            TokenKind.PREMISE,
            TokenKind.COLON,
            TokenKind.ALL,
            TokenKind.LPAREN,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.IDENTIFIER,
            TokenKind.RPAREN,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]
        assert tokens[2].literal == "ALL"
        assert tokens[4].literal == "cat"
        assert tokens[6].literal == "animal"

    def test_nested_quantifiers(self):
        tokens = tokenize("PREMISE: FORALL(cat, EXISTS(animal, dog));")
        assert [t.kind for t in tokens] == [
            TokenKind.PREMISE,
            TokenKind.COLON,
            TokenKind.FORALL,
            TokenKind.LPAREN,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.EXISTS,
            TokenKind.LPAREN,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.IDENTIFIER,
            TokenKind.RPAREN,
            TokenKind.RPAREN,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_multiple_statements(self):
        source = """PREMISE: ALL(cat, animal);
    PREMISE: SOME(cat, EXISTS(animal, dog));
    THEREFORE: IS(cat, dog);"""
        result = kinds(source)
        assert result.count(TokenKind.PREMISE) == 2
        assert result.count(TokenKind.THEREFORE) == 1
        assert result.count(TokenKind.SEMICOLON) == 3
        assert TokenKind.SOME in result
        assert TokenKind.IS in result
        assert result[-1] == TokenKind.EOF

    def test_bare_atomic_statement(self):
        """Statements without a label start with the keyword."""
        assert kinds("IS(cat, animal);") == [
            TokenKind.IS,
            TokenKind.LPAREN,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.IDENTIFIER,
            TokenKind.RPAREN,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_all_connectives_are_keywords(self):
        tokens = tokenize("PREMISE: IMPLIES(AND(a, b), OR(NOT(c), d));")
        keyword_kinds = [t.kind for t in tokens if t.kind != TokenKind.IDENTIFIER]
        assert TokenKind.IMPLIES in keyword_kinds
        assert TokenKind.AND in keyword_kinds
        assert TokenKind.OR in keyword_kinds
        assert TokenKind.NOT in keyword_kinds

    @pytest.mark.parametrize("word", ["IS", "HAS", "CAN", "ARE"])
    def test_atomic_keywords(self, word):
        token = tokenize(f"{word}(x, y);")[0]
        assert token.kind == TokenKind(word)
        assert token.literal == word


class TestCaseAndLabels:
    """Keywords are case-sensitive; labels only start statements."""

    def test_lowercase_keyword_is_identifier(self):
        token = tokenize("is")[0]
        assert token.kind == TokenKind.IDENTIFIER
        assert token.literal == "is"

    def test_identifier_case_preserved(self):
        tokens = tokenize("PREMISE: IS(Socrates, man);")
        assert tokens[4].literal == "Socrates"

    def test_label_inside_expression_is_identifier(self):
        tokens = tokenize("PREMISE: IS(PREMISE, x);")
        assert tokens[4].kind == TokenKind.IDENTIFIER
        assert tokens[4].literal == "PREMISE"

    def test_label_after_semicolon(self):
        tokens = tokenize("x; THEREFORE: y;")
        assert tokens[2].kind == TokenKind.THEREFORE

    def test_label_prefix_word_is_identifier(self):
        """PREMISES is not the PREMISE label."""
        assert tokenize("PREMISES")[0].kind == TokenKind.IDENTIFIER


class TestStateMachine:
    """Test lexer state transitions."""

    def test_initial_state(self):
        assert Lexer("x").state == LexerState.EXPECTING_LABEL

    def test_label_then_colon(self):
        lexer = Lexer("PREMISE: x;")
        lexer.next_token()
        assert lexer.state == LexerState.EXPECTING_STATEMENT
        lexer.next_token()
        assert lexer.state == LexerState.IN_LOGICAL_EXPRESSION

    def test_semicolon_resets(self):
        lexer = Lexer("PREMISE: x;")
        for _ in range(4):
            lexer.next_token()
        assert lexer.state == LexerState.EXPECTING_LABEL


class TestPositions:
    """Test line/column tracking."""

    def test_columns_on_first_line(self):
        tokens = tokenize("PREMISE: IS(dog, animal);")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 8)
        assert (tokens[2].line, tokens[2].column) == (1, 10)
        assert (tokens[4].line, tokens[4].column) == (1, 13)

    def test_lines_advance(self):
        tokens = tokenize("PREMISE: x;\nTHEREFORE: y;")
        therefore = tokens[4]
        assert therefore.kind == TokenKind.THEREFORE
        assert (therefore.line, therefore.column) == (2, 1)

    def test_tokens_are_immutable(self):
        token = tokenize("x")[0]
        with pytest.raises(AttributeError):
            token.literal = "y"


class TestLexicalErrors:
    """Unknown characters are fatal."""

    def test_digit_is_rejected(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("PREMISE: IS(x1, y);")
        err = exc_info.value
        assert err.char == "1"
        assert err.line == 1
        assert err.column == 14

    def test_error_on_second_line(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("PREMISE: x;\n  THEREFORE: y & z;")
        err = exc_info.value
        assert err.char == "&"
        assert (err.line, err.column) == (2, 16)
        assert "2:16" in str(err)

    def test_describe(self):
        assert Token(TokenKind.EOF).describe() == "end of input"
        assert Token(TokenKind.IDENTIFIER, "x").describe() == "identifier 'x'"
        assert Token(TokenKind.COMMA, ",").describe() == "','"
