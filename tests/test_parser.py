"""
Tests for the VALID8 Parser

These tests verify:
    - Each statement kind parses into the right node
    - Arbitrary nesting (atomic inside quantifier inside label)
    - Debug strings and token literals
    - Both error surfaces: collected errors and fail-fast raising
"""

import pytest
from valid8.errors import LexicalError, ParseError
from valid8.lexer import Lexer
from valid8.parser import Parser, parse_source
from valid8.statements import (
    Atomic,
    Compound,
    Expression,
    Identifier,
    Label,
    Negation,
    Program,
    Quantifier,
)
from valid8.tokens import TokenKind


def parse(source):
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return parser, program


class TestAtomic:
    """Test IS/HAS/CAN/ARE statements."""

    def test_is_statements(self):
        parser, program = parse(
            "PREMISE: IS(dog, animal);\n"
            "PREMISE: IS(cat,animal);\n"
            "PREMISE: IS(fish,animal);"
        )
        assert parser.errors == []
        assert len(program.predicates) == 3

        for label, name in zip(program.predicates, ["dog", "cat", "fish"]):
            assert isinstance(label, Label)
            assert label.kind == TokenKind.PREMISE
            atomic = label.value
            assert isinstance(atomic, Atomic)
            assert atomic.kind == TokenKind.IS
            assert atomic.name.token_literal() == name
            assert atomic.value.token_literal() == "animal"

    def test_debug_string(self):
        """IS(dog, animal) renders as 'dog animal'."""
        parser, program = parse("PREMISE: IS(dog, animal);")
        assert parser.errors == []
        atomic = program.predicates[0].value
        assert str(atomic) == "dog animal"
        assert atomic.token_literal() == "IS"
        assert atomic.name.token_literal() == "dog"

    def test_value_may_be_statement(self):
        parser, program = parse("PREMISE: HAS(x, AND(a, b));")
        assert parser.errors == []
        atomic = program.predicates[0].value
        assert isinstance(atomic.value, Compound)


class TestCompoundAndNegation:
    """Test connectives."""

    def test_implies(self):
        parser, program = parse("PREMISE: IMPLIES(x, y);")
        assert parser.errors == []
        compound = program.predicates[0].value
        assert isinstance(compound, Compound)
        assert compound.kind == TokenKind.IMPLIES
        assert compound.left == Identifier(compound.left.token, "x")
        assert compound.right.token_literal() == "y"

    def test_nested_compounds_are_accepted(self):
        """Odd but well-formed nestings are left to the evaluator."""
        parser, program = parse("PREMISE: IMPLIES(AND(a, b), OR(c, NOT(d)));")
        assert parser.errors == []
        compound = program.predicates[0].value
        assert compound.left.kind == TokenKind.AND
        assert compound.right.kind == TokenKind.OR
        assert isinstance(compound.right.right, Negation)

    def test_negation(self):
        parser, program = parse("THEREFORE: NOT(p);")
        assert parser.errors == []
        negation = program.predicates[0].value
        assert isinstance(negation, Negation)
        assert negation.operand.token_literal() == "p"
        assert str(negation) == "NOT(p)"


class TestQuantifiers:
    """Test FORALL/EXISTS/ALL/SOME."""

    @pytest.mark.parametrize("source,kind,name,body", [
        ("PREMISE: FORALL(x, y);", TokenKind.FORALL, "x", "y"),
        ("PREMISE: EXISTS(a, b);", TokenKind.EXISTS, "a", "b"),
        ("PREMISE: ALL(cat, animal);", TokenKind.ALL, "cat", "animal"),
        ("PREMISE: SOME(z, t);", TokenKind.SOME, "z", "t"),
    ])
    def test_simple(self, source, kind, name, body):
        parser, program = parse(source)
        assert parser.errors == []
        quantifier = program.predicates[0].value
        assert isinstance(quantifier, Quantifier)
        assert quantifier.kind == kind
        assert quantifier.name.token_literal() == name
        assert quantifier.body.token_literal() == body

    def test_atomic_inside_quantifier(self):
        parser, program = parse("PREMISE: FORALL(x, IS(x, cat));")
        assert parser.errors == []
        quantifier = program.predicates[0].value
        atomic = quantifier.body
        assert atomic.kind == TokenKind.IS
        assert atomic.name.token_literal() == "x"
        assert atomic.value.token_literal() == "cat"

    def test_full_argument(self):
        parser, program = parse(
            "PREMISE: FORALL(x, AND(IS(x, cat), IS(x, black)));\n"
            "THEREFORE: EXISTS(y, IS(y, dog));"
        )
        assert parser.errors == []
        assert len(program.predicates) == 2

        premise = program.predicates[0].value
        assert premise.body.kind == TokenKind.AND
        assert premise.body.left.value.token_literal() == "cat"
        assert premise.body.right.value.token_literal() == "black"

        conclusion = program.predicates[1]
        assert conclusion.kind == TokenKind.THEREFORE
        assert conclusion.value.kind == TokenKind.EXISTS
        assert conclusion.value.body.value.token_literal() == "dog"


class TestMiscStatements:
    """Identifiers, groups, empty labels and terminators."""

    def test_bare_identifier(self):
        parser, program = parse("identifier")
        assert parser.errors == []
        assert len(program.predicates) == 1
        assert program.predicates[0].token_literal() == "identifier"

    def test_group_becomes_expression(self):
        parser, program = parse("THEREFORE: (y);")
        assert parser.errors == []
        expression = program.predicates[0].value
        assert isinstance(expression, Expression)
        assert expression.token_literal() == "y"
        assert str(expression) == "(y)"

    def test_empty_label(self):
        parser, program = parse("THEREFORE: ;")
        assert parser.errors == []
        assert program.predicates[0].value is None

    def test_source_order_kept(self):
        _, program = parse("PREMISE: a; THEREFORE: b; PREMISE: c;")
        literals = [p.token_literal() for p in program.predicates]
        assert literals == ["PREMISE", "THEREFORE", "PREMISE"]
        assert [l.value.token_literal() for l in program.labels(TokenKind.PREMISE)] == ["a", "c"]

    def test_stray_semicolons_skipped(self):
        parser, program = parse(";; PREMISE: a;;")
        assert parser.errors == []
        assert len(program.predicates) == 1

    def test_program_string(self):
        _, program = parse("PREMISE: IS(dog, animal); THEREFORE: x;")
        assert str(program) == "PREMISE: dog animal\nTHEREFORE: x"
        assert program.token_literal() == "PREMISE"
        assert Program().token_literal() == ""


class TestParseErrors:
    """Required-token mismatches and unterminated groups."""

    def test_missing_comma(self):
        parser, program = parse("PREMISE: IS(dog animal);")
        assert len(parser.errors) == 1
        err = parser.errors[0]
        assert isinstance(err, ParseError)
        assert err.line == 1
        assert err.column == 17
        assert err.token == "animal"
        assert "','" in err.message
        assert program.predicates == []

    def test_missing_comma_raises_fail_fast(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("PREMISE: IS(dog animal);")
        err = exc_info.value
        assert isinstance(err.line, int)
        assert isinstance(err.column, int)
        assert err.token is not None

    def test_unterminated_group(self):
        parser, _ = parse("PREMISE: IS(cat, animal;")
        assert len(parser.errors) == 1
        err = parser.errors[0]
        assert "unterminated" in err.message
        assert err.token == ";"

    def test_unterminated_at_eof(self):
        parser, _ = parse("PREMISE: IMPLIES(x, y")
        assert len(parser.errors) == 1
        assert parser.errors[0].token == "EOF"

    def test_missing_open_paren(self):
        parser, _ = parse("PREMISE: NOT x;")
        assert "'('" in parser.errors[0].message

    def test_missing_colon(self):
        parser, _ = parse("PREMISE IS(x, y);")
        assert "':'" in parser.errors[0].message

    def test_atomic_name_must_be_identifier(self):
        parser, _ = parse("PREMISE: IS(AND(a, b), c);")
        assert "identifier" in parser.errors[0].message

    def test_missing_terminator(self):
        parser, _ = parse("PREMISE: x THEREFORE: y;")
        assert len(parser.errors) == 1
        assert "';'" in parser.errors[0].message

    def test_unknown_statement_start(self):
        parser, _ = parse("PREMISE: .;")
        assert parser.errors[0].token == "."

    def test_recovers_after_error(self):
        """Errors are collected and parsing resumes after the next ';'."""
        parser, program = parse(
            "PREMISE: IS(dog animal);\n"
            "PREMISE: IS(cat, animal\n"
            "PREMISE: IS(fish, animal);\n"
            "THEREFORE: IS(cat, fish);"
        )
        assert len(parser.errors) == 2
        assert [e.line for e in parser.errors] == [1, 3]
        assert len(program.predicates) == 1
        assert program.predicates[0].kind == TokenKind.THEREFORE

    def test_nesting_limit(self):
        deep = "NOT(" * 150 + "q" + ")" * 150
        with pytest.raises(ParseError, match="nested deeper than 100"):
            parse_source(f"THEREFORE: {deep};")

    def test_nesting_limit_collected_and_recovered(self):
        deep = "NOT(" * 2000 + "q" + ")" * 2000
        parser, program = parse(f"THEREFORE: {deep};\nTHEREFORE: q;")
        assert len(parser.errors) == 1
        assert parser.errors[0].token == "NOT"
        assert parser.depth == 0
        assert len(program.predicates) == 1

    def test_nesting_below_limit(self):
        program = parse_source("THEREFORE: " + "NOT(" * 90 + "q" + ")" * 90 + ";")
        assert isinstance(program.predicates[0].value, Negation)

    def test_lexical_error_propagates(self):
        with pytest.raises(LexicalError):
            parse("PREMISE: IS(x, y) #;")
