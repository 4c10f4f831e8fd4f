"""
Evaluator (Layer 3: Statement Tree → Verdict).

Two phases over Program.predicates, driven by each Label's keyword:

    IDLE → INGESTING_PREMISES → CHECKING_CONCLUSION → DONE

Phase A ingests PREMISE labels in source order:
    - IS/HAS/CAN/ARE(name, value)   store facts[name] = value
    - IMPLIES(left, right)          record variables, push prior ∧ (left → right)
    - identifier                    push prior ∧ identifier
    - NOT(operand)                  push prior ∧ ¬operand

Phase B takes the LAST THEREFORE label, builds
(last premise model) → conclusion, and enumerates every assignment of
the distinct variables. The argument is valid iff that final model is
true in every row, i.e. it is a tautology.

Atomic conclusions are decided by fact substitution instead; their
verdict is a constant in the final column.

Any error ends evaluation of the current input. Nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from valid8.config import DEFAULT_MAX_VARIABLES
from valid8.environment import Environment, Model
from valid8.errors import ResourceExhaustedError, SemanticError
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

TableSink = Callable[[List[str], List[bool]], None]

OPERATOR_SYMBOLS: Dict[TokenKind, str] = {
    TokenKind.AND: "∧",
    TokenKind.OR: "∨",
    TokenKind.IMPLIES: "→",
    TokenKind.NOT: "¬",
}

QUANTIFIER_SYMBOLS: Dict[TokenKind, str] = {
    TokenKind.FORALL: "∀",
    TokenKind.ALL: "∀",
    TokenKind.EXISTS: "∃",
    TokenKind.SOME: "∃",
}


class EvaluatorPhase(Enum):
    IDLE = "idle"
    INGESTING_PREMISES = "ingesting_premises"
    CHECKING_CONCLUSION = "checking_conclusion"
    DONE = "done"


@dataclass
class TruthTable:
    """
    Result of the conclusion check.

    Properties:
        headers: distinct variables, premise model labels, conclusion label
        rows: flat list of cell values, len(headers) per assignment
        valid: True iff the last column is true in every row
    """

    headers: List[str]
    rows: List[bool] = field(default_factory=list)
    valid: bool = True

    @property
    def width(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        if not self.headers:
            return 0
        return len(self.rows) // len(self.headers)

    def iter_rows(self) -> Iterator[List[bool]]:
        width = self.width
        for start in range(0, len(self.rows), width):
            yield self.rows[start:start + width]


# =============================================================================
# FORMULA HELPERS
# =============================================================================

def render_formula(stmt: Statement | None) -> str:
    """Canonical symbolic text for a statement, used in table headers."""
    if stmt is None:
        return ""
    if isinstance(stmt, Identifier):
        return stmt.value
    if isinstance(stmt, Negation):
        return f"{OPERATOR_SYMBOLS[TokenKind.NOT]}{_render_operand(stmt.operand)}"
    if isinstance(stmt, Compound):
        symbol = OPERATOR_SYMBOLS[stmt.kind]
        return f"{_render_operand(stmt.left)} {symbol} {_render_operand(stmt.right)}"
    if isinstance(stmt, Atomic):
        return f"{stmt.token_literal()}({stmt.name.value}, {render_formula(stmt.value)})"
    if isinstance(stmt, Quantifier):
        symbol = QUANTIFIER_SYMBOLS[stmt.kind]
        return f"{symbol}{stmt.name.value} {_render_operand(stmt.body)}"
    if isinstance(stmt, Expression):
        return render_formula(stmt.inner)
    if isinstance(stmt, Label):
        return render_formula(stmt.value)
    raise TypeError(f"Unsupported Statement type: {type(stmt)}")


def _render_operand(stmt: Statement) -> str:
    while isinstance(stmt, Expression):
        stmt = stmt.inner
    text = render_formula(stmt)
    if isinstance(stmt, Compound):
        return f"({text})"
    return text


def collect_identifiers(stmt: Statement | None) -> List[str]:
    """
    Propositional variable names in a statement, first occurrence first.

    Names inside Atomic statements and quantifier-bound names are
    subjects, not variables, and are skipped.
    """
    names: List[str] = []

    def visit(node: Statement | None) -> None:
        if node is None or isinstance(node, Atomic):
            return
        if isinstance(node, Identifier):
            if node.value not in names:
                names.append(node.value)
        elif isinstance(node, Compound):
            visit(node.left)
            visit(node.right)
        elif isinstance(node, Negation):
            visit(node.operand)
        elif isinstance(node, Quantifier):
            visit(node.body)
        elif isinstance(node, Expression):
            visit(node.inner)
        elif isinstance(node, Label):
            visit(node.value)
        else:
            raise TypeError(f"Unsupported Statement type: {type(node)}")

    visit(stmt)
    return names


def evaluate_statement(stmt: Statement, assignment: Dict[str, bool]) -> bool:
    """
    Standard propositional semantics under one assignment.

    Atomic statements are ground facts and count as satisfied here.
    Quantifiers are read propositionally (their body is evaluated).
    """
    if isinstance(stmt, Compound):
        left = evaluate_statement(stmt.left, assignment)
        right = evaluate_statement(stmt.right, assignment)
        if stmt.kind == TokenKind.AND:
            return left and right
        if stmt.kind == TokenKind.OR:
            return left or right
        if stmt.kind == TokenKind.IMPLIES:
            return (not left) or right
        raise SemanticError(f"unsupported operator: {stmt.token_literal()}")

    if isinstance(stmt, Identifier):
        try:
            return assignment[stmt.value]
        except KeyError:
            raise SemanticError(f"undefined variable '{stmt.value}'") from None

    if isinstance(stmt, Negation):
        return not evaluate_statement(stmt.operand, assignment)
    if isinstance(stmt, Atomic):
        return True
    if isinstance(stmt, Quantifier):
        return evaluate_statement(stmt.body, assignment)
    if isinstance(stmt, Expression):
        return evaluate_statement(stmt.inner, assignment)
    if isinstance(stmt, Label):
        if stmt.value is None:
            raise SemanticError(f"{stmt.token_literal()} cannot be empty")
        return evaluate_statement(stmt.value, assignment)

    raise TypeError(f"Unsupported Statement type: {type(stmt)}")


def _connective(kind: TokenKind, anchor: Statement) -> Token:
    """Synthetic connective token positioned at the statement it joins."""
    return Token(kind, OPERATOR_SYMBOLS[kind], anchor.token.line, anchor.token.column)


def _unwrap(stmt: Statement) -> Statement:
    while isinstance(stmt, (Quantifier, Expression)):
        stmt = stmt.body if isinstance(stmt, Quantifier) else stmt.inner
    return stmt


# =============================================================================
# EVALUATOR
# =============================================================================

class Evaluator:
    """
    Runs both phases against a caller-owned Environment.

    Usage:
        env = Environment()
        valid = Evaluator(env).evaluate(program)

    Properties:
        phase: Current EvaluatorPhase
        table: TruthTable from the last conclusion check (or None)

    The Environment is not cleared here. Reusing one across unrelated
    arguments without clear() mixes their premises.
    """

    def __init__(
        self,
        env: Environment,
        max_variables: int = DEFAULT_MAX_VARIABLES,
        table_sink: Optional[TableSink] = None,
    ):
        self.env = env
        self.max_variables = max_variables
        self.table_sink = table_sink
        self.phase = EvaluatorPhase.IDLE
        self.table: Optional[TruthTable] = None

    def evaluate(self, program: Program) -> bool:
        """
        Decide whether the program's conclusion follows from its premises.

        Returns:
            True iff the argument is valid. A program without any
            THEREFORE label is reported as not valid.

        Raises:
            SemanticError: Empty labels, ordering violations,
                unsupported premises, undefined variables
            ResourceExhaustedError: Too many distinct variables
        """
        logger.debug("Evaluator: starting on %d predicates", len(program.predicates))
        self.phase = EvaluatorPhase.INGESTING_PREMISES
        self.table = None

        try:
            conclusion: Optional[Label] = None
            for predicate in program.predicates:
                if not isinstance(predicate, Label):
                    raise SemanticError(
                        f"top-level statement '{predicate}' must be labeled PREMISE or THEREFORE"
                    )
                if predicate.kind == TokenKind.PREMISE:
                    self.ingest_premise(predicate)
                else:
                    conclusion = predicate

            if conclusion is None:
                logger.warning("Evaluator: no THEREFORE statement, argument reported as invalid")
                return False

            self.phase = EvaluatorPhase.CHECKING_CONCLUSION
            self.table = self.check_conclusion(conclusion)
            return self.table.valid
        finally:
            self.phase = EvaluatorPhase.DONE

    # ------------------------------------------------------------------
    # Phase A: premise ingestion
    # ------------------------------------------------------------------

    def ingest_premise(self, label: Label) -> None:
        if label.value is None:
            raise SemanticError("PREMISE cannot be empty")
        logger.debug("Evaluator: ingesting premise %s", label.value)
        self._ingest(label.value)

    def _ingest(self, stmt: Statement) -> None:
        env = self.env

        if isinstance(stmt, (Label, Quantifier, Expression)):
            inner = stmt.value if isinstance(stmt, Label) else _unwrap(stmt)
            if inner is None:
                raise SemanticError("PREMISE cannot be empty")
            self._ingest(inner)

        elif isinstance(stmt, Atomic):
            env.add_fact(stmt.name.value, self._fact_value(stmt.value))

        elif isinstance(stmt, Compound):
            if stmt.kind != TokenKind.IMPLIES:
                raise SemanticError(
                    f"unsupported premise kind: {stmt.token_literal()} "
                    "(premises must be facts, IMPLIES, identifiers or NOT)"
                )
            env.variables.extend(collect_identifiers(stmt.left))
            env.variables.extend(collect_identifiers(stmt.right))

            prior = env.last_model
            text = render_formula(stmt)
            if prior is None:
                env.models.append(Model(stmt, text))
            else:
                formula = Compound(_connective(TokenKind.AND, stmt), prior.formula, stmt)
                env.models.append(Model(formula, f"({prior.label}) ∧ ({text})"))

        elif isinstance(stmt, (Identifier, Negation)):
            prior = env.last_model
            if prior is None:
                kind = "identifier" if isinstance(stmt, Identifier) else "negation"
                raise SemanticError(f"{kind} premise must follow a model")
            self._require_defined(stmt, "premise")

            formula = Compound(_connective(TokenKind.AND, stmt), prior.formula, stmt)
            env.models.append(Model(formula, f"({prior.label}) ∧ {render_formula(stmt)}"))

        else:
            raise SemanticError(f"unsupported premise kind: {type(stmt).__name__}")

    # ------------------------------------------------------------------
    # Phase B: conclusion check
    # ------------------------------------------------------------------

    def check_conclusion(self, label: Label) -> TruthTable:
        """Build the final model and enumerate every assignment."""
        if label.value is None:
            raise SemanticError("THEREFORE cannot be empty")

        env = self.env
        conclusion = label.value
        target = _unwrap(conclusion)

        fact_verdict: Optional[bool] = None
        if isinstance(target, Atomic):
            conclusion = target
            fact_verdict = env.entails_fact(target.name.value, self._fact_value(target.value))
            logger.debug("Evaluator: fact conclusion %s -> %s", target, fact_verdict)
        else:
            self._require_defined(conclusion, "conclusion")

        variables = env.distinct_variables()
        n = len(variables)
        if n > self.max_variables:
            raise ResourceExhaustedError(
                f"{n} distinct variables exceed the limit of {self.max_variables}",
                limit=self.max_variables,
                actual=n,
            )

        premise_models = list(env.models)
        prior = env.last_model
        if prior is None:
            final = Model(conclusion, render_formula(conclusion))
        else:
            final = Model(
                Compound(_connective(TokenKind.IMPLIES, conclusion), prior.formula, conclusion),
                f"({prior.label}) → {_render_operand(conclusion)}",
            )
        env.models.append(final)

        headers = variables + [m.label for m in premise_models] + [final.label]
        table = TruthTable(headers=headers)

        for mask in range(1 << n):
            assignment = {name: bool((mask >> i) & 1) for i, name in enumerate(variables)}

            # fresh per assignment, indexed like env.models
            memo: Dict[int, bool] = {}
            for index in range(len(premise_models)):
                self._evaluate_model(premise_models, index, assignment, memo)

            if fact_verdict is not None:
                outcome = fact_verdict
            else:
                outcome = evaluate_statement(conclusion, assignment)
            if premise_models:
                outcome = (not memo[len(premise_models) - 1]) or outcome
            memo[len(premise_models)] = outcome

            table.rows.extend(assignment[name] for name in variables)
            table.rows.extend(memo[i] for i in range(len(premise_models) + 1))
            table.valid = table.valid and outcome

        logger.debug(
            "Evaluator: %d rows over %d variables, valid=%s",
            table.row_count, n, table.valid,
        )
        if self.table_sink is not None:
            self.table_sink(table.headers, table.rows)
        return table

    def _evaluate_model(
        self,
        models: List[Model],
        index: int,
        assignment: Dict[str, bool],
        memo: Dict[int, bool],
    ) -> bool:
        if index in memo:
            return memo[index]

        formula = models[index].formula
        if (
            index > 0
            and isinstance(formula, Compound)
            and formula.left is models[index - 1].formula
        ):
            # running conjunction: reuse the previous model's value
            previous = self._evaluate_model(models, index - 1, assignment, memo)
            result = previous and evaluate_statement(formula.right, assignment)
        else:
            result = evaluate_statement(formula, assignment)

        memo[index] = result
        return result

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _require_defined(self, stmt: Statement, role: str) -> None:
        known = set(self.env.variables)
        for name in collect_identifiers(stmt):
            if name not in known:
                raise SemanticError(
                    f"undefined variable '{name}' in {role}; "
                    "variables are introduced by IMPLIES premises"
                )

    @staticmethod
    def _fact_value(value: Statement) -> str:
        if isinstance(value, Identifier):
            return value.value
        return render_formula(value)


def evaluate(
    program: Program,
    env: Environment,
    table_sink: Optional[TableSink] = None,
    max_variables: int = DEFAULT_MAX_VARIABLES,
) -> bool:
    """Evaluate a program against a caller-owned Environment."""
    return Evaluator(env, max_variables=max_variables, table_sink=table_sink).evaluate(program)


__all__ = [
    "Evaluator",
    "EvaluatorPhase",
    "TruthTable",
    "TableSink",
    "evaluate",
    "evaluate_statement",
    "render_formula",
    "collect_identifiers",
    "OPERATOR_SYMBOLS",
]
