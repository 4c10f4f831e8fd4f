"""
Argument Analyzer: early diagnostics and inventory of parsed programs.

This module provides lightweight analysis of Program objects:
    - Premise / conclusion inventory
    - Propositional variable discovery
    - Statement complexity metrics
    - Warning flags for arguments the evaluator will reject or misread

IMPORTANT: This is read-only. It does NOT touch an Environment and does
not evaluate anything. It only produces reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

from valid8.config import DEFAULT_MAX_VARIABLES
from valid8.evaluator import collect_identifiers
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
from valid8.tokens import TokenKind


@dataclass
class StatementMetrics:
    """Metrics about a single statement tree."""
    depth: int = 0
    node_count: int = 0
    quantifiers: int = 0

    def add(self, other: StatementMetrics) -> None:
        self.depth = max(self.depth, other.depth)
        self.node_count += other.node_count
        self.quantifiers += other.quantifiers


def _analyze_statement(stmt: Statement | None) -> StatementMetrics:
    """Recursively measure a statement tree."""
    if stmt is None:
        return StatementMetrics()

    metrics = StatementMetrics(node_count=1)

    if isinstance(stmt, Compound):
        children = [stmt.left, stmt.right]
    elif isinstance(stmt, Atomic):
        children = [stmt.name, stmt.value]
    elif isinstance(stmt, Quantifier):
        metrics.quantifiers = 1
        children = [stmt.name, stmt.body]
    elif isinstance(stmt, Negation):
        children = [stmt.operand]
    elif isinstance(stmt, Expression):
        children = [stmt.inner]
    elif isinstance(stmt, Label):
        children = [stmt.value]
    elif isinstance(stmt, Identifier):
        children = []
    else:
        raise TypeError(f"Unsupported Statement type: {type(stmt)}")

    child_depth = 0
    for child in children:
        child_metrics = _analyze_statement(child)
        child_depth = max(child_depth, child_metrics.depth)
        metrics.node_count += child_metrics.node_count
        metrics.quantifiers += child_metrics.quantifiers
    metrics.depth = 1 + child_depth

    return metrics


def _strip_wrappers(stmt: Statement) -> Statement:
    while isinstance(stmt, (Quantifier, Expression)):
        stmt = stmt.body if isinstance(stmt, Quantifier) else stmt.inner
    return stmt


def _count_atomics(stmt: Statement | None) -> int:
    """Atomic statements anywhere below stmt."""
    if stmt is None or isinstance(stmt, Identifier):
        return 0
    if isinstance(stmt, Atomic):
        return 1
    if isinstance(stmt, Compound):
        return _count_atomics(stmt.left) + _count_atomics(stmt.right)
    if isinstance(stmt, Negation):
        return _count_atomics(stmt.operand)
    if isinstance(stmt, Quantifier):
        return _count_atomics(stmt.body)
    if isinstance(stmt, Expression):
        return _count_atomics(stmt.inner)
    if isinstance(stmt, Label):
        return _count_atomics(stmt.value)
    raise TypeError(f"Unsupported Statement type: {type(stmt)}")


@dataclass
class ArgumentReport:
    """Inventory and warnings for one program."""

    total_statements: int = 0
    premise_count: int = 0
    conclusion_count: int = 0
    unlabeled_count: int = 0
    empty_labels: int = 0

    # Premise breakdown
    fact_premises: int = 0
    implication_premises: int = 0

    # Variables
    variables: List[str] = field(default_factory=list)
    undefined_variables: Set[str] = field(default_factory=set)

    # Complexity
    max_statement_depth: int = 0
    total_nodes: int = 0
    quantifier_count: int = 0
    nested_facts: int = 0

    warnings: List[str] = field(default_factory=list)

    @property
    def truth_table_rows(self) -> int:
        return 1 << len(self.variables)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_program(program: Program, max_variables: int = DEFAULT_MAX_VARIABLES) -> ArgumentReport:
    """
    Inventory a Program without evaluating it.

    Checks for:
    - Missing, repeated or empty labels
    - Variables used before any IMPLIES premise introduces them
    - Truth tables larger than the variable ceiling
    - Quantifiers (which are read propositionally)
    - Facts nested in a compound conclusion (always satisfied there)

    Returns an ArgumentReport with metrics and warnings.
    """
    report = ArgumentReport(total_statements=len(program.predicates))

    # =========================================================================
    # 1. LABEL INVENTORY AND COMPLEXITY
    # =========================================================================

    known: Set[str] = set()
    conclusion_uses: List[str] = []

    for predicate in program.predicates:
        metrics = _analyze_statement(predicate)
        report.max_statement_depth = max(report.max_statement_depth, metrics.depth)
        report.total_nodes += metrics.node_count
        report.quantifier_count += metrics.quantifiers

        if not isinstance(predicate, Label):
            report.unlabeled_count += 1
            continue

        if predicate.value is None:
            report.empty_labels += 1

        if predicate.kind == TokenKind.THEREFORE:
            report.conclusion_count += 1
            if predicate.value is not None:
                target = _strip_wrappers(predicate.value)
                if not isinstance(target, Atomic):
                    conclusion_uses.extend(collect_identifiers(target))
                    report.nested_facts += _count_atomics(target)
            continue

        report.premise_count += 1
        if predicate.value is None:
            continue

        inner = _strip_wrappers(predicate.value)
        if isinstance(inner, Atomic):
            report.fact_premises += 1
        elif isinstance(inner, Compound) and inner.kind == TokenKind.IMPLIES:
            report.implication_premises += 1
            for name in collect_identifiers(inner):
                known.add(name)
                if name not in report.variables:
                    report.variables.append(name)
        else:
            # only IMPLIES premises seen so far define names
            report.undefined_variables.update(
                name for name in collect_identifiers(inner) if name not in known
            )

    # =========================================================================
    # 2. VARIABLE CHECKS
    # =========================================================================

    # the conclusion is checked after every premise is in
    report.undefined_variables.update(
        name for name in conclusion_uses if name not in known
    )

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.conclusion_count == 0:
        report.add_warning("No THEREFORE statement: argument will be reported invalid")

    if report.conclusion_count > 1:
        report.add_warning(
            f"{report.conclusion_count} THEREFORE statements: only the last is checked"
        )

    if report.unlabeled_count:
        report.add_warning(
            f"Unlabeled top-level statements: {report.unlabeled_count}"
        )

    if report.empty_labels:
        report.add_warning(f"Empty labels: {report.empty_labels}")

    if report.undefined_variables:
        report.add_warning(
            f"Undefined variables: {', '.join(sorted(report.undefined_variables))}"
        )

    if len(report.variables) > max_variables:
        report.add_warning(
            f"Truth table too large: {len(report.variables)} variables exceed the limit of {max_variables}"
        )

    if report.quantifier_count:
        report.add_warning(
            f"Quantifiers are evaluated propositionally: {report.quantifier_count} found"
        )

    if report.nested_facts:
        report.add_warning(
            f"Facts inside a compound conclusion count as satisfied: {report.nested_facts} found"
        )

    return report


__all__ = ["ArgumentReport", "StatementMetrics", "analyze_program"]
