"""
Pipeline orchestration: source text → verdict.

Runs Lexer → Parser → Evaluator for one input. Lexical and parse errors
abort before anything is evaluated; no partial tree is ever evaluated.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from valid8.config import Settings
from valid8.environment import Environment
from valid8.evaluator import Evaluator, TableSink, TruthTable
from valid8.parser import parse_source
from valid8.statements import Program

logger = logging.getLogger(__name__)


@dataclass
class ArgumentResult:
    """Outcome of checking one argument."""
    valid: bool
    program: Program
    table: Optional[TruthTable] = None


def parse_argument(source: str) -> Program:
    """
    Lex and parse, failing fast.

    Raises:
        LexicalError, ParseError
    """
    program = parse_source(source)
    logger.debug("Pipeline: parsed program\n%s", program)
    return program


def evaluate_argument(
    program: Program,
    env: Environment,
    settings: Optional[Settings] = None,
    table_sink: Optional[TableSink] = None,
) -> ArgumentResult:
    """
    Evaluate a parsed program against a caller-owned Environment.

    The Environment is used as given. Clear it (or pass a new one) for
    every independent argument.

    Raises:
        SemanticError, ResourceExhaustedError
    """
    settings = settings or Settings()
    evaluator = Evaluator(env, max_variables=settings.max_variables, table_sink=table_sink)
    valid = evaluator.evaluate(program)

    logger.info("Pipeline: argument is %s", "valid" if valid else "invalid")
    return ArgumentResult(valid=valid, program=program, table=evaluator.table)


def check_argument(
    source: str,
    env: Environment,
    settings: Optional[Settings] = None,
    table_sink: Optional[TableSink] = None,
) -> ArgumentResult:
    """Parse and evaluate one argument in a single call."""
    program = parse_argument(source)
    return evaluate_argument(program, env, settings=settings, table_sink=table_sink)


__all__ = ["ArgumentResult", "check_argument", "evaluate_argument", "parse_argument"]
