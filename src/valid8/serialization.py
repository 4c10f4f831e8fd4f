"""
Serialization helpers for VALID8 objects (Program, Statement, TruthTable).

Provides lossless JSON/YAML round-trip of statement trees via an
intermediate dict representation, and one-way export of truth tables.
Token positions are kept so that a reloaded tree compares equal.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from valid8.evaluator import TruthTable
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


def token_to_dict(t: Token) -> Dict[str, Any]:
    return {"kind": t.kind.value, "literal": t.literal, "line": t.line, "column": t.column}


def token_from_dict(d: Dict[str, Any]) -> Token:
    return Token(
        kind=TokenKind(d["kind"]),
        literal=d.get("literal"),
        line=d.get("line", 1),
        column=d.get("column", 1),
    )


def statement_to_dict(stmt: Statement | None) -> Any:
    if stmt is None:
        return None
    token = token_to_dict(stmt.token)
    if isinstance(stmt, Identifier):
        return {"type": "identifier", "token": token, "value": stmt.value}
    if isinstance(stmt, Label):
        return {"type": "label", "token": token, "value": statement_to_dict(stmt.value)}
    if isinstance(stmt, Atomic):
        return {
            "type": "atomic",
            "token": token,
            "name": statement_to_dict(stmt.name),
            "value": statement_to_dict(stmt.value),
        }
    if isinstance(stmt, Compound):
        return {
            "type": "compound",
            "token": token,
            "left": statement_to_dict(stmt.left),
            "right": statement_to_dict(stmt.right),
        }
    if isinstance(stmt, Negation):
        return {"type": "negation", "token": token, "operand": statement_to_dict(stmt.operand)}
    if isinstance(stmt, Quantifier):
        return {
            "type": "quantifier",
            "token": token,
            "name": statement_to_dict(stmt.name),
            "body": statement_to_dict(stmt.body),
        }
    if isinstance(stmt, Expression):
        return {"type": "expression", "token": token, "inner": statement_to_dict(stmt.inner)}
    raise TypeError(f"Unsupported Statement type: {type(stmt)}")


def statement_from_dict(d: Any) -> Statement | None:
    if d is None:
        return None
    t = d.get("type")
    token = token_from_dict(d["token"])
    if t == "identifier":
        return Identifier(token, d["value"])
    if t == "label":
        return Label(token, statement_from_dict(d.get("value")))
    if t == "atomic":
        return Atomic(token, statement_from_dict(d["name"]), statement_from_dict(d["value"]))
    if t == "compound":
        return Compound(token, statement_from_dict(d["left"]), statement_from_dict(d["right"]))
    if t == "negation":
        return Negation(token, statement_from_dict(d["operand"]))
    if t == "quantifier":
        return Quantifier(token, statement_from_dict(d["name"]), statement_from_dict(d["body"]))
    if t == "expression":
        return Expression(token, statement_from_dict(d["inner"]))
    raise TypeError(f"Unsupported statement dict type: {t}")


def program_to_dict(p: Program) -> Dict[str, Any]:
    return {"predicates": [statement_to_dict(s) for s in p.predicates]}


def program_from_dict(d: Dict[str, Any]) -> Program:
    return Program(predicates=[statement_from_dict(s) for s in d.get("predicates", [])])


def program_to_json(p: Program) -> str:
    return json.dumps(program_to_dict(p), sort_keys=True)


def program_from_json(s: str) -> Program:
    return program_from_dict(json.loads(s))


def program_to_yaml(p: Program) -> str:
    return yaml.safe_dump(program_to_dict(p), allow_unicode=True)


def program_from_yaml(s: str) -> Program:
    return program_from_dict(yaml.safe_load(s))


def truth_table_to_dict(t: TruthTable) -> Dict[str, Any]:
    """Rows are nested per assignment, unlike the flat evaluator output."""
    return {
        "headers": list(t.headers),
        "rows": [list(row) for row in t.iter_rows()],
        "valid": t.valid,
    }


def truth_table_to_json(t: TruthTable) -> str:
    return json.dumps(truth_table_to_dict(t), ensure_ascii=False)


def truth_table_to_yaml(t: TruthTable) -> str:
    return yaml.safe_dump(truth_table_to_dict(t), allow_unicode=True, sort_keys=False)
