"""
Bundled example arguments.

Classic valid forms and two classic fallacies, used by the CLI
(--example NAME) and as fixtures in tests.
"""
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class ExampleArgument:
    name: str
    description: str
    source: str
    valid: bool


_EXAMPLES: List[ExampleArgument] = [
    ExampleArgument(
        name="modus-ponens",
        description="If x then y; x; therefore y",
        source="PREMISE: IMPLIES(x, y);\nPREMISE: x;\nTHEREFORE: y;",
        valid=True,
    ),
    ExampleArgument(
        name="modus-tollens",
        description="If p then q; not q; therefore not p",
        source="PREMISE: IMPLIES(p, q);\nPREMISE: NOT(q);\nTHEREFORE: NOT(p);",
        valid=True,
    ),
    ExampleArgument(
        name="hypothetical-syllogism",
        description="If a then b; if b then c; a; therefore c",
        source=(
            "PREMISE: IMPLIES(a, b);\n"
            "PREMISE: IMPLIES(b, c);\n"
            "PREMISE: a;\n"
            "THEREFORE: c;"
        ),
        valid=True,
    ),
    ExampleArgument(
        name="fact-substitution",
        description="x is udin; y is udin; therefore x is y",
        source="PREMISE: IS(x, udin);\nPREMISE: IS(y, udin);\nTHEREFORE: IS(x, y);",
        valid=True,
    ),
    ExampleArgument(
        name="affirming-the-consequent",
        description="If x then y; y; therefore x (fallacy)",
        source="PREMISE: IMPLIES(x, y);\nPREMISE: y;\nTHEREFORE: x;",
        valid=False,
    ),
    ExampleArgument(
        name="denying-the-antecedent",
        description="If p then q; not p; therefore not q (fallacy)",
        source="PREMISE: IMPLIES(p, q);\nPREMISE: NOT(p);\nTHEREFORE: NOT(q);",
        valid=False,
    ),
]

EXAMPLES: Dict[str, ExampleArgument] = {e.name: e for e in _EXAMPLES}


def get_example(name: str) -> ExampleArgument:
    try:
        return EXAMPLES[name]
    except KeyError:
        known = ", ".join(sorted(EXAMPLES))
        raise KeyError(f"Unknown example '{name}'. Available: {known}") from None
