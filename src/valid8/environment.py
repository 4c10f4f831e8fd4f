"""
Binding store for a single argument evaluation.

Holds two independent collections:
    - facts: ground substitutions from IS/HAS/CAN/ARE premises
    - variables + models: propositional variables and the running
      conjunction of premises, one Model per premise

facts and models are never merged. facts answer substitution lookups,
models answer boolean evaluation.

OWNERSHIP CONTRACT:
    The caller creates the Environment (or calls clear()) before each
    independent argument. The evaluator never clears it implicitly, and
    two evaluations must never share one Environment at the same time.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from valid8.statements import Statement


@dataclass(frozen=True)
class Model:
    """
    One accumulated formula with its display label.

    Properties:
        formula: Statement evaluated against an assignment
        label: Canonical text shown as a truth-table header
            Example: "(p → q) ∧ ¬q"

    Results are not cached on the Model. The evaluator memoizes per
    assignment in a fresh map.
    """

    formula: Statement
    label: str


@dataclass
class Environment:
    """
    Mutable store filled while premises are ingested.

    Properties:
        facts: name → value substitutions
        variables: propositional variable names in discovery order,
            duplicates allowed
        models: one Model per ingested premise, then the conclusion
    """

    facts: Dict[str, str] = field(default_factory=dict)
    variables: List[str] = field(default_factory=list)
    models: List[Model] = field(default_factory=list)

    def clear(self) -> None:
        """Reset every collection. Call before reusing for a new argument."""
        self.facts.clear()
        self.variables.clear()
        self.models.clear()

    def add_fact(self, name: str, value: str) -> None:
        self.facts[name] = value

    def lookup(self, name: str) -> Optional[str]:
        """Direct substitution for a name, or None if no fact binds it."""
        return self.facts.get(name)

    def substitution_chain(self, name: str) -> List[str]:
        """
        Follow substitutions starting at name.

        Example:
            facts = {"socrates": "man", "man": "mortal"}
            substitution_chain("socrates") == ["socrates", "man", "mortal"]

        Stops on the first repeated name, so cyclic facts terminate.
        """
        chain = [name]
        current = self.facts.get(name)
        while current is not None and current not in chain:
            chain.append(current)
            current = self.facts.get(current)
        return chain

    def resolve(self, name: str) -> str:
        """Last name reached by following substitutions."""
        return self.substitution_chain(name)[-1]

    def entails_fact(self, name: str, value: str) -> bool:
        """
        True when the facts force name to stand for value.

        Either value lies on name's substitution chain, or both names are
        bound by facts, neither reaches the other, and both end on the
        same name.

        Both IS(x, udin) + IS(y, udin) ⊢ IS(x, y) and
        IS(socrates, man) + IS(man, mortal) ⊢ IS(socrates, mortal) hold.
        Substitution only runs forward, so IS(mortal, socrates) and
        IS(man, socrates) do not.
        """
        chain = self.substitution_chain(name)
        if value in chain:
            return True
        if name not in self.facts or value not in self.facts:
            return False
        if name in self.substitution_chain(value):
            return False
        return self.resolve(name) == self.resolve(value)

    def distinct_variables(self) -> List[str]:
        """Variables without duplicates, in first-occurrence order."""
        return list(dict.fromkeys(self.variables))

    @property
    def last_model(self) -> Optional[Model]:
        if self.models:
            return self.models[-1]
        return None


__all__ = ["Environment", "Model"]
