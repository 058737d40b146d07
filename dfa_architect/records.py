"""
Named automaton snapshots in the layout the storage layer persists.

The engine itself never reads or writes a store; these helpers only turn a
record into plain data and back.
"""

import json
import uuid
from dataclasses import dataclass, field

from dfa_architect.model import Automaton


def curvature_key(transition):
    return f"{transition.source}-{transition.target}"


@dataclass(frozen=True)
class AutomatonRecord:
    name: str
    automaton: Automaton
    description: str = ""
    # "<from>-<to>" -> bend amount used by the canvas when drawing the edge
    curvatures: dict = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if not self.name:
            raise ValueError("record name must not be empty")

    def to_dict(self):
        data = {"id": self.id, "name": self.name, "description": self.description}
        data.update(self.automaton.to_dict())
        data["curvatures"] = dict(self.curvatures)
        return data

    @classmethod
    def from_dict(cls, data):
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(
            name=data["name"],
            automaton=Automaton.from_dict(data),
            description=data.get("description", ""),
            curvatures=dict(data.get("curvatures") or {}),
            **kwargs,
        )

    def to_json(self, indent=None):
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_json(cls, text):
        return cls.from_dict(json.loads(text))


def record_from_grammar(grammar, automaton):
    """Name and describe an automaton that was generated from production rules."""
    return AutomatonRecord(
        name=f"DFA from Grammar (Start: {grammar.start_symbol})",
        automaton=automaton,
        description=(
            f"Generated from production rules with start symbol {grammar.start_symbol}. "
            "Only right-linear grammars are fully supported."
        ),
    )
