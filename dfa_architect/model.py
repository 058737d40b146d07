"""
Value types for deterministic finite automata.

An ``Automaton`` is a frozen snapshot: every editing helper returns a new
revision and leaves the receiver untouched. Transitions refer to states by id
only, so a transition may point at a state that no longer exists; lookups
return ``None`` in that case instead of raising.
"""

from dataclasses import dataclass, replace
from enum import Enum
from functools import cached_property

from dfa_architect.config import DEFAULT_SETTINGS


class StateType(Enum):
    NORMAL = "normal"
    START = "start"
    ACCEPT = "accept"
    START_ACCEPT = "start-accept"
    DEAD = "dead"

    @property
    def is_start(self):
        return self in (StateType.START, StateType.START_ACCEPT)

    @property
    def is_accept(self):
        return self in (StateType.ACCEPT, StateType.START_ACCEPT)

    @classmethod
    def from_flags(cls, start, accept):
        """Pick the variant for a state that is (or is not) start and accept."""
        if start and accept:
            return cls.START_ACCEPT
        if start:
            return cls.START
        if accept:
            return cls.ACCEPT
        return cls.NORMAL


@dataclass(frozen=True)
class State:
    id: str
    label: str = ""
    type: StateType = StateType.NORMAL
    # Canvas coordinates, carried through untouched.
    position: tuple = (0.0, 0.0)

    def __post_init__(self):
        if not self.id:
            raise ValueError("state id must not be empty")
        if not self.label:
            object.__setattr__(self, "label", self.id)
        if not isinstance(self.type, StateType):
            object.__setattr__(self, "type", StateType(self.type))
        object.__setattr__(self, "position", tuple(self.position))

    @property
    def is_start(self):
        return self.type.is_start

    @property
    def is_accept(self):
        return self.type.is_accept


@dataclass(frozen=True)
class Transition:
    id: str
    source: str
    target: str
    symbol: str

    def __post_init__(self):
        if not self.id:
            raise ValueError("transition id must not be empty")
        if not isinstance(self.symbol, str) or len(self.symbol) != 1:
            raise ValueError(
                f"transition {self.id} must carry exactly one input symbol, got {self.symbol!r}"
            )
        if self.symbol in DEFAULT_SETTINGS.epsilon_markers:
            raise ValueError(f"transition {self.id} cannot be labelled with the empty string")


@dataclass(frozen=True)
class Automaton:
    states: tuple = ()
    transitions: tuple = ()
    alphabet: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "states", tuple(self.states))
        object.__setattr__(self, "transitions", tuple(self.transitions))
        # Keep first occurrence of each symbol, in insertion order
        object.__setattr__(self, "alphabet", tuple(dict.fromkeys(self.alphabet)))

        seen = set()
        for state in self.states:
            if state.id in seen:
                raise ValueError(f"duplicate state id: {state.id}")
            seen.add(state.id)

    # ------------------------------------------------------------------
    # Indices
    # ------------------------------------------------------------------

    @cached_property
    def _states_by_id(self):
        return {state.id: state for state in self.states}

    @cached_property
    def _transitions_by_source(self):
        index = {}
        for transition in self.transitions:
            index.setdefault(transition.source, []).append(transition)
        return index

    @cached_property
    def _transitions_by_key(self):
        index = {}
        for transition in self.transitions:
            index.setdefault((transition.source, transition.symbol), []).append(transition)
        return index

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def state(self, state_id):
        """Return the state with ``state_id`` or None."""
        return self._states_by_id.get(state_id)

    def transition(self, transition_id):
        for transition in self.transitions:
            if transition.id == transition_id:
                return transition
        return None

    def transitions_from(self, state_id):
        return list(self._transitions_by_source.get(state_id, ()))

    def transitions_on(self, state_id, symbol):
        """All transitions leaving ``state_id`` on ``symbol`` (more than one if non-deterministic)."""
        return list(self._transitions_by_key.get((state_id, symbol), ()))

    def start_states(self):
        return [state for state in self.states if state.is_start]

    def accept_states(self):
        return [state for state in self.states if state.is_accept]

    def start_state(self):
        """The unique start state, or None when there are zero or several."""
        starts = self.start_states()
        return starts[0] if len(starts) == 1 else None

    def label_of(self, state_id):
        state = self.state(state_id)
        return state.label if state is not None else state_id

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_state(self, state):
        if state.id in self._states_by_id:
            raise ValueError(f"duplicate state id: {state.id}")
        return replace(self, states=self.states + (state,))

    def update_state(self, state_id, **changes):
        if state_id not in self._states_by_id:
            raise KeyError(state_id)
        states = tuple(
            replace(state, **changes) if state.id == state_id else state
            for state in self.states
        )
        return replace(self, states=states)

    def remove_state(self, state_id):
        """Drop a state together with every transition that touches it."""
        states = tuple(state for state in self.states if state.id != state_id)
        transitions = tuple(
            t for t in self.transitions if t.source != state_id and t.target != state_id
        )
        return replace(self, states=states, transitions=transitions)

    def add_transitions(self, source, target, symbols):
        """Add one transition per symbol; unknown symbols join the alphabet."""
        taken = {t.id for t in self.transitions}
        new = []
        counter = 0
        for symbol in symbols:
            while f"t{counter}" in taken:
                counter += 1
            transition_id = f"t{counter}"
            taken.add(transition_id)
            new.append(Transition(transition_id, source, target, symbol))

        alphabet = self.alphabet + tuple(t.symbol for t in new)
        return replace(self, transitions=self.transitions + tuple(new), alphabet=alphabet)

    def update_transition(self, transition_id, **changes):
        if self.transition(transition_id) is None:
            raise KeyError(transition_id)
        transitions = tuple(
            replace(t, **changes) if t.id == transition_id else t for t in self.transitions
        )
        return replace(self, transitions=transitions)

    def remove_transition(self, transition_id):
        transitions = tuple(t for t in self.transitions if t.id != transition_id)
        return replace(self, transitions=transitions)

    def with_alphabet(self, symbols):
        return replace(self, alphabet=tuple(symbols))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self):
        return {
            "states": [
                {
                    "id": state.id,
                    "label": state.label,
                    "type": state.type.value,
                    "x": state.position[0],
                    "y": state.position[1],
                }
                for state in self.states
            ],
            "transitions": [
                {"id": t.id, "from": t.source, "to": t.target, "symbol": t.symbol}
                for t in self.transitions
            ],
            "alphabet": list(self.alphabet),
        }

    @classmethod
    def from_dict(cls, data):
        states = [
            State(
                id=item["id"],
                label=item.get("label", ""),
                type=StateType(item.get("type", StateType.NORMAL.value)),
                position=(item.get("x", 0.0), item.get("y", 0.0)),
            )
            for item in data.get("states", [])
        ]
        transitions = [
            Transition(item["id"], item["from"], item["to"], item["symbol"])
            for item in data.get("transitions", [])
        ]
        return cls(states=states, transitions=transitions, alphabet=data.get("alphabet", []))
