"""
Pytest fixtures shared by the engine tests.
"""

import pytest

from dfa_architect.model import Automaton, State, StateType, Transition


@pytest.fixture
def example_automaton():
    """
    q0 (start), q1, q2 (accept) over {a, b}.

    q0 -a-> q1, q1 -b-> q2, q0 -b-> q0, q1 -a-> q1, q2 -a-> q0, q2 -b-> q0
    """
    from dfa_architect.gallery import example_dfa
    return example_dfa()


@pytest.fixture
def single_state():
    """One start/accept state looping on 'a'."""
    return Automaton(
        states=[State("s", "S", StateType.START_ACCEPT)],
        transitions=[Transition("t0", "s", "s", "a")],
        alphabet=["a"],
    )


@pytest.fixture
def make_automaton():
    """
    Build an automaton from compact tuples.

    states: (id, type) pairs; transitions: (id, from, to, symbol) tuples.
    """
    def _make(states, transitions, alphabet):
        return Automaton(
            states=[State(sid, sid, StateType(kind)) for sid, kind in states],
            transitions=[Transition(*t) for t in transitions],
            alphabet=alphabet,
        )
    return _make
