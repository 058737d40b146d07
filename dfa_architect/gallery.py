from dfa_architect.model import Automaton, State, StateType, Transition

# (start symbol, rules, description)
GRAMMAR_EXAMPLES = [
    ("S", "S → aS | bS | a | b | ε", "All strings over {a, b}; the terminal-only rules make it non-deterministic"),
    ("S", "S → aA | bB\nA → aS | bC | b\nB → bS | aC | a\nC → aC | bC | ε", "Advanced four-state grammar"),
    ("S", "S -> aA | bS | ε\nA -> aA | bS", "Strings that are empty or end with 'b'"),
    ("S", "S -> aS | bA\nA -> aA | bA | ε", "Strings containing at least one 'b'"),
    ("S", "S -> aS | bA\nA -> aB | bA\nB -> aS | bA | ε", "Strings ending with 'ba'"),
    ("S", "S -> 0E | 1O | ε\nE -> 0E | 1O | ε\nO -> 0O | 1E", "Binary strings with an even number of 1's"),
    ("S", "S -> aS | bA | ε\nA -> aA | bS", "Strings with an even number of b's"),
]


def example_dfa():
    """Three states q0 (start), q1, q2 (accept) over {a, b}, complete and deterministic."""
    states = [
        State("q0", "q0", StateType.START, (100.0, 200.0)),
        State("q1", "q1", StateType.NORMAL, (300.0, 200.0)),
        State("q2", "q2", StateType.ACCEPT, (500.0, 200.0)),
    ]
    transitions = [
        Transition("t0", "q0", "q1", "a"),
        Transition("t1", "q1", "q2", "b"),
        Transition("t2", "q0", "q0", "b"),
        Transition("t3", "q1", "q1", "a"),
        Transition("t4", "q2", "q0", "a"),
        Transition("t5", "q2", "q0", "b"),
    ]
    return Automaton(states=states, transitions=transitions, alphabet=["a", "b"])
