import graphviz
import pandas as pd

from dfa_architect.model import StateType

HIGHLIGHT_COLOR = "red"
CURRENT_COLOR = "gold"


def visualize_automaton(automaton, title="DFA", highlight=(), current=None):
    """Create a graphical representation of the automaton using Graphviz.

    ``highlight`` holds state or transition ids to draw in red (for example the
    ``affected`` ids of a diagnostic); ``current`` is the state id the
    simulator is sitting on. Transitions with a missing endpoint are left out.
    """
    highlight = set(highlight)
    dot = graphviz.Digraph(comment=title)
    dot.attr(rankdir='LR')  # Left to right layout

    for state in automaton.states:
        attrs = {
            'label': state.label,
            'shape': 'doublecircle' if state.is_accept else 'circle',
        }
        if state.type is StateType.DEAD:
            attrs.update(style='filled', fillcolor='lightgrey')
        if state.id == current:
            attrs.update(style='filled', fillcolor=CURRENT_COLOR)
        if state.id in highlight:
            attrs['color'] = HIGHLIGHT_COLOR
        dot.node(state.id, **attrs)

    # Invisible node with an arrow into each start state
    for index, state in enumerate(automaton.start_states()):
        pointer = f'__start{index}'
        dot.node(pointer, shape='none', label='')
        dot.edge(pointer, state.id)

    # Parallel edges between the same pair of states share one arrow
    edges = {}
    for t in automaton.transitions:
        if automaton.state(t.source) is None or automaton.state(t.target) is None:
            continue
        edge = edges.setdefault((t.source, t.target), {'symbols': [], 'highlight': False})
        edge['symbols'].append(t.symbol)
        edge['highlight'] = edge['highlight'] or t.id in highlight

    for (source, target), edge in edges.items():
        attrs = {'label': ', '.join(edge['symbols'])}
        if edge['highlight']:
            attrs['color'] = HIGHLIGHT_COLOR
            attrs['fontcolor'] = HIGHLIGHT_COLOR
        dot.edge(source, target, **attrs)

    return dot


def transition_table(automaton):
    """Transition table with start and final state markers."""
    rows = []
    for state in automaton.states:
        name = state.label
        if state.is_start:
            name += " (Start)"
        if state.is_accept:
            name += " (Final)"
        row = [name]
        for symbol in automaton.alphabet:
            targets = [automaton.label_of(t.target) for t in automaton.transitions_on(state.id, symbol)]
            row.append(", ".join(targets) if targets else "-")  # "-" marks no transition
        rows.append(row)

    return pd.DataFrame(rows, columns=["State"] + list(automaton.alphabet))


def diagnostics_table(diagnostics):
    columns = ["Severity", "Kind", "Message", "Details", "Suggestion", "Affected"]
    rows = [
        [
            d.severity.value.upper(),
            d.kind.value,
            d.message,
            d.details,
            d.suggestion,
            ", ".join(d.affected),
        ]
        for d in diagnostics
    ]
    return pd.DataFrame(rows, columns=columns)


def simulation_table(simulator):
    """One row per move the simulator has taken."""
    rows = [
        {"Step": i, "From": source, "Input": symbol, "To": target}
        for i, (source, symbol, target) in enumerate(simulator.history, start=1)
    ]
    return pd.DataFrame(rows, columns=["Step", "From", "Input", "To"])


def productions_table(grammar):
    rows = [
        {"Non-terminal": head, "Productions": " | ".join(str(rule) for rule in grammar.productions_for(head))}
        for head in grammar.non_terminals
        if grammar.productions_for(head)
    ]
    return pd.DataFrame(rows, columns=["Non-terminal", "Productions"])
