import logging

from dfa_architect.config import DEFAULT_SETTINGS
from dfa_architect.errors import EmptyResultError, StartStateError, UnsupportedProductionError
from dfa_architect.grammar import EPSILON, Grammar, Production
from dfa_architect.model import Automaton, State, StateType, Transition
from dfa_architect.reachability import reachable_from

logger = logging.getLogger(__name__)


def _sink_id(grammar, settings):
    base = settings.sink_state_id
    taken = set(grammar.non_terminals)
    candidate, n = base, 1
    while candidate in taken:
        candidate = f"{base}{n}"
        n += 1
    return candidate


def _classify(grammar, head, production):
    """Return ``(symbol, next_non_terminal)``; the latter is None for ``A → a``."""
    terminals = set(grammar.terminals)
    non_terminals = set(grammar.non_terminals)
    symbols = production.symbols

    if len(symbols) == 1 and symbols[0] in terminals and len(symbols[0]) == 1:
        return symbols[0], None
    if (
        len(symbols) == 2
        and symbols[0] in terminals
        and len(symbols[0]) == 1
        and symbols[1] in non_terminals
    ):
        return symbols[0], symbols[1]
    raise UnsupportedProductionError(head, production.render())


def grammar_to_automaton(grammar, settings=None):
    """Build a DFA candidate from a right-linear grammar.

    Each non-terminal becomes a state whose id and label are the symbol
    itself. Terminal-only rules lead into a single shared accept sink. States
    that cannot be reached from the start symbol are pruned. The result may
    still be non-deterministic (``S → aA | aB``); the validator reports that.
    """
    settings = settings or DEFAULT_SETTINGS
    origin_x, origin_y = settings.layout_origin
    spacing = settings.layout_spacing

    states = []
    for index, symbol in enumerate(grammar.non_terminals):
        variant = StateType.from_flags(
            start=symbol == grammar.start_symbol,
            accept=grammar.has_epsilon(symbol),
        )
        states.append(State(symbol, symbol, variant, (origin_x + index * spacing, origin_y)))

    sink = _sink_id(grammar, settings)
    sink_needed = False
    transitions = []
    for head in grammar.non_terminals:
        for production in grammar.productions_for(head):
            if production.is_epsilon:
                continue
            symbol, target = _classify(grammar, head, production)
            if target is None:
                target = sink
                sink_needed = True
            transitions.append(Transition(f"t{len(transitions)}", head, target, symbol))

    if sink_needed:
        x = origin_x + len(grammar.non_terminals) * spacing + spacing / 2
        states.append(State(sink, sink, StateType.ACCEPT, (x, origin_y)))

    full = Automaton(states=states, transitions=transitions, alphabet=sorted(grammar.terminals))
    keep = reachable_from(full, grammar.start_symbol)
    if not keep:
        raise EmptyResultError(
            "No states could be generated. Check your production rules and start symbol."
        )

    pruned = Automaton(
        states=[s for s in full.states if s.id in keep],
        transitions=[t for t in full.transitions if t.source in keep and t.target in keep],
        alphabet=full.alphabet,
    )
    logger.info(
        "grammar with start %s converted to %d states, %d transitions (%d pruned)",
        grammar.start_symbol,
        len(pruned.states),
        len(pruned.transitions),
        len(full.states) - len(pruned.states),
    )
    return pruned


def automaton_to_grammar(automaton):
    """Derive a right-linear grammar whose non-terminals are the state labels.

    The automaton is assumed to be validated; anything other than exactly one
    start state raises ``StartStateError``. Transitions with a missing
    endpoint contribute nothing.
    """
    starts = automaton.start_states()
    if len(starts) != 1:
        raise StartStateError(
            f"Expected exactly one start state to derive a grammar, found {len(starts)}"
        )
    start_label = starts[0].label

    rules = {}
    for state in automaton.states:
        rules.setdefault(state.label, [])

    referenced = set()
    for t in automaton.transitions:
        source, target = automaton.state(t.source), automaton.state(t.target)
        if source is None or target is None:
            continue
        rules[source.label].append(Production((t.symbol, target.label)))
        referenced.add(target.label)

    for state in automaton.accept_states():
        rules[state.label].append(EPSILON)

    non_terminals = [
        label for label, productions in rules.items()
        if productions or label in referenced or label == start_label
    ]
    terminals = list(automaton.alphabet)
    for t in automaton.transitions:
        if t.symbol not in terminals:
            terminals.append(t.symbol)

    grammar = Grammar(
        start_symbol=start_label,
        non_terminals=non_terminals,
        terminals=terminals,
        productions={label: productions for label, productions in rules.items() if productions},
    )
    logger.info(
        "derived grammar with %d productions from %d states",
        sum(len(p) for p in grammar.productions.values()),
        len(automaton.states),
    )
    return grammar


def describe_grammar(grammar):
    """Short explanation of the grammar's components."""
    return (
        "This Regular Grammar is derived from your DFA:\n"
        f"• Start Symbol: {grammar.start_symbol}\n"
        f"• Non-terminals (V): {{{', '.join(grammar.non_terminals)}}}\n"
        f"• Terminals (Σ): {{{', '.join(grammar.terminals)}}}\n"
        "• Productions (P) are listed per non-terminal."
    )
