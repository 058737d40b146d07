"""
Structural checks for a candidate DFA.

``validate`` never raises and never mutates its input. The diagnostics come
back grouped by check, in a fixed order, so a UI can list them without
reshuffling between edits.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from dfa_architect.reachability import reachable_from

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(Enum):
    NO_STATES = "no-states"
    MISSING_START = "missing-start"
    MULTIPLE_START = "multiple-start"
    NO_ACCEPT = "no-accept"
    MISSING_TRANSITION = "missing-transition"
    NON_DETERMINISTIC = "non-deterministic"
    DANGLING_TRANSITION = "invalid-transitions"
    UNKNOWN_SYMBOL = "invalid-symbols"
    UNREACHABLE_STATE = "unreachable-state"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    severity: Severity
    message: str
    details: str = ""
    suggestion: str = ""
    affected: tuple = ()

    @property
    def is_error(self):
        return self.severity is Severity.ERROR


def _error(kind, message, details, suggestion, affected=()):
    return Diagnostic(kind, Severity.ERROR, message, details, suggestion, tuple(affected))


def _warning(kind, message, details, suggestion, affected=()):
    return Diagnostic(kind, Severity.WARNING, message, details, suggestion, tuple(affected))


def _check_start_states(automaton):
    starts = automaton.start_states()
    if not starts:
        return [_error(
            DiagnosticKind.MISSING_START,
            "No start state defined",
            "DFA must have exactly one start state.",
            "Mark one state as start (or start/accept).",
        )]
    if len(starts) > 1:
        labels = ", ".join(s.label for s in starts)
        return [_error(
            DiagnosticKind.MULTIPLE_START,
            "Multiple start states detected",
            f"Found {len(starts)}: {labels}. DFA must have exactly one start state.",
            "Change all but one start state to normal/accept.",
            [s.id for s in starts],
        )]
    return []


def _check_accept_states(automaton):
    if automaton.accept_states():
        return []
    return [_warning(
        DiagnosticKind.NO_ACCEPT,
        "No accept states defined",
        "Without an accept state the DFA rejects every string.",
        "Mark at least one state as accept if the language should be non-empty.",
    )]


def _check_transition_function(automaton):
    diagnostics = []
    for state in automaton.states:
        for symbol in automaton.alphabet:
            same = automaton.transitions_on(state.id, symbol)
            if not same:
                diagnostics.append(_warning(
                    DiagnosticKind.MISSING_TRANSITION,
                    f"State {state.label} missing transition for symbol '{symbol}'",
                    "The DFA is partial: input reaching this pair gets stuck and is rejected.",
                    f"Add a transition on '{symbol}' from {state.label}.",
                    [state.id],
                ))
            elif len(same) > 1:
                diagnostics.append(_non_deterministic(automaton, state, symbol, same))

        # Symbols outside the alphabet are still part of the transition function
        extra = dict.fromkeys(
            t.symbol for t in automaton.transitions_from(state.id)
            if t.symbol not in automaton.alphabet
        )
        for symbol in extra:
            same = automaton.transitions_on(state.id, symbol)
            if len(same) > 1:
                diagnostics.append(_non_deterministic(automaton, state, symbol, same))
    return diagnostics


def _non_deterministic(automaton, state, symbol, same):
    targets = ", ".join(automaton.label_of(t.target) for t in same)
    return _error(
        DiagnosticKind.NON_DETERMINISTIC,
        f"State {state.label} has multiple transitions for '{symbol}'",
        f"Goes to: {targets}. A DFA needs exactly one transition per symbol from each state.",
        f"Keep only one transition for '{symbol}' from {state.label} (or merge target states).",
        [t.id for t in same],
    )


def _check_dangling(automaton):
    dangling = [
        t for t in automaton.transitions
        if automaton.state(t.source) is None or automaton.state(t.target) is None
    ]
    if not dangling:
        return []
    return [_error(
        DiagnosticKind.DANGLING_TRANSITION,
        "Transitions referencing deleted/missing states",
        f"Transitions {', '.join(t.id for t in dangling)} have a missing 'from' or 'to' state.",
        "Delete or fix those transitions.",
        [t.id for t in dangling],
    )]


def _check_symbols(automaton):
    alphabet = set(automaton.alphabet)
    offenders = {}
    for t in automaton.transitions:
        if t.symbol not in alphabet:
            offenders.setdefault(t.symbol, []).append(t.id)

    return [
        _warning(
            DiagnosticKind.UNKNOWN_SYMBOL,
            f"Transitions use symbol '{symbol}' which is not in the alphabet",
            f"Symbol '{symbol}' is used by {len(ids)} transition(s) but not defined.",
            "Add it to the alphabet or change the transitions.",
            ids,
        )
        for symbol, ids in offenders.items()
    ]


def _check_reachability(automaton):
    start = automaton.start_state()
    if start is None:
        return []
    seen = reachable_from(automaton, start.id)
    return [
        _warning(
            DiagnosticKind.UNREACHABLE_STATE,
            f"State {state.label} is unreachable",
            f"{state.label} cannot be reached from the start state {start.label}.",
            "Add transitions to reach this state, or remove it if unused.",
            [state.id],
        )
        for state in automaton.states
        if state.id not in seen
    ]


def validate(automaton):
    """Return the ordered list of diagnostics for ``automaton``."""
    if not automaton.states:
        return [_error(
            DiagnosticKind.NO_STATES,
            "DFA must have at least one state",
            "An automaton without states cannot be classified further.",
            "Add a start state.",
        )]

    diagnostics = []
    diagnostics.extend(_check_start_states(automaton))
    diagnostics.extend(_check_accept_states(automaton))
    diagnostics.extend(_check_transition_function(automaton))
    diagnostics.extend(_check_dangling(automaton))
    diagnostics.extend(_check_symbols(automaton))
    diagnostics.extend(_check_reachability(automaton))

    logger.debug(
        "validated automaton with %d states: %d errors, %d warnings",
        len(automaton.states), len(errors(diagnostics)), len(warnings(diagnostics)),
    )
    return diagnostics


def errors(diagnostics):
    return [d for d in diagnostics if d.severity is Severity.ERROR]


def warnings(diagnostics):
    return [d for d in diagnostics if d.severity is Severity.WARNING]


def is_simulation_ready(subject):
    """True when no error-severity diagnostic is present.

    Accepts either an automaton or an already computed diagnostics list.
    """
    diagnostics = validate(subject) if hasattr(subject, "states") else subject
    return not errors(diagnostics)


def format_report(diagnostics):
    """Plain-text numbered report, one block per diagnostic."""
    blocks = []
    for i, d in enumerate(diagnostics, start=1):
        blocks.append(
            f"{i}. [{d.severity.value.upper()}] {d.message}\n"
            f"   Details: {d.details}\n"
            f"   Suggestion: {d.suggestion}"
        )
    return "\n\n".join(blocks)
