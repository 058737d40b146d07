"""Construct, validate, simulate and convert deterministic finite automata."""

from dfa_architect.config import DEFAULT_SETTINGS, EngineSettings
from dfa_architect.convert import automaton_to_grammar, describe_grammar, grammar_to_automaton
from dfa_architect.errors import (
    AutomataError,
    ConversionError,
    EmptyResultError,
    GrammarParseError,
    InvalidAutomatonError,
    InvalidInputError,
    InvalidStateError,
    MalformedProductionError,
    MissingArrowError,
    SimulationError,
    StartStateError,
    UnknownStartSymbolError,
    UnsupportedProductionError,
)
from dfa_architect.grammar import EPSILON, Grammar, Production, format_grammar, parse_grammar
from dfa_architect.model import Automaton, State, StateType, Transition
from dfa_architect.reachability import reachable, reachable_from, unreachable
from dfa_architect.records import AutomatonRecord
from dfa_architect.simulator import SimulationStatus, Simulator, simulate
from dfa_architect.validator import (
    Diagnostic,
    DiagnosticKind,
    Severity,
    format_report,
    is_simulation_ready,
    validate,
)

__version__ = "0.1.0"
