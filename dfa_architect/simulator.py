"""
Symbol-by-symbol execution of a DFA over a finite input string.

A ``Simulator`` owns a single run at a time:

    IDLE --start--> RUNNING --step...--> ACCEPTED | REJECTED
      ^                                        |
      +------------------reset-----------------+

``step`` outside RUNNING raises ``InvalidStateError``. A partial DFA that has
no transition for the next symbol rejects the input (it gets stuck); that is a
verdict, not an error.
"""

import logging
import threading
from enum import Enum

from dfa_architect.errors import InvalidAutomatonError, InvalidInputError, InvalidStateError
from dfa_architect.validator import errors, validate

logger = logging.getLogger(__name__)


class SimulationStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


def _symbols_of(input_string):
    if isinstance(input_string, str):
        return tuple(input_string)
    try:
        symbols = tuple(input_string)
    except TypeError:
        raise InvalidInputError(f"input must be a string or a sequence of symbols, got {input_string!r}") from None
    for symbol in symbols:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidInputError(f"input symbols must be single characters, got {symbol!r}")
    return symbols


class Simulator:
    """Stepper for one simulation run; not meant to be shared across threads."""

    def __init__(self):
        self._lock = threading.Lock()
        self._clear()

    def _clear(self):
        self.status = SimulationStatus.IDLE
        self.automaton = None
        self.input = ()
        self.current = None
        self.step_index = 0
        self.stuck_symbol = None
        self._path = []
        self._history = []

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def path(self):
        """Labels of visited states; always ``step_index + 1`` long while a run exists."""
        return list(self._path)

    @property
    def history(self):
        """``(from_label, symbol, to_label)`` for every move taken so far."""
        return list(self._history)

    @property
    def is_running(self):
        return self.status is SimulationStatus.RUNNING

    @property
    def is_finished(self):
        return self.status in (SimulationStatus.ACCEPTED, SimulationStatus.REJECTED)

    @property
    def next_symbol(self):
        if not self.is_running:
            return None
        return self.input[self.step_index]

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def start(self, automaton, input_string):
        """Begin a new run, discarding any previous one."""
        symbols = _symbols_of(input_string)
        problems = errors(validate(automaton))
        if problems:
            raise InvalidAutomatonError(problems)

        with self._lock:
            self._clear()
            start = automaton.start_state()
            self.automaton = automaton
            self.input = symbols
            self.current = start
            self._path = [start.label]
            self.status = SimulationStatus.RUNNING
            logger.debug("simulation started at %s on %r", start.label, "".join(symbols))

            if not symbols:
                self._finish()
        return self

    def step(self):
        """Consume one input symbol."""
        if not self._lock.acquire(blocking=False):
            raise InvalidStateError("another step is already in progress on this simulator")
        try:
            if not self.is_running:
                raise InvalidStateError(f"cannot step while {self.status.value}")
            self._advance()
        finally:
            self._lock.release()
        return self

    def run(self):
        """Step until a verdict is reached and return the final status."""
        while self.is_running:
            self.step()
        return self.status

    def reset(self):
        with self._lock:
            self._clear()
        return self

    def _advance(self):
        symbol = self.input[self.step_index]
        candidates = self.automaton.transitions_on(self.current.id, symbol)
        if not candidates:
            self.stuck_symbol = symbol
            self.status = SimulationStatus.REJECTED
            logger.debug("stuck in %s on %r", self.current.label, symbol)
            return

        # Validation guarantees exactly one candidate with a resolvable target
        target = self.automaton.state(candidates[0].target)
        assert target is not None, f"transition {candidates[0].id} targets a missing state"

        self._history.append((self.current.label, symbol, target.label))
        self.current = target
        self._path.append(target.label)
        self.step_index += 1

        if self.step_index == len(self.input):
            self._finish()

    def _finish(self):
        if self.current.is_accept:
            self.status = SimulationStatus.ACCEPTED
        else:
            self.status = SimulationStatus.REJECTED
        logger.debug("simulation finished in %s: %s", self.current.label, self.status.value)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self):
        """Human-readable verdict for a finished run."""
        if not self.is_finished:
            raise InvalidStateError(f"no verdict while {self.status.value}")

        text = "".join(self.input)
        subject = f"String '{text}'" if text else "Empty string"
        if self.stuck_symbol is not None:
            return (
                f"{subject} is REJECTED by the DFA.\n"
                f"No transition defined for state {self.current.label} with symbol '{self.stuck_symbol}'"
            )
        if self.status is SimulationStatus.ACCEPTED:
            return f"{subject} is ACCEPTED by the DFA.\nEnded in accepting state: {self.current.label}"
        return f"{subject} is REJECTED by the DFA.\nEnded in non-accepting state: {self.current.label}"


def simulate(automaton, input_string):
    """Run ``input_string`` to completion and return the finished simulator."""
    simulator = Simulator().start(automaton, input_string)
    simulator.run()
    return simulator
