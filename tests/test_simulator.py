"""
Step-wise simulation: run lifecycle, path bookkeeping and misuse handling.
"""

import threading

import pytest

from dfa_architect.errors import InvalidAutomatonError, InvalidInputError, InvalidStateError
from dfa_architect.simulator import SimulationStatus, Simulator, simulate


class TestExampleRuns:
    def test_ab_is_accepted(self, example_automaton):
        sim = Simulator().start(example_automaton, "ab")
        assert sim.status is SimulationStatus.RUNNING
        assert sim.path == ["q0"]
        sim.step()
        assert sim.path == ["q0", "q1"]
        sim.step()
        assert sim.path == ["q0", "q1", "q2"]
        assert sim.status is SimulationStatus.ACCEPTED

    def test_ba_is_rejected(self, example_automaton):
        sim = Simulator().start(example_automaton, "ba")
        sim.step().step()
        assert sim.path == ["q0", "q0", "q1"]
        assert sim.status is SimulationStatus.REJECTED
        assert "Ended in non-accepting state: q1" in sim.summary()

    def test_history(self, example_automaton):
        sim = simulate(example_automaton, "ab")
        assert sim.history == [("q0", "a", "q1"), ("q1", "b", "q2")]
        assert sim.summary().startswith("String 'ab' is ACCEPTED")

    def test_path_length_tracks_step(self, example_automaton):
        sim = Simulator().start(example_automaton, "abab")
        while sim.is_running:
            assert len(sim.path) == sim.step_index + 1
            sim.step()
        assert len(sim.path) == sim.step_index + 1

    def test_sequence_input(self, example_automaton):
        assert simulate(example_automaton, ["a", "b"]).status is SimulationStatus.ACCEPTED


class TestEmptyInput:
    def test_start_state_not_accepting(self, example_automaton):
        sim = Simulator().start(example_automaton, "")
        assert sim.status is SimulationStatus.REJECTED
        assert sim.path == ["q0"]

    def test_start_accept_state(self, single_state):
        sim = Simulator().start(single_state, "")
        assert sim.status is SimulationStatus.ACCEPTED
        assert sim.summary().startswith("Empty string is ACCEPTED")


class TestPartialDfa:
    def test_stuck_rejects(self, make_automaton):
        automaton = make_automaton(
            [("q0", "start"), ("q1", "accept")], [("t0", "q0", "q1", "a")], ["a", "b"]
        )
        sim = Simulator().start(automaton, "ab")
        sim.step()
        sim.step()
        assert sim.status is SimulationStatus.REJECTED
        assert sim.path == ["q0", "q1"]
        assert sim.step_index == 1
        assert sim.stuck_symbol == "b"
        assert "No transition defined for state q1 with symbol 'b'" in sim.summary()

    def test_symbol_outside_alphabet_gets_stuck(self, example_automaton):
        sim = simulate(example_automaton, "ac")
        assert sim.status is SimulationStatus.REJECTED
        assert sim.stuck_symbol == "c"


class TestMisuse:
    def test_step_when_idle(self):
        with pytest.raises(InvalidStateError):
            Simulator().step()

    def test_step_after_verdict(self, example_automaton):
        sim = simulate(example_automaton, "ab")
        with pytest.raises(InvalidStateError):
            sim.step()

    def test_summary_before_verdict(self, example_automaton):
        with pytest.raises(InvalidStateError):
            Simulator().start(example_automaton, "ab").summary()

    def test_invalid_automaton(self, make_automaton):
        automaton = make_automaton(
            [("q0", "start"), ("q1", "start")], [("t0", "q0", "q1", "a")], ["a"]
        )
        with pytest.raises(InvalidAutomatonError) as excinfo:
            Simulator().start(automaton, "a")
        assert excinfo.value.diagnostics

    def test_bad_input_type(self, example_automaton):
        with pytest.raises(InvalidInputError):
            Simulator().start(example_automaton, 42)
        with pytest.raises(InvalidInputError):
            Simulator().start(example_automaton, ["ab"])

    def test_warnings_do_not_block(self, make_automaton):
        # no accept state and a missing transition are only warnings
        automaton = make_automaton([("q0", "start")], [], ["a"])
        assert simulate(automaton, "a").status is SimulationStatus.REJECTED


class TestReset:
    def test_reset_returns_to_idle(self, example_automaton):
        sim = Simulator().start(example_automaton, "ab")
        sim.step()
        sim.reset()
        assert sim.status is SimulationStatus.IDLE
        assert sim.path == []
        assert sim.current is None
        assert sim.step_index == 0

    def test_new_run_discards_previous(self, example_automaton):
        sim = simulate(example_automaton, "ab")
        sim.start(example_automaton, "b")
        assert sim.path == ["q0"]
        assert sim.history == []
        assert sim.is_running

    def test_path_is_a_copy(self, example_automaton):
        sim = Simulator().start(example_automaton, "ab")
        sim.path.append("bogus")
        assert sim.path == ["q0"]


class TestConcurrentUse:
    def test_step_while_another_is_in_progress(self, example_automaton):
        sim = Simulator().start(example_automaton, "ab")
        with sim._lock:
            with pytest.raises(InvalidStateError, match="in progress"):
                sim.step()
        assert sim.path == ["q0"]
        assert sim.step().path == ["q0", "q1"]

    def test_start_waits_for_step_in_progress(self, example_automaton):
        sim = Simulator().start(example_automaton, "ab")
        started = threading.Event()

        def restart():
            started.set()
            sim.start(example_automaton, "b")

        worker = threading.Thread(target=restart, daemon=True)
        sim._lock.acquire()
        try:
            worker.start()
            started.wait(timeout=5)
            worker.join(timeout=0.2)
            # the restart cannot touch the run while the lock is held
            assert worker.is_alive()
            assert sim.input == ("a", "b")
        finally:
            sim._lock.release()
        worker.join(timeout=5)
        assert sim.input == ("b",)
        assert sim.path == ["q0"]

    def test_symbol_outside_alphabet_with_two_targets_is_refused(self, make_automaton):
        automaton = make_automaton(
            [("q0", "start"), ("q1", "accept"), ("q2", "normal")],
            [("t0", "q0", "q1", "x"), ("t1", "q0", "q2", "x")],
            ["a"],
        )
        with pytest.raises(InvalidAutomatonError):
            simulate(automaton, "x")
