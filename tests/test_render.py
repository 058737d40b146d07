"""
Graphviz diagrams and pandas tables built for the front end.

Only the DOT source is inspected, so the Graphviz binaries are not needed.
"""

from dfa_architect.convert import automaton_to_grammar
from dfa_architect.render import (
    diagnostics_table,
    productions_table,
    simulation_table,
    transition_table,
    visualize_automaton,
)
from dfa_architect.simulator import simulate
from dfa_architect.validator import validate


class TestVisualize:
    def test_shapes_and_start_pointer(self, example_automaton):
        source = visualize_automaton(example_automaton, "example").source
        assert "rankdir=LR" in source
        assert "q2 [label=q2 shape=doublecircle]" in source
        assert "q0 [label=q0 shape=circle]" in source
        assert "__start0 -> q0" in source

    def test_parallel_edges_merged(self, example_automaton):
        source = visualize_automaton(example_automaton).source
        assert 'q2 -> q0 [label="a, b"]' in source

    def test_dangling_edges_left_out(self, make_automaton):
        automaton = make_automaton([("q0", "start")], [("t0", "q0", "gone", "a")], ["a"])
        assert "gone" not in visualize_automaton(automaton).source

    def test_highlight_and_current(self, example_automaton):
        source = visualize_automaton(example_automaton, highlight=["t0", "q2"], current="q1").source
        assert "fillcolor=gold" in source
        assert "q0 -> q1 [label=a color=red fontcolor=red]" in source
        assert "color=red" in source.split("q2 [", 1)[1].split("]", 1)[0]


class TestTables:
    def test_transition_table(self, example_automaton):
        table = transition_table(example_automaton)
        assert list(table.columns) == ["State", "a", "b"]
        assert list(table["State"]) == ["q0 (Start)", "q1", "q2 (Final)"]
        assert list(table["a"]) == ["q1", "q1", "q0"]

    def test_transition_table_marks_gaps_and_conflicts(self, make_automaton):
        automaton = make_automaton(
            [("q0", "start-accept"), ("q1", "normal")],
            [("t0", "q0", "q0", "a"), ("t1", "q0", "q1", "a")],
            ["a", "b"],
        )
        table = transition_table(automaton)
        assert table.iloc[0]["State"] == "q0 (Start) (Final)"
        assert table.iloc[0]["a"] == "q0, q1"
        assert table.iloc[0]["b"] == "-"

    def test_diagnostics_table(self, make_automaton):
        automaton = make_automaton([("q0", "start")], [], ["a"])
        table = diagnostics_table(validate(automaton))
        assert list(table["Severity"]) == ["WARNING", "WARNING"]
        assert list(table["Kind"]) == ["no-accept", "missing-transition"]

    def test_empty_diagnostics_table(self):
        assert diagnostics_table([]).empty

    def test_simulation_table(self, example_automaton):
        table = simulation_table(simulate(example_automaton, "ab"))
        assert table.to_dict("records") == [
            {"Step": 1, "From": "q0", "Input": "a", "To": "q1"},
            {"Step": 2, "From": "q1", "Input": "b", "To": "q2"},
        ]

    def test_productions_table(self, example_automaton):
        table = productions_table(automaton_to_grammar(example_automaton))
        assert list(table["Non-terminal"]) == ["q0", "q1", "q2"]
        assert table.iloc[2]["Productions"] == "aq0 | bq0 | ε"
