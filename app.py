import logging
import warnings

import streamlit as st

from dfa_architect import (
    AutomataError,
    SimulationStatus,
    Simulator,
    automaton_to_grammar,
    format_grammar,
    format_report,
    grammar_to_automaton,
    is_simulation_ready,
    parse_grammar,
    validate,
)
from dfa_architect.convert import describe_grammar
from dfa_architect.gallery import GRAMMAR_EXAMPLES, example_dfa
from dfa_architect.records import AutomatonRecord, record_from_grammar
from dfa_architect.render import (
    diagnostics_table,
    productions_table,
    simulation_table,
    transition_table,
    visualize_automaton,
)
from dfa_architect.validator import errors, warnings as warnings_of

warnings.filterwarnings('ignore')
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("dfa_architect.app")


def current_record():
    """The automaton snapshot being worked on, seeded with the example DFA."""
    if 'record' not in st.session_state:
        st.session_state.record = AutomatonRecord(
            name="Example DFA",
            automaton=example_dfa(),
            description="Three-state DFA over {a, b}.",
        )
    return st.session_state.record


def replace_record(record):
    st.session_state.record = record
    # A new automaton invalidates any run in progress
    st.session_state.simulator = Simulator()


def simulator():
    if 'simulator' not in st.session_state:
        st.session_state.simulator = Simulator()
    return st.session_state.simulator


def grammar_input_section():
    st.subheader("Production Rules → DFA")
    st.markdown("""
    Enter a right-linear grammar, one non-terminal per line:
    - Rules in the form `A → aB | a | ε` (`->` works too, `^` is accepted for ε)
    - Uppercase letters are non-terminals, everything else is a terminal
    """)

    example_dict = {desc: (start, rules) for start, rules, desc in GRAMMAR_EXAMPLES}
    selected = st.selectbox(
        "Select a grammar example:",
        options=list(example_dict.keys()),
        format_func=lambda x: f"Example: {x}",
    )
    default_start, default_rules = example_dict[selected]

    start_symbol = st.text_input("Start symbol:", value=default_start)
    rules = st.text_area("Production rules:", value=default_rules, height=150)

    if st.button("Generate DFA"):
        try:
            grammar = parse_grammar(start_symbol, rules)
            automaton = grammar_to_automaton(grammar)
        except AutomataError as e:
            st.error(f"Error processing grammar: {e}")
            return
        replace_record(record_from_grammar(grammar, automaton))
        st.success(f"Successfully converted grammar to a DFA with {len(automaton.states)} states")


def automaton_section(record, diagnostics):
    automaton = record.automaton
    st.subheader(record.name)
    if record.description:
        st.caption(record.description)

    col1, col2 = st.columns([1, 2])
    with col1:
        st.markdown("### Transition Table")
        st.table(transition_table(automaton))
    with col2:
        st.markdown("### Visualization")
        # Filled in by draw_diagram once the simulation buttons have been handled
        chart = st.empty()
        st.caption("Double circles are accepting states. Red marks elements involved in errors.")
    return chart


def draw_diagram(chart, record, diagnostics):
    highlight = [i for d in errors(diagnostics) for i in d.affected]
    sim = simulator()
    current = sim.current.id if sim.current is not None else None
    chart.graphviz_chart(visualize_automaton(record.automaton, record.name, highlight, current))


def console_section(diagnostics):
    st.markdown("### DFA Console")
    st.markdown(f"**{len(errors(diagnostics))} errors, {len(warnings_of(diagnostics))} warnings**")
    if not diagnostics:
        st.success("No issues detected.")
        return
    st.dataframe(diagnostics_table(diagnostics), hide_index=True)
    with st.expander("Copy all issues"):
        st.code(format_report(diagnostics), language="text")


def simulation_section(record, diagnostics):
    st.markdown("### Test a String")
    sim = simulator()
    test_string = st.text_input("Input string:", value="ab")

    if not is_simulation_ready(diagnostics):
        st.warning("Fix the errors in the console before simulating.")
        return

    col1, col2, col3, col4 = st.columns(4)
    try:
        if col1.button("Start"):
            sim.start(record.automaton, test_string)
        if col2.button("Step", disabled=not sim.is_running):
            sim.step()
        if col3.button("Run to end"):
            if not sim.is_running:
                sim.start(record.automaton, test_string)
            sim.run()
        if col4.button("Reset"):
            sim.reset()
    except AutomataError as e:
        st.error(str(e))
        return

    if sim.path:
        st.markdown("**Path:** " + " → ".join(sim.path))
        if sim.is_running:
            st.caption(f"Next symbol: '{sim.next_symbol}'")
        st.table(simulation_table(sim))
    if sim.is_finished:
        if sim.status is SimulationStatus.ACCEPTED:
            st.success(sim.summary())
        else:
            st.error(sim.summary())


def grammar_output_section(record):
    st.markdown("### Generated Regular Grammar")
    try:
        grammar = automaton_to_grammar(record.automaton)
    except AutomataError as e:
        st.info(f"No grammar can be generated: {e}")
        return
    st.table(productions_table(grammar))
    st.code(format_grammar(grammar), language="text")
    st.text(describe_grammar(grammar))


def main():
    st.set_page_config(
        page_title="DFA Architect",
        page_icon="🧠",
        layout="wide",
    )

    st.title("DFA Architect: Build, Validate and Simulate DFAs")
    st.markdown("""
    Convert right-linear grammars into deterministic finite automata, check them for structural
    problems, run input strings one symbol at a time, and turn a DFA back into production rules.
    """)

    with st.sidebar:
        st.header("📚 Automata Theory Guide")
        st.markdown("""
        ### A DFA needs
        - Exactly one start state
        - Exactly one transition per state and symbol
        - At least one accept state (otherwise it rejects everything)

        ### Special Notation:
        - `→` or `->` separates a non-terminal from its rules
        - `|` separates alternatives
        - `ε` or `^` for the empty string
        """)
        record = current_record()
        st.download_button(
            "Download snapshot (JSON)",
            data=record.to_json(indent=2),
            file_name="dfa.json",
            mime="application/json",
        )

    grammar_input_section()

    record = current_record()
    diagnostics = validate(record.automaton)
    chart = automaton_section(record, diagnostics)
    console_section(diagnostics)
    simulation_section(record, diagnostics)
    draw_diagram(chart, record, diagnostics)
    grammar_output_section(record)


if __name__ == "__main__":
    main()
