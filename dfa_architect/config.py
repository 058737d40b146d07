from dataclasses import dataclass


@dataclass(frozen=True)
class EngineSettings:
    """Tunable tokens and layout used by the grammar parser and converter."""

    # "→" is tried before "->" so "A → a-B" keeps its hyphen in the body
    arrow_tokens: tuple = ("→", "->")
    alternation: str = "|"
    # "^" is the epsilon spelling accepted by the Streamlit grammar input
    epsilon_markers: tuple = ("ε", "^")
    display_epsilon: str = "ε"
    display_arrow: str = "→"
    sink_state_id: str = "qf"
    layout_origin: tuple = (200.0, 200.0)
    layout_spacing: float = 200.0

    def __post_init__(self):
        if not self.arrow_tokens:
            raise ValueError("arrow_tokens must not be empty")
        if not self.alternation:
            raise ValueError("alternation must not be empty")
        if not self.sink_state_id:
            raise ValueError("sink_state_id must not be empty")


DEFAULT_SETTINGS = EngineSettings()
