class AutomataError(ValueError):
    """Base class for every failure raised by the automaton engine."""


class GrammarParseError(AutomataError):
    """Raised when production rules cannot be parsed."""

    def __init__(self, message, line_number=None, line=None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class MissingArrowError(GrammarParseError):
    pass


class MalformedProductionError(GrammarParseError):
    pass


class UnknownStartSymbolError(GrammarParseError):
    def __init__(self, start_symbol):
        self.start_symbol = start_symbol
        super().__init__(
            f'Start symbol "{start_symbol}" is not defined as a non-terminal in your rules.'
        )


class ConversionError(AutomataError):
    """Raised when a grammar or automaton cannot be converted."""


class UnsupportedProductionError(ConversionError):
    def __init__(self, head, production):
        self.head = head
        self.production = production
        super().__init__(
            f"Unsupported rule format for DFA conversion: {head} → {production}. "
            "Only A → a, A → aB or A → ε are supported for right-linear grammars."
        )


class EmptyResultError(ConversionError):
    pass


class StartStateError(ConversionError):
    pass


class SimulationError(AutomataError):
    pass


class InvalidAutomatonError(SimulationError):
    """The automaton has error-severity diagnostics and cannot be simulated."""

    def __init__(self, diagnostics):
        self.diagnostics = list(diagnostics)
        messages = "; ".join(d.message for d in self.diagnostics)
        super().__init__(f"Automaton is not ready for simulation: {messages}")


class InvalidInputError(SimulationError):
    pass


class InvalidStateError(SimulationError):
    """An operation was requested that the simulator's current status forbids."""
