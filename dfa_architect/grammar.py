"""
Right-linear grammar values and the production-rule parser.

Rules are written one head per line, alternatives separated by ``|``::

    S → aS | bA | ε
    A -> aA | b

Uppercase letters are non-terminals, every other non-blank character is a
terminal. The parser only does lexical work and set membership; whether each
alternative has a right-linear shape is decided at conversion time.
"""

import logging
from dataclasses import dataclass, field

from dfa_architect.config import DEFAULT_SETTINGS
from dfa_architect.errors import MalformedProductionError, MissingArrowError, UnknownStartSymbolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Production:
    """Right-hand side of a production; no symbols means ε."""

    symbols: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "symbols", tuple(self.symbols))

    @property
    def is_epsilon(self):
        return not self.symbols

    @property
    def terminal(self):
        return self.symbols[0] if self.symbols else None

    @property
    def non_terminal(self):
        return self.symbols[1] if len(self.symbols) == 2 else None

    def render(self, epsilon=DEFAULT_SETTINGS.display_epsilon):
        return "".join(self.symbols) if self.symbols else epsilon

    def __str__(self):
        return self.render()


EPSILON = Production()


@dataclass(frozen=True)
class Grammar:
    start_symbol: str
    non_terminals: tuple
    terminals: tuple
    # head -> tuple of Production, in the order the rules were written
    productions: dict = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "non_terminals", tuple(self.non_terminals))
        object.__setattr__(self, "terminals", tuple(self.terminals))
        object.__setattr__(
            self,
            "productions",
            {head: tuple(rules) for head, rules in self.productions.items()},
        )
        if self.start_symbol not in self.non_terminals:
            raise ValueError(f"start symbol {self.start_symbol!r} is not a non-terminal")

    def productions_for(self, head):
        return self.productions.get(head, ())

    def has_epsilon(self, head):
        return any(rule.is_epsilon for rule in self.productions_for(head))


def _split_arrow(line, settings):
    for token in settings.arrow_tokens:
        index = line.find(token)
        if index != -1:
            return line[:index], line[index + len(token):]
    return None


def parse_grammar(start_symbol, text, settings=None):
    """Parse production rules into a ``Grammar``.

    Raises a ``GrammarParseError`` subclass carrying the 1-based line number
    and the offending line. No partial grammar is ever returned.
    """
    settings = settings or DEFAULT_SETTINGS
    start_symbol = (start_symbol or "").strip()

    non_terminals = {}
    terminals = {}
    productions = {}

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        parts = _split_arrow(line, settings)
        if parts is None:
            tokens = "' or '".join(settings.arrow_tokens)
            raise MissingArrowError(
                f"Invalid production rule format: \"{line}\". Use '{tokens}'",
                line_number,
                line,
            )

        head, body = parts[0].strip(), parts[1].strip()
        if not head or not body:
            raise MalformedProductionError(f"Invalid production rule: {line}", line_number, line)
        if len(head.split()) != 1:
            raise MalformedProductionError(
                f"Left-hand side must be a single non-terminal: {head}", line_number, line
            )

        non_terminals.setdefault(head, None)
        rules = productions.setdefault(head, [])

        for alternative in body.split(settings.alternation):
            alternative = "".join(alternative.split())
            if not alternative:
                raise MalformedProductionError(
                    f"Empty alternative in production rule: {line}", line_number, line
                )
            if alternative in settings.epsilon_markers:
                rules.append(EPSILON)
                continue

            if any(marker in alternative for marker in settings.epsilon_markers):
                raise MalformedProductionError(
                    f"Empty-string marker must stand alone: {alternative}", line_number, line
                )

            for char in alternative:
                if "A" <= char <= "Z":
                    non_terminals.setdefault(char, None)
                else:
                    terminals.setdefault(char, None)
            rules.append(Production(tuple(alternative)))

    if start_symbol not in non_terminals:
        raise UnknownStartSymbolError(start_symbol)

    grammar = Grammar(
        start_symbol=start_symbol,
        non_terminals=tuple(non_terminals),
        terminals=tuple(terminals),
        productions=productions,
    )
    logger.debug(
        "parsed grammar: %d non-terminals, %d terminals, %d rules",
        len(grammar.non_terminals),
        len(grammar.terminals),
        sum(len(rules) for rules in grammar.productions.values()),
    )
    return grammar


def format_grammar(grammar, settings=None):
    """Render productions as ``A → aB | ε`` lines, start symbol first."""
    settings = settings or DEFAULT_SETTINGS
    heads = [grammar.start_symbol] + [
        nt for nt in grammar.non_terminals if nt != grammar.start_symbol
    ]
    lines = []
    for head in heads:
        rules = grammar.productions_for(head)
        if not rules:
            continue
        alternatives = " | ".join(rule.render(settings.display_epsilon) for rule in rules)
        lines.append(f"{head} {settings.display_arrow} {alternatives}")
    return "\n".join(lines)
