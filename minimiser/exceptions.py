from typing import List, Tuple


class FSAError(ValueError):
    """Base class for errors raised while reading or minimising an FSA."""


class MalformedDefinitionError(FSAError):
    """The automaton definition is structurally invalid."""


class NonDeterministicError(FSAError):
    """The automaton has epsilon transitions or several targets for one state-symbol pair."""


class IncompleteTransitionError(FSAError):
    """
    The transition function is not total.

    Attributes:
        missing: The (state, symbol) pairs that have no target
    """

    def __init__(self, missing: List[Tuple[str, str]]):
        self.missing = missing
        pairs = ', '.join(f"({state}, {symbol})" for state, symbol in missing)
        super().__init__(f"DFA minimisation requires a complete DFA. Missing transitions: {pairs}")
