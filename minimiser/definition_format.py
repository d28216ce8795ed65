"""
Reading and writing DFA definitions in the line-based text format.

A definition looks like this::

    s1,s2,s3
    a,b
    s2,s3
    s1
    s1,a->s2
    s1,b->s1
    ...

The lines are, in order: the states, the alphabet, the final states (the
line may be empty), the initial state, and then one ``state,symbol->state``
line per transition. Transitions end at the first empty line or at the end
of the input.
"""
import logging
from typing import Dict, Iterable, List

from .exceptions import MalformedDefinitionError
from .fsa_minimisation import minimise_dfa

logger = logging.getLogger(__name__)

HEADER_LINES = 4


def _split_list(line: str) -> List[str]:
    return sorted({item.strip() for item in line.split(',') if item.strip()})


def parse_definition(text: str) -> Dict:
    """
    Parses a DFA definition into the FSA dictionary format.

    Args:
        text: The definition text

    Returns:
        Dict: The FSA with sorted states, alphabet and accepting states

    Raises:
        MalformedDefinitionError: If the definition is structurally invalid
    """
    lines = [line.strip() for line in text.splitlines()]

    if len(lines) < HEADER_LINES:
        raise MalformedDefinitionError(
            f"Definition needs at least {HEADER_LINES} lines, got {len(lines)}"
        )

    states = _split_list(lines[0])
    alphabet = _split_list(lines[1])
    accepting = _split_list(lines[2])
    starting_state = lines[3]

    if not states:
        raise MalformedDefinitionError("Definition declares no states")

    state_set = set(states)
    alphabet_set = set(alphabet)

    if starting_state not in state_set:
        raise MalformedDefinitionError(f"Initial state '{starting_state}' is not a declared state")

    for state in accepting:
        if state not in state_set:
            raise MalformedDefinitionError(f"Final state '{state}' is not a declared state")

    transitions = {state: {} for state in states}

    for line_number, line in enumerate(lines[HEADER_LINES:], start=HEADER_LINES + 1):
        if not line:
            break

        if '->' not in line:
            raise MalformedDefinitionError(f"Line {line_number}: expected 'state,symbol->state', got '{line}'")

        source_part, target = (part.strip() for part in line.split('->', 1))
        source_fields = [field.strip() for field in source_part.split(',')]

        if len(source_fields) != 2:
            raise MalformedDefinitionError(f"Line {line_number}: expected 'state,symbol' before '->', got '{source_part}'")

        source, symbol = source_fields

        for state in (source, target):
            if state not in state_set:
                raise MalformedDefinitionError(f"Line {line_number}: unknown state '{state}'")

        if symbol not in alphabet_set:
            raise MalformedDefinitionError(f"Line {line_number}: unknown symbol '{symbol}'")

        if symbol in transitions[source]:
            raise MalformedDefinitionError(
                f"Line {line_number}: transition for ({source}, {symbol}) is already defined"
            )

        transitions[source][symbol] = [target]

    logger.debug("Parsed definition with %d states and %d symbols", len(states), len(alphabet))

    return {
        'states': states,
        'alphabet': alphabet,
        'transitions': transitions,
        'startingState': starting_state,
        'acceptingStates': accepting
    }


def _join(items: Iterable[str]) -> str:
    return ','.join(sorted(items))


def format_definition(fsa: Dict) -> str:
    """
    Writes an FSA dictionary back to the definition format.

    States, symbols and final states are written in sorted order, followed
    by one transition line for every state and symbol that has a target.
    """
    lines = [
        _join(fsa['states']),
        _join(fsa['alphabet']),
        _join(fsa['acceptingStates']),
        fsa['startingState'],
    ]

    for state in sorted(fsa['states']):
        for symbol in sorted(fsa['alphabet']):
            for target in fsa['transitions'].get(state, {}).get(symbol, []):
                lines.append(f"{state},{symbol}->{target}")

    return '\n'.join(lines) + '\n'


def minimise_definition(text: str) -> str:
    """Parses a definition, minimises the DFA and formats the result."""
    return format_definition(minimise_dfa(parse_definition(text)))
