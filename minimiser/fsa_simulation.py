from typing import Dict, List, Optional, Union, Tuple

from .fsa_minimisation import transition_target
from .fsa_properties import is_deterministic


def _rejection(path: List[Tuple[str, str, str]], reason: str, position: int) -> Dict:
    return {
        'accepted': False,
        'path': path,
        'rejection_reason': reason,
        'rejection_position': position
    }


def simulate_deterministic_fsa(fsa: Dict, input_string: str) -> Union[List[Tuple[str, str, str]], Dict]:
    """
    Simulates a deterministic FSA with the given input string.

    Args:
        fsa: A dictionary representing the FSA with the following keys:
            - states: List of all states
            - alphabet: List of symbols in the alphabet
            - transitions: Dictionary of transitions
            - startingState: The starting state
            - acceptingStates: List of accepting states
        input_string: The input to simulate, either a string of one-character
            symbols or a list of symbols

    Returns:
        If the input is accepted, returns a list of transitions in the format:
        [(current_state, symbol, next_state), ...].
        If the input is rejected, returns a dictionary with:
        {
            'accepted': False,
            'path': [(current_state, symbol, next_state), ...],  # Path up to rejection
            'rejection_reason': str,  # Why rejected
            'rejection_position': int  # Position where rejection occurred
        }
    """
    if not is_deterministic(fsa):
        return _rejection([], 'FSA must be deterministic', 0)

    current_state = fsa['startingState']
    execution_path = []

    for position, symbol in enumerate(input_string):
        if symbol not in fsa['alphabet']:
            return _rejection(execution_path, f"Symbol '{symbol}' not in alphabet", position)

        next_state = transition_target(fsa, current_state, symbol)
        if next_state is None:
            return _rejection(
                execution_path,
                f"No transition defined for symbol '{symbol}' from state '{current_state}'",
                position
            )

        execution_path.append((current_state, symbol, next_state))
        current_state = next_state

    if current_state in fsa['acceptingStates']:
        return execution_path

    return _rejection(
        execution_path,
        f"Final state '{current_state}' is not an accepting state",
        len(input_string)
    )


def final_state(fsa: Dict, input_string: Union[str, List[str]]) -> Optional[str]:
    """
    Returns the state a complete DFA ends in after reading the input, or None
    when a symbol is outside the alphabet or has no transition.
    """
    current_state = fsa['startingState']
    for symbol in input_string:
        if symbol not in fsa['alphabet']:
            return None
        current_state = transition_target(fsa, current_state, symbol)
        if current_state is None:
            return None
    return current_state


def accepts(fsa: Dict, input_string: Union[str, List[str]]) -> bool:
    """Returns True if the deterministic FSA accepts the input string."""
    return final_state(fsa, input_string) in fsa['acceptingStates']
