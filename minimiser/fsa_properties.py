from typing import Dict, List, Tuple
from collections import deque


def is_deterministic(fsa: Dict) -> bool:
    """
    Checks if the FSA is deterministic.

    An FSA is deterministic if:
    1. It has no epsilon transitions
    2. For each state and each symbol, there is at most one transition

    Args:
        fsa: A dictionary representing the FSA with the following keys:
            - states: List of all states
            - alphabet: List of symbols in the alphabet
            - transitions: Dictionary of transitions
            - startingState: The starting state
            - acceptingStates: List of accepting states

    Returns:
        bool: True if the FSA is deterministic, False otherwise
    """
    transitions = fsa.get('transitions', {})

    for state in fsa.get('states', []):
        state_transitions = transitions.get(state, {})

        # Non-empty epsilon transitions make the FSA non-deterministic
        if state_transitions.get(''):
            return False

        for symbol in fsa.get('alphabet', []):
            if len(state_transitions.get(symbol, [])) > 1:
                return False

    return True


def find_missing_transitions(fsa: Dict) -> List[Tuple[str, str]]:
    """
    Lists every state-symbol pair that has no target.

    Args:
        fsa: A dictionary representing the FSA

    Returns:
        List[Tuple[str, str]]: The (state, symbol) pairs without a transition,
        in the order of the states and alphabet lists
    """
    missing = []
    transitions = fsa.get('transitions', {})

    for state in fsa.get('states', []):
        for symbol in fsa.get('alphabet', []):
            if not transitions.get(state, {}).get(symbol):
                missing.append((state, symbol))

    return missing


def is_complete(fsa: Dict) -> bool:
    """
    Checks if the FSA is complete.

    An FSA is complete if for each state and each symbol, there is at least one transition.
    An FSA without states or without an alphabet is trivially complete.

    Args:
        fsa: A dictionary representing the FSA

    Returns:
        bool: True if the FSA is complete, False otherwise
    """
    return not find_missing_transitions(fsa)


def is_connected(fsa: Dict) -> bool:
    """
    Checks if the FSA is connected.

    An FSA is connected if all states are reachable from the starting state.

    Args:
        fsa: A dictionary representing the FSA

    Returns:
        bool: True if the FSA is connected, False otherwise
    """
    if not fsa.get('states'):
        return True  # Trivially connected if no states

    if fsa.get('startingState') not in fsa['states']:
        return False

    reachable_states = {fsa['startingState']}
    queue = deque([fsa['startingState']])

    while queue:
        current_state = queue.popleft()

        for targets in fsa.get('transitions', {}).get(current_state, {}).values():
            for next_state in targets:
                if next_state not in reachable_states:
                    reachable_states.add(next_state)
                    queue.append(next_state)

    return reachable_states >= set(fsa['states'])


def check_all_properties(fsa: Dict) -> Dict:
    """
    Check all FSA properties at once.

    Args:
        fsa: A dictionary representing the FSA

    Returns:
        Dict: Dictionary containing all property check results:
        {
            'deterministic': bool,
            'complete': bool,
            'connected': bool
        }
    """
    return {
        'deterministic': is_deterministic(fsa),
        'complete': is_complete(fsa),
        'connected': is_connected(fsa)
    }


def validate_fsa_structure(fsa: Dict) -> Dict:
    """
    Validates that the FSA has the required structure and only refers to
    declared states and symbols.

    Args:
        fsa: The FSA dictionary to validate

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(fsa, dict):
        return {'valid': False, 'error': 'FSA must be a dictionary'}

    required_keys = ['states', 'alphabet', 'transitions', 'startingState', 'acceptingStates']

    for key in required_keys:
        if key not in fsa:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    if not isinstance(fsa['states'], list):
        return {'valid': False, 'error': 'states must be a list'}

    if not isinstance(fsa['alphabet'], list):
        return {'valid': False, 'error': 'alphabet must be a list'}

    if not isinstance(fsa['transitions'], dict):
        return {'valid': False, 'error': 'transitions must be a dictionary'}

    if not isinstance(fsa['acceptingStates'], list):
        return {'valid': False, 'error': 'acceptingStates must be a list'}

    # Labels are compared and hashed as strings
    for key in ('states', 'alphabet', 'acceptingStates'):
        if not all(isinstance(label, str) for label in fsa[key]):
            return {'valid': False, 'error': f'{key} must only contain strings'}

    if not isinstance(fsa['startingState'], str):
        return {'valid': False, 'error': 'startingState must be a string'}

    # An FSA without states is the empty automaton; nothing else to check
    if not fsa['states']:
        return {'valid': True}

    states = set(fsa['states'])
    alphabet = set(fsa['alphabet'])

    if fsa['startingState'] not in states:
        return {'valid': False, 'error': 'Starting state not in states list'}

    for state in fsa['acceptingStates']:
        if state not in states:
            return {'valid': False, 'error': f'Accepting state {state} not in states list'}

    for state, state_transitions in fsa['transitions'].items():
        if state not in states:
            return {'valid': False, 'error': f'Transition from unknown state {state}'}

        if not isinstance(state_transitions, dict):
            return {'valid': False, 'error': f'Transitions of state {state} must be a dictionary'}

        for symbol, targets in state_transitions.items():
            if symbol != '' and symbol not in alphabet:
                return {'valid': False, 'error': f"Symbol '{symbol}' not in alphabet"}

            if not isinstance(targets, list):
                return {'valid': False, 'error': f'Targets of ({state}, {symbol}) must be a list'}

            for target in targets:
                if not isinstance(target, str):
                    return {'valid': False, 'error': f'Targets of ({state}, {symbol}) must be strings'}
                if target not in states:
                    return {'valid': False, 'error': f'Transition target {target} not in states list'}

    return {'valid': True}
