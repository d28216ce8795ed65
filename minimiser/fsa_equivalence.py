from collections import deque
from typing import Dict, Tuple, Optional

from .fsa_minimisation import minimise_dfa


def find_state_mapping(dfa1: Dict, dfa2: Dict) -> Optional[Dict[str, str]]:
    """
    Find a bijective mapping between states of two DFAs if they are isomorphic.

    Args:
        dfa1: First DFA
        dfa2: Second DFA

    Returns:
        A dictionary mapping states from dfa1 to dfa2, or None if no mapping exists
    """
    if len(dfa1['states']) != len(dfa2['states']):
        return None
    if len(dfa1['acceptingStates']) != len(dfa2['acceptingStates']):
        return None
    if set(dfa1['alphabet']) != set(dfa2['alphabet']):
        return None

    if not dfa1['states']:
        return {}

    mapping = {}
    queue = deque([(dfa1['startingState'], dfa2['startingState'])])

    while queue:
        state1, state2 = queue.popleft()

        if state1 in mapping:
            if mapping[state1] != state2:
                return None  # Inconsistent mapping
            continue

        mapping[state1] = state2

        if (state1 in dfa1['acceptingStates']) != (state2 in dfa2['acceptingStates']):
            return None

        for symbol in dfa1['alphabet']:
            targets1 = dfa1['transitions'].get(state1, {}).get(symbol, [])
            targets2 = dfa2['transitions'].get(state2, {}).get(symbol, [])

            if len(targets1) != len(targets2):
                return None

            if targets1:
                queue.append((targets1[0], targets2[0]))

    # The mapping must be injective and cover every state
    if len(mapping) != len(dfa1['states']) or len(set(mapping.values())) != len(mapping):
        return None

    return mapping


def are_dfas_isomorphic(dfa1: Dict, dfa2: Dict) -> bool:
    """
    Check if two DFAs are isomorphic (structurally identical up to state renaming).

    Args:
        dfa1: First DFA
        dfa2: Second DFA

    Returns:
        True if the DFAs are isomorphic, False otherwise
    """
    return find_state_mapping(dfa1, dfa2) is not None


def are_dfas_equivalent(dfa1: Dict, dfa2: Dict) -> Tuple[bool, Dict]:
    """
    Check if two complete DFAs accept the same language.

    Two complete DFAs over the same alphabet are equivalent if and only if
    their minimal DFAs are isomorphic.

    Args:
        dfa1: First DFA
        dfa2: Second DFA

    Returns:
        A tuple of (is_equivalent, details) where details holds the state
        counts before and after minimisation, the reason, and the state
        mapping when the DFAs are equivalent

    Raises:
        ValueError: If either DFA cannot be minimised
    """
    minimal_dfa1 = minimise_dfa(dfa1)
    minimal_dfa2 = minimise_dfa(dfa2)

    details = {
        'dfa1_states': len(dfa1['states']),
        'dfa2_states': len(dfa2['states']),
        'minimal_dfa1_states': len(minimal_dfa1['states']),
        'minimal_dfa2_states': len(minimal_dfa2['states']),
    }

    if set(minimal_dfa1['alphabet']) != set(minimal_dfa2['alphabet']):
        details['reason'] = 'DFAs have different alphabets'
        return False, details

    mapping = find_state_mapping(minimal_dfa1, minimal_dfa2)
    if mapping is None:
        details['reason'] = 'Minimal DFAs are not isomorphic'
        return False, details

    details['reason'] = 'Minimal DFAs are isomorphic'
    details['state_mapping'] = mapping
    return True, details
