import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from .exceptions import IncompleteTransitionError, MalformedDefinitionError, NonDeterministicError
from .fsa_properties import find_missing_transitions, is_deterministic, validate_fsa_structure

logger = logging.getLogger(__name__)


class MinimisationResult(NamedTuple):
    """Result of DFA minimisation with metadata about the process"""
    dfa: Dict
    original_states: int
    final_states: int
    unreachable_states: List[str]
    equivalence_classes: List[List[str]]
    refinement_passes: int


def _empty_dfa(alphabet: List[str]) -> Dict:
    return {
        'states': [],
        'alphabet': sorted(set(alphabet)),
        'transitions': {},
        'startingState': '',
        'acceptingStates': []
    }


def transition_target(fsa: Dict, state: str, symbol: str) -> Optional[str]:
    """Returns the single target of a DFA transition, or None if it is undefined."""
    targets = fsa['transitions'].get(state, {}).get(symbol, [])
    return targets[0] if targets else None


def check_minimisation_preconditions(fsa: Dict) -> None:
    """
    Rejects any automaton that cannot be minimised.

    Raises:
        MalformedDefinitionError: If the FSA structure is invalid
        NonDeterministicError: If the FSA is not deterministic
        IncompleteTransitionError: If some state-symbol pair has no target
    """
    validation = validate_fsa_structure(fsa)
    if not validation['valid']:
        raise MalformedDefinitionError(f"Invalid DFA structure: {validation['error']}")

    if not is_deterministic(fsa):
        raise NonDeterministicError("DFA minimisation requires a deterministic FSA.")

    missing = find_missing_transitions(fsa)
    if missing:
        raise IncompleteTransitionError(missing)


# Reachability

def find_reachable_states(fsa: Dict) -> List[str]:
    """
    Finds every state reachable from the starting state.

    The search proceeds in rounds: each round follows every alphabet symbol
    out of the states discovered in the previous round, and the search stops
    as soon as a round discovers nothing new.

    Args:
        fsa (Dict): A dictionary representing the DFA.

    Returns:
        List[str]: The reachable states in sorted order.
    """
    start = fsa['startingState']
    reachable = {start}
    frontier = [start]

    while frontier:
        next_frontier = []
        for state in frontier:
            for symbol in fsa['alphabet']:
                target = transition_target(fsa, state, symbol)
                if target is not None and target not in reachable:
                    reachable.add(target)
                    next_frontier.append(target)
        frontier = next_frontier

    return sorted(reachable)


def remove_unreachable_states(fsa: Dict) -> Dict:
    """Returns a copy of the DFA restricted to the states reachable from the start state."""
    reachable = find_reachable_states(fsa)
    reachable_set = set(reachable)

    transitions = {}
    for state in reachable:
        transitions[state] = {
            symbol: list(targets)
            for symbol, targets in fsa['transitions'].get(state, {}).items()
        }

    return {
        'states': reachable,
        'alphabet': sorted(set(fsa['alphabet'])),
        'transitions': transitions,
        'startingState': fsa['startingState'],
        'acceptingStates': sorted(set(fsa['acceptingStates']) & reachable_set)
    }


# Partition refinement

def initial_partition(fsa: Dict) -> List[List[str]]:
    """
    Splits the states into accepting and non-accepting states.

    Empty groups are dropped, so the result has one element when every
    state (or no state) is accepting.
    """
    accepting = set(fsa['acceptingStates'])
    partition = [
        sorted(state for state in set(fsa['states']) if state in accepting),
        sorted(state for state in set(fsa['states']) if state not in accepting),
    ]
    return [element for element in partition if element]


def _index_blocks(partition: List[List[str]]) -> Dict[str, int]:
    block_of = {}
    for index, element in enumerate(partition):
        for state in element:
            block_of[state] = index
    return block_of


def are_states_equivalent(fsa: Dict, s1: str, s2: str, block_of: Dict[str, int]) -> bool:
    """
    Checks whether two states cannot be told apart under the given partition.

    Args:
        fsa: The DFA
        s1: The first state
        s2: The second state
        block_of: Maps every state to the index of its partition element

    Returns:
        True if, for every symbol, both targets lie in the same partition element
    """
    for symbol in fsa['alphabet']:
        if block_of[transition_target(fsa, s1, symbol)] != block_of[transition_target(fsa, s2, symbol)]:
            return False
    return True


def split_partition_element(fsa: Dict, element: List[str], block_of: Dict[str, int]) -> List[List[str]]:
    """
    Splits one partition element into groups of mutually equivalent states.

    Grouping is first-match-wins: the first state opens the first group, and
    every following state joins the first group (in the order the groups
    were opened) whose first member it is equivalent to, or opens a new
    group. States are visited in sorted order, so the result is deterministic.

    Args:
        fsa: The DFA
        element: The states of the partition element
        block_of: Element index of every state in the partition being refined

    Returns:
        The groups, each sorted, in the order they were opened
    """
    groups: List[List[str]] = []

    for state in sorted(element):
        for group in groups:
            if are_states_equivalent(fsa, state, group[0], block_of):
                group.append(state)
                break
        else:
            groups.append([state])

    return groups


def refine_partition(fsa: Dict, partition: List[List[str]]) -> List[List[str]]:
    """
    Performs one refinement pass over the whole partition.

    Every element is split against the partition as it was at the start of
    the pass; splits found during the pass only take effect in the next one.
    """
    block_of = _index_blocks(partition)
    refined = []

    for element in partition:
        if len(element) == 1:
            refined.append(element)
            continue
        refined.extend(split_partition_element(fsa, element, block_of))

    return refined


def _refine_to_fixed_point(fsa: Dict) -> Tuple[List[List[str]], int]:
    partition = initial_partition(fsa)
    passes = 0

    while True:
        refined = refine_partition(fsa, partition)
        passes += 1
        logger.debug("Refinement pass %d: %d -> %d classes", passes, len(partition), len(refined))

        if len(refined) == len(partition):
            return refined, passes
        partition = refined


def compute_equivalence_classes(fsa: Dict) -> List[List[str]]:
    """
    Partitions the states of a complete DFA into classes of equivalent states.

    Starting from the accepting/non-accepting split, refinement passes are
    repeated until a pass no longer increases the number of classes.

    Args:
        fsa (Dict): A complete DFA. Unreachable states are classified too,
            so callers normally remove them first.

    Returns:
        List[List[str]]: The equivalence classes, each sorted.

    Raises:
        ValueError: If the FSA is not a complete DFA
    """
    check_minimisation_preconditions(fsa)
    classes, _ = _refine_to_fixed_point(fsa)
    return classes


# Rebuilding

def build_equivalence_map(partition: List[List[str]]) -> Dict[str, str]:
    """Maps every excess state to the smallest member of its class."""
    equivalence_map = {}
    for element in partition:
        representative, *excess = sorted(element)
        for state in excess:
            equivalence_map[state] = representative
    return equivalence_map


def collapse_equivalent_states(fsa: Dict, partition: List[List[str]]) -> Dict:
    """
    Collapses every equivalence class of the DFA onto its representative.

    Args:
        fsa (Dict): A complete DFA containing only reachable states.
        partition (List[List[str]]): The equivalence classes of its states.

    Returns:
        Dict: A new DFA in which transitions into excess states point at
        their representatives.
    """
    equivalence_map = build_equivalence_map(partition)

    states = sorted(state for state in set(fsa['states']) if state not in equivalence_map)
    remaining = set(states)

    transitions = {}
    for state in states:
        transitions[state] = {}
        for symbol in sorted(set(fsa['alphabet'])):
            target = transition_target(fsa, state, symbol)
            if target not in remaining:
                target = equivalence_map[target]
            transitions[state][symbol] = [target]

    accepting = sorted(state for state in set(fsa['acceptingStates']) if state in remaining)

    starting_state = fsa['startingState']
    if starting_state not in remaining:
        starting_state = equivalence_map[starting_state]

    return {
        'states': states,
        'alphabet': sorted(set(fsa['alphabet'])),
        'transitions': transitions,
        'startingState': starting_state,
        'acceptingStates': accepting
    }


# Entry points

def minimise_dfa_with_classes(fsa: Dict) -> MinimisationResult:
    """
    Minimises a complete DFA and reports how the result was obtained.

    Args:
        fsa (Dict): A dictionary representing the DFA. It is not modified.

    Returns:
        MinimisationResult: The minimal DFA with the removed unreachable
        states, the equivalence classes and the number of refinement passes.

    Raises:
        MalformedDefinitionError: If the FSA structure is invalid
        NonDeterministicError: If the FSA is not deterministic
        IncompleteTransitionError: If the transition function is not total
    """
    check_minimisation_preconditions(fsa)

    original_states = len(set(fsa['states']))

    if not fsa['states']:
        return MinimisationResult(
            dfa=_empty_dfa(fsa['alphabet']),
            original_states=0,
            final_states=0,
            unreachable_states=[],
            equivalence_classes=[],
            refinement_passes=0
        )

    reachable_dfa = remove_unreachable_states(fsa)
    unreachable = sorted(set(fsa['states']) - set(reachable_dfa['states']))

    classes, passes = _refine_to_fixed_point(reachable_dfa)
    minimal_dfa = collapse_equivalent_states(reachable_dfa, classes)

    logger.info(
        "Minimised DFA from %d to %d states (%d unreachable, %d refinement passes)",
        original_states, len(minimal_dfa['states']), len(unreachable), passes
    )

    return MinimisationResult(
        dfa=minimal_dfa,
        original_states=original_states,
        final_states=len(minimal_dfa['states']),
        unreachable_states=unreachable,
        equivalence_classes=classes,
        refinement_passes=passes
    )


def minimise_dfa(fsa: Dict) -> Dict:
    """
    Minimises a complete deterministic finite automaton (DFA).

    Unreachable states are removed, the remaining states are partitioned
    into equivalence classes by iterative refinement, and each class is
    collapsed onto its smallest state.

    Args:
        fsa (Dict): A dictionary representing the DFA.

    Returns:
        Dict: A minimised DFA in the same format.
    """
    return minimise_dfa_with_classes(fsa).dfa
