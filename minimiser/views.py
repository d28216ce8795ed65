import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .definition_format import format_definition, parse_definition
from .exceptions import IncompleteTransitionError
from .fsa_minimisation import minimise_dfa_with_classes
from .fsa_properties import check_all_properties, find_missing_transitions, validate_fsa_structure
from .fsa_simulation import simulate_deterministic_fsa

logger = logging.getLogger(__name__)

DEFAULT_MAX_STATES = 500


def _max_states() -> int:
    return getattr(settings, 'MINIMISER_MAX_STATES', DEFAULT_MAX_STATES)


def _check_size(state_count: int):
    """Returns an error response if the automaton exceeds the configured size limit."""
    limit = _max_states()
    if state_count > limit:
        return JsonResponse(
            {'error': f'FSA has {state_count} states; the limit is {limit}'},
            status=400
        )
    return None


def _load_json_object(request) -> dict:
    """
    Parses the request body, which must be a JSON object.

    Raises:
        ValueError: If the body is not valid JSON or not an object
    """
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def _fsa_statistics(fsa):
    return {
        'states_count': len(fsa['states']),
        'alphabet_size': len(fsa['alphabet']),
        'transitions_count': sum(
            len(targets) for state_transitions in fsa['transitions'].values()
            for targets in state_transitions.values()
        ),
        'accepting_states_count': len(fsa['acceptingStates'])
    }


def _percentage(removed, total):
    return round((removed / total) * 100, 2) if total > 0 else 0


@csrf_exempt
@require_POST
def min_dfa(request):
    """
    Django view to handle DFA minimisation requests.

    Expects a POST request with a JSON body containing:
    - fsa: The FSA definition in the proper format (must be a complete DFA)

    Returns a JSON response with the minimised DFA, its equivalence classes
    and reduction statistics.
    """
    try:
        data = _load_json_object(request)
        fsa = data.get('fsa')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        too_large = _check_size(len(fsa['states']))
        if too_large:
            return too_large

        result = minimise_dfa_with_classes(fsa)
        minimised_fsa = result.dfa

        original_stats = _fsa_statistics(fsa)
        minimised_stats = _fsa_statistics(minimised_fsa)

        states_reduced = original_stats['states_count'] - minimised_stats['states_count']
        transitions_reduced = original_stats['transitions_count'] - minimised_stats['transitions_count']

        reduction_stats = {
            'states_reduced': states_reduced,
            'states_reduction_percentage': _percentage(states_reduced, original_stats['states_count']),
            'transitions_reduced': transitions_reduced,
            'transitions_reduction_percentage': _percentage(
                transitions_reduced, original_stats['transitions_count']
            ),
            'unreachable_states_removed': result.unreachable_states,
            'refinement_passes': result.refinement_passes,
            'is_already_minimal': states_reduced == 0
        }

        return JsonResponse({
            'success': True,
            'original_fsa': fsa,
            'minimised_fsa': minimised_fsa,
            'equivalence_classes': result.equivalence_classes,
            'statistics': {
                'original': original_stats,
                'minimised': minimised_stats,
                'reduction': reduction_stats
            },
            'message': 'DFA minimised successfully' if not reduction_stats['is_already_minimal']
                      else 'DFA was already minimal'
        })

    except IncompleteTransitionError as e:
        return JsonResponse({
            'error': str(e),
            'missing_transitions': [list(pair) for pair in e.missing]
        }, status=400)
    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("DFA minimisation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def minimise_definition_view(request):
    """
    Django view that minimises a DFA given in the text definition format.

    Expects a POST request with a JSON body containing:
    - definition: The DFA definition text

    Returns a JSON response with the minimised definition text.
    """
    try:
        data = _load_json_object(request)
        definition = data.get('definition')

        if not definition:
            return JsonResponse({'error': 'Missing DFA definition'}, status=400)

        if not isinstance(definition, str):
            return JsonResponse({'error': 'DFA definition must be a string'}, status=400)

        fsa = parse_definition(definition)

        too_large = _check_size(len(fsa['states']))
        if too_large:
            return too_large

        result = minimise_dfa_with_classes(fsa)

        return JsonResponse({
            'definition': format_definition(result.dfa),
            'equivalence_classes': result.equivalence_classes
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Definition minimisation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def parse_definition_view(request):
    """
    Django view that converts a text definition into the FSA JSON format.

    Expects a POST request with a JSON body containing:
    - definition: The DFA definition text
    """
    try:
        data = _load_json_object(request)
        definition = data.get('definition')

        if not definition:
            return JsonResponse({'error': 'Missing DFA definition'}, status=400)

        if not isinstance(definition, str):
            return JsonResponse({'error': 'DFA definition must be a string'}, status=400)

        return JsonResponse({'fsa': parse_definition(definition)})

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Definition parsing failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def check_fsa_properties(request):
    """
    Django view to check FSA properties (deterministic, complete, connected).

    Expects a POST request with a JSON body containing:
    - fsa: The FSA definition in the proper format

    Returns a JSON response with property check results and the transitions
    that would have to be added before the DFA can be minimised.
    """
    try:
        data = _load_json_object(request)
        fsa = data.get('fsa')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        properties = check_all_properties(fsa)

        return JsonResponse({
            'properties': properties,
            'missing_transitions': [list(pair) for pair in find_missing_transitions(fsa)],
            'summary': {
                'total_states': len(fsa['states']),
                'alphabet_size': len(fsa['alphabet']),
                'starting_state': fsa['startingState'],
                'accepting_states_count': len(fsa['acceptingStates']),
                'minimisable': properties['deterministic'] and properties['complete']
            }
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Property check failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_dfa(request):
    """
    Django view to handle deterministic FSA simulation requests.

    Expects a POST request with a JSON body containing:
    - fsa: The FSA definition in the proper format
    - input: The input string to simulate
    """
    try:
        data = _load_json_object(request)
        fsa = data.get('fsa')
        input_string = data.get('input', '')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        if not isinstance(input_string, str):
            return JsonResponse({'error': 'input must be a string'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        result = simulate_deterministic_fsa(fsa, input_string)

        if isinstance(result, list):
            return JsonResponse({
                'accepted': True,
                'path': result
            })

        return JsonResponse({
            'accepted': False,
            'path': result.get('path', []),
            'rejection_reason': result.get('rejection_reason', 'Unknown rejection reason'),
            'rejection_position': result.get('rejection_position', 0)
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("DFA simulation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
