from django.test import TestCase
from minimiser.fsa_equivalence import (
    find_state_mapping,
    are_dfas_isomorphic,
    are_dfas_equivalent
)


class TestFSAEquivalence(TestCase):
    """Test cases for DFA isomorphism and equivalence checking"""

    def setUp(self):
        # Even number of 'a's
        self.even_a = {
            'states': ['E', 'O'],
            'alphabet': ['a', 'b'],
            'transitions': {
                'E': {'a': ['O'], 'b': ['E']},
                'O': {'a': ['E'], 'b': ['O']}
            },
            'startingState': 'E',
            'acceptingStates': ['E']
        }

        # Same language with a redundant copy of the even state
        self.even_a_redundant = {
            'states': ['q0', 'q1', 'q2'],
            'alphabet': ['a', 'b'],
            'transitions': {
                'q0': {'a': ['q1'], 'b': ['q2']},
                'q1': {'a': ['q2'], 'b': ['q1']},
                'q2': {'a': ['q1'], 'b': ['q0']}
            },
            'startingState': 'q0',
            'acceptingStates': ['q0', 'q2']
        }

        # Odd number of 'a's
        self.odd_a = dict(self.even_a, acceptingStates=['O'])

    def test_find_state_mapping_after_renaming(self):
        renamed = {
            'states': ['X', 'Y'],
            'alphabet': ['b', 'a'],
            'transitions': {
                'X': {'a': ['Y'], 'b': ['X']},
                'Y': {'a': ['X'], 'b': ['Y']}
            },
            'startingState': 'X',
            'acceptingStates': ['X']
        }

        self.assertEqual(find_state_mapping(self.even_a, renamed), {'E': 'X', 'O': 'Y'})
        self.assertTrue(are_dfas_isomorphic(self.even_a, renamed))

    def test_not_isomorphic(self):
        self.assertIsNone(find_state_mapping(self.even_a, self.odd_a))
        self.assertFalse(are_dfas_isomorphic(self.even_a, self.even_a_redundant))

    def test_non_injective_mapping_is_rejected(self):
        """Two states of the first DFA may not map onto the same state"""
        dfa1 = {
            'states': ['A', 'B'],
            'alphabet': ['a'],
            'transitions': {'A': {'a': ['B']}, 'B': {'a': ['B']}},
            'startingState': 'A',
            'acceptingStates': []
        }
        dfa2 = {
            'states': ['X', 'Y'],
            'alphabet': ['a'],
            'transitions': {'X': {'a': ['X']}, 'Y': {'a': ['X']}},
            'startingState': 'X',
            'acceptingStates': []
        }

        self.assertIsNone(find_state_mapping(dfa1, dfa2))

    def test_empty_dfas_are_isomorphic(self):
        empty = {
            'states': [],
            'alphabet': ['a'],
            'transitions': {},
            'startingState': '',
            'acceptingStates': []
        }

        self.assertEqual(find_state_mapping(empty, empty), {})

    def test_equivalent_dfas(self):
        is_equivalent, details = are_dfas_equivalent(self.even_a, self.even_a_redundant)

        self.assertTrue(is_equivalent)
        self.assertEqual(details['minimal_dfa2_states'], 2)
        self.assertEqual(details['reason'], 'Minimal DFAs are isomorphic')
        self.assertIn('state_mapping', details)

    def test_inequivalent_dfas(self):
        is_equivalent, details = are_dfas_equivalent(self.even_a, self.odd_a)

        self.assertFalse(is_equivalent)
        self.assertEqual(details['reason'], 'Minimal DFAs are not isomorphic')

    def test_different_alphabets(self):
        other = {
            'states': ['E'],
            'alphabet': ['c'],
            'transitions': {'E': {'c': ['E']}},
            'startingState': 'E',
            'acceptingStates': ['E']
        }

        is_equivalent, details = are_dfas_equivalent(self.even_a, other)

        self.assertFalse(is_equivalent)
        self.assertEqual(details['reason'], 'DFAs have different alphabets')
