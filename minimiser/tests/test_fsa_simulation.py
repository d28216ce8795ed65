from django.test import TestCase
from minimiser.fsa_simulation import accepts, final_state, simulate_deterministic_fsa


class TestFsaSimulation(TestCase):
    def setUp(self):
        # Accepts strings ending with 'b'
        self.fsa = {
            'states': ['S0', 'S1'],
            'alphabet': ['a', 'b'],
            'transitions': {
                'S0': {'a': ['S0'], 'b': ['S1']},
                'S1': {'a': ['S0'], 'b': ['S1']}
            },
            'startingState': 'S0',
            'acceptingStates': ['S1']
        }

    def test_accepted_paths(self):
        self.assertEqual(simulate_deterministic_fsa(self.fsa, 'b'), [('S0', 'b', 'S1')])
        self.assertEqual(
            simulate_deterministic_fsa(self.fsa, 'abb'),
            [('S0', 'a', 'S0'), ('S0', 'b', 'S1'), ('S1', 'b', 'S1')]
        )

    def test_rejected_in_non_accepting_state(self):
        result = simulate_deterministic_fsa(self.fsa, 'ba')

        self.assertIsInstance(result, dict)
        self.assertFalse(result['accepted'])
        self.assertEqual(result['rejection_position'], 2)
        self.assertEqual(len(result['path']), 2)

    def test_symbol_not_in_alphabet(self):
        result = simulate_deterministic_fsa(self.fsa, 'ac')

        self.assertFalse(result['accepted'])
        self.assertEqual(result['rejection_reason'], "Symbol 'c' not in alphabet")
        self.assertEqual(result['rejection_position'], 1)

    def test_missing_transition(self):
        self.fsa['transitions']['S1'] = {'a': ['S0']}

        result = simulate_deterministic_fsa(self.fsa, 'bb')

        self.assertFalse(result['accepted'])
        self.assertEqual(result['rejection_position'], 1)

    def test_nondeterministic_fsa(self):
        self.fsa['transitions']['S0']['a'] = ['S0', 'S1']

        result = simulate_deterministic_fsa(self.fsa, 'a')

        self.assertEqual(result['rejection_reason'], 'FSA must be deterministic')

    def test_accepts(self):
        self.assertTrue(accepts(self.fsa, 'aab'))
        self.assertFalse(accepts(self.fsa, ''))
        self.assertFalse(accepts(self.fsa, 'bba'))

    def test_symbol_lists(self):
        fsa = {
            'states': ['off', 'on'],
            'alphabet': ['press', 'wait'],
            'transitions': {
                'off': {'press': ['on'], 'wait': ['off']},
                'on': {'press': ['off'], 'wait': ['on']}
            },
            'startingState': 'off',
            'acceptingStates': ['on']
        }

        self.assertTrue(accepts(fsa, ['press', 'wait']))
        self.assertFalse(accepts(fsa, ['press', 'press']))

    def test_final_state(self):
        self.assertEqual(final_state(self.fsa, ''), 'S0')
        self.assertEqual(final_state(self.fsa, 'aba'), 'S0')
        self.assertEqual(final_state(self.fsa, 'ab'), 'S1')

    def test_final_state_stops_on_unknown_symbol(self):
        self.assertIsNone(final_state(self.fsa, 'abc'))
        self.assertFalse(accepts(self.fsa, 'bc'))

    def test_final_state_stops_on_missing_transition(self):
        self.fsa['transitions']['S1'] = {'a': ['S0']}

        self.assertIsNone(final_state(self.fsa, 'bb'))
        self.assertFalse(accepts(self.fsa, 'bb'))
