import sys

from django.core.management.base import BaseCommand, CommandError

from minimiser.definition_format import format_definition, parse_definition
from minimiser.fsa_minimisation import minimise_dfa_with_classes


class Command(BaseCommand):
    help = "Minimises a DFA given in the text definition format and prints the minimal DFA."

    def add_arguments(self, parser):
        parser.add_argument(
            'file', nargs='?',
            help="File holding the definition; standard input is read when omitted."
        )

    def handle(self, *args, **options):
        if options['file']:
            try:
                with open(options['file'], encoding='utf-8') as definition_file:
                    text = definition_file.read()
            except OSError as e:
                raise CommandError(f"Cannot read {options['file']}: {e}")
        else:
            text = sys.stdin.read()

        try:
            result = minimise_dfa_with_classes(parse_definition(text))
        except ValueError as e:
            raise CommandError(str(e))

        if options['verbosity'] >= 2:
            for element in result.equivalence_classes:
                self.stderr.write(','.join(element))

        self.stdout.write(format_definition(result.dfa), ending='')
