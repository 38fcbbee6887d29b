"""
Command-line front end for the sparse matrix calculator.

Usage:
    sparse-calc                                     interactive session
    sparse-calc FIRST SECOND -o 3 --output OUT      batch mode
"""

import argparse
import logging
import os
import sys

from sparse_calc.services.matrix_service import OPERATIONS, MatrixService
from sparse_calc.utils.errors import MatrixError
from sparse_calc.utils.helpers import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

OPERATION_ALIASES = {
    'add': '1',
    'subtract': '2',
    'multiply': '3',
}


def _print_error(line):
    print(line, file=sys.stderr)


class InteractiveSession:
    """
    Line-oriented session over an abstract reader and writer.

    ``reader`` takes a prompt and returns the entered line; ``writer`` and
    ``error_writer`` take a single line of output. Defaults are bound to the
    terminal.
    """

    def __init__(self, reader=None, writer=None, error_writer=None):
        self.reader = reader or input
        self.writer = writer or print
        self.error_writer = error_writer or _print_error
        self.closed = False

    def question(self, prompt):
        if self.closed:
            raise RuntimeError("Session is closed")
        return self.reader(prompt)

    def say(self, line=''):
        self.writer(line)

    def error(self, line):
        self.error_writer(line)

    def close(self):
        self.closed = True


def perform_calculations(session, service=None):
    """
    Run one interactive calculation.

    Every error is reported as ``Error: <message>`` and the session is closed
    on all exit paths.

    Returns:
        int: 0 on success, 1 on failure
    """
    service = service or MatrixService()

    try:
        session.say('Available operations:')
        for entry in service.get_operations():
            session.say(f"{entry['key']}: {entry['name']}")

        first_path = session.question('Enter the file path for the first matrix: ')
        first = service.load_matrix(first_path)
        session.say('First matrix loading........\n')

        second_path = session.question('Enter the file path for the second matrix: ')
        second = service.load_matrix(second_path)
        session.say('Second matrix loading.......\n')

        choice = session.question('Choose an operation (1, 2, or 3): ')
        name, result = service.compute(choice, first, second)
        session.say(f'Output of {name}........\n')

        output_path = session.question('Enter the file path to save the result: ')
        service.save_result(result, output_path)
        session.say(f'Output file saved to {output_path}')
        return 0

    except EOFError:
        session.error('Error: input closed before the calculation finished')
        return 1
    except MatrixError as e:
        logger.warning("Calculation failed: %s", e)
        session.error(f'Error: {e}')
        return 1
    except Exception as e:
        logger.exception("Unexpected failure during calculation")
        session.error(f'Error: {e}')
        return 1
    finally:
        session.close()


def run_batch(first_path, second_path, operation, output_path, writer=print, error_writer=_print_error):
    """Non-interactive calculation driven by command-line arguments"""
    service = MatrixService()
    choice = OPERATION_ALIASES.get(operation, operation)

    try:
        first = service.load_matrix(first_path)
        second = service.load_matrix(second_path)
        name, result = service.compute(choice, first, second)
        service.save_result(result, output_path)
    except MatrixError as e:
        logger.warning("Calculation failed: %s", e)
        error_writer(f'Error: {e}')
        return 1

    writer(f'Output of {name} saved to {output_path}')
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='sparse-calc',
        description='Add, subtract or multiply two sparse matrix files.',
    )
    parser.add_argument('first', nargs='?', help='Path of the first matrix')
    parser.add_argument('second', nargs='?', help='Path of the second matrix')
    parser.add_argument(
        '-o', '--operation',
        choices=list(OPERATIONS) + list(OPERATION_ALIASES),
        help='Operation: 1/add, 2/subtract, 3/multiply',
    )
    parser.add_argument('--output', help='Path where the result is saved')
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get('SPARSE_CALC_LOG_LEVEL', 'WARNING').upper(),
        help='Logging level (default: %(default)s)',
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.first is None and args.second is None:
        return perform_calculations(InteractiveSession())

    if not (args.first and args.second and args.operation and args.output):
        parser.error('batch mode needs FIRST, SECOND, --operation and --output')

    return run_batch(args.first, args.second, args.operation, args.output)


if __name__ == '__main__':
    sys.exit(main())
