#!/usr/bin/env python3
""" Lexical analysis front end: scan source text and build its symbol table.

    Run through the command line: python analyzer.py [path_to_source_file]
    Reads the standard input if no file is given.
"""

import argparse
import logging
import sys

import utilities as util
from scanner import scan_all
from symbols import SymbolTable, analyze_declarations, register_identifiers

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def analyze(source, table=None, longest_match=False, nested=False):
    """ Run the scanner and both symbol-table passes over the source text.

        :param source: The complete source text.
        :param table: SymbolTable to fill. A new one is created if not given.
        :param longest_match: Passed to the scanner; match 3-char operators as one token.
        :param nested: Create the new table with nested scopes (ignored if table is given).

        :return: A tuple (list of tokens, symbol table).
    """
    if table is None:
        table = SymbolTable(nested=nested)
    tokens = scan_all(source, longest_match=longest_match)
    register_identifiers(tokens, table)
    analyze_declarations(tokens, table)
    return tokens, table


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog='lexan', description='Tokenize C-like source code and print its symbol table.')
    parser.add_argument('source', nargs='?', default='-',
                        help="Source file to analyze ('-' or omitted reads stdin).")
    parser.add_argument('--longest-match', action='store_true',
                        help='Scan <<= and >>= as single operators.')
    parser.add_argument('--nested-scopes', action='store_true',
                        help='Build the symbol table with a scope stack.')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output.')
    parser.add_argument('--hide-newlines', action='store_true',
                        help='Leave NEWLINE tokens out of the token listing.')
    output = parser.add_mutually_exclusive_group()
    output.add_argument('--tokens-only', action='store_true', help='Print only the tokens.')
    output.add_argument('--table-only', action='store_true', help='Print only the symbol table.')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log more details (repeat for debug output).')
    return parser


def read_source(parser, path):
    try:
        if path == '-':
            return sys.stdin.read()
        with open(path, encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        parser.error('cannot read {}: {}'.format(path, e))


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    level = LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format=LOG_FORMAT)
    if args.no_color:
        util.COLOR_ENABLED = False

    source = read_source(parser, args.source)
    logger.info('analyzing %s (%d characters)', args.source, len(source))
    tokens, table = analyze(source, longest_match=args.longest_match, nested=args.nested_scopes)

    if not args.table_only:
        print('\n' 'TOKEN_STREAM:')
        util.print_tokens(tokens, hide_newlines=args.hide_newlines)
    if not args.tokens_only:
        print('\n' 'SYMBOL_TABLE:')
        util.print_symbol_table(table)
    util.print_summary(tokens, table)
    return 0


if __name__ == '__main__':
    sys.exit(main())
