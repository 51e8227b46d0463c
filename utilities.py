""" Utility functions. Mainly for printing tokens and symbol tables to the console. """

from scanner import (TK_ASSIGNMENT, TK_CHAR, TK_COMMENT, TK_DELIMITER, TK_ERROR, TK_FLOAT,
                     TK_IDENTIFIER, TK_INTEGER, TK_KEYWORD, TK_NEWLINE, TK_OPERATOR, TK_STRING)

__all__ = ['COLOR_ENABLED', 'colorize', 'print_tokens', 'print_symbol_table', 'print_summary']

COLOR_ENABLED = True

_COLORS = dict(K=30, R=31, G=32, Y=33, B=34, M=35, C=36, W=37)
_COLOR_FORMAT = '\x1b[{};{}m{}\x1b[0m'

# Color of each token kind when printing the token stream.
KIND_COLORS = {
    TK_KEYWORD: 'B',
    TK_IDENTIFIER: 'G',
    TK_INTEGER: 'C',
    TK_FLOAT: 'C',
    TK_STRING: 'Y',
    TK_CHAR: 'Y',
    TK_OPERATOR: 'M',
    TK_ASSIGNMENT: 'M',
    TK_DELIMITER: 'W',
    TK_COMMENT: 'K',
    TK_ERROR: 'R',
}

PRINT_SEPARATOR = '-' * 79


def colorize(text, color, bold=False):
    """ Wrap a token row or table line in an ANSI color code.

        :param text: The line to print.
        :param color: A key of _COLORS, usually taken from KIND_COLORS.
        :param bold: Highlight the line; used for ERROR tokens and the table header.

        :return: The colored text, or the text unchanged when COLOR_ENABLED is off
            (the --no-color flag).
    """
    if not COLOR_ENABLED:
        return text
    return _COLOR_FORMAT.format(_COLORS[color], int(bold), text)


def print_tokens(tokens, hide_newlines=False):
    """ Print the token stream, one token per line.

        :param tokens: List of Token objects as returned by scanner.scan_all().
        :param hide_newlines: Skip NEWLINE tokens.
    """
    print('Format: <KIND, \'lexeme\', line:column> [= decoded value].')
    print(PRINT_SEPARATOR)
    shown = 0
    for tk in tokens:
        if hide_newlines and tk.kind == TK_NEWLINE:
            continue
        text = str(tk)
        if tk.kind in KIND_COLORS:
            text = colorize(text, KIND_COLORS[tk.kind], bold=(tk.kind == TK_ERROR))
        if tk.lexeme != tk.value:
            text += ' = {!r}'.format(tk.value)
        print('  ' + text)
        shown += 1
    print('Total: {} {}'.format(shown, 'token' if shown == 1 else 'tokens'))


def print_symbol_table(table):
    """ Print the entries of a SymbolTable, ordered by scope and then name. """
    header = '{:15s} {:12s} {:10s} {:8s} {:4s} {:6s} {}'.format(
        'Name', 'Type', 'DataType', 'Scope', 'Init', 'Pos', 'Value')
    print(PRINT_SEPARATOR)
    print(colorize(header, 'W', bold=True))
    print(PRINT_SEPARATOR)
    for entry in table.entries():
        print(entry)
    print(PRINT_SEPARATOR)


def print_summary(tokens, table):
    """ One line with token, error, and symbol counts. """
    errors = [tk for tk in tokens if tk.kind == TK_ERROR]
    line = '{} tokens, {} lexical errors, {} symbols'.format(len(tokens), len(errors), len(table))
    print(colorize(line, 'R' if errors else 'G'))
