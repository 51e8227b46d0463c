#!/usr/bin/env python3
""" Lexical scanner for a small C-like language. """

import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

# region:: Token Definitions ::


TK_KEYWORD = 'KEYWORD'
TK_IDENTIFIER = 'IDENTIFIER'
TK_INTEGER = 'INTEGER'
TK_FLOAT = 'FLOAT'
TK_STRING = 'STRING'
TK_CHAR = 'CHAR'
TK_OPERATOR = 'OPERATOR'
TK_DELIMITER = 'DELIMITER'
TK_ASSIGNMENT = 'ASSIGNMENT'
TK_COMMENT = 'COMMENT'
TK_NEWLINE = 'NEWLINE'
TK_EOF = 'EOF'
TK_ERROR = 'ERROR'

# Tags of the decoded token value.
VT_INTEGER = 'integer'
VT_FLOAT = 'float'
VT_TEXT = 'text'
VT_CHAR = 'character'
VT_NONE = 'none'

_VALUE_TAGS = {TK_INTEGER: VT_INTEGER, TK_FLOAT: VT_FLOAT, TK_STRING: VT_TEXT, TK_CHAR: VT_CHAR}

_DISPLAY_ESCAPES = str.maketrans({'\n': '\\n', '\t': '\\t', '\r': '\\r'})


class Token(namedtuple('Token', 'kind lexeme line column value offset')):
    """ A lexical token. Immutable once the scanner has produced it.

        kind: one of the TK_* constants.
        lexeme: exact source text consumed for this token.
        line, column: 1-based position of the first character.
        value: decoded literal (int, float, or str) for literal tokens, else the lexeme.
        offset: 0-based index of the first character in the source buffer.
    """
    __slots__ = ()

    @property
    def value_tag(self):
        """ One of the VT_* constants, telling how to read self.value. """
        return _VALUE_TAGS.get(self.kind, VT_NONE)

    def __str__(self):
        return "<{}, '{}', {}:{}>".format(self.kind, self.lexeme.translate(_DISPLAY_ESCAPES),
                                          self.line, self.column)


# endregion ------------------------------------------------------------------------------ ::
# region:: Symbol Sets ::


KEYWORDS = frozenset('''
    int float double char void bool
    if else while for do switch case default
    break continue return goto
    struct union enum typedef
    const static extern auto register
    sizeof true false null
'''.split())

# Keywords that name a data type in a declaration.
DATA_TYPES = frozenset(['int', 'float', 'double', 'char', 'bool', 'void'])

SINGLE_CHAR_OPERATORS = frozenset('+-*/%<>!&|^~')
MULTI_CHAR_OPERATORS = frozenset([
    '++', '--', '==', '!=', '<=', '>=', '&&', '||', '<<', '>>',
    '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', '<<=', '>>=',
])
MAX_OPERATOR_LENGTH = max(len(op) for op in MULTI_CHAR_OPERATORS)

DELIMITERS = frozenset('(){}[];,.:?')

# Escape sequences in string and char literals. Any other escaped char decodes to itself.
ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '\\': '\\', '"': '"', "'": "'"}

SKIPPED_WHITESPACE = frozenset(' \t\r')

EOF_CHAR = ''  # returned by peek() past the end of the buffer


def is_identifier_start(char):
    return char.isalpha() or char == '_'


def is_identifier_part(char):
    return char.isalnum() or char == '_'


def is_digit(char):
    # isdecimal() accepts exactly the digits int() and float() can parse.
    return char.isdecimal()


# endregion ------------------------------------------------------------------------------ ::
# region:: Scanner ::


class Scanner:
    """ Character-by-character scanner over an in-memory source buffer.

        Iterating a scanner yields tokens lazily and always ends with one EOF token.
        Create a new instance to scan the same text again.
    """

    def __init__(self, source, longest_match=False):
        """ :param source: The complete source text.
            :param longest_match: Match operators up to three characters long (<<=, >>=).
                By default only two characters are tried, so '<<=' scans as '<<' and '='.
        """
        if not isinstance(source, str):
            raise TypeError('Scanner source must be a str, not {}'.format(type(source).__name__))
        self.source = source
        """ The text being scanned. Never modified. """
        self.longest_match = longest_match
        self.pos = 0
        """ Index of the next unread character. """
        self.line = 1
        self.column = 1
        self._finished = False

    def __iter__(self):
        while not self._finished:
            yield self.scan_one()

    def at_end(self):
        return self.pos >= len(self.source)

    def current(self):
        return self.source[self.pos] if self.pos < len(self.source) else EOF_CHAR

    def peek(self, distance=1):
        """ Look at a character after the current one without consuming it. """
        i = self.pos + distance
        return self.source[i] if i < len(self.source) else EOF_CHAR

    def advance(self):
        """ Consume the current character, keeping line and column up to date. """
        if self.pos >= len(self.source):
            return EOF_CHAR
        char = self.source[self.pos]
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        return char

    def skip_whitespace(self):
        while self.current() in SKIPPED_WHITESPACE and not self.at_end():
            self.advance()

    def scan_one(self):
        """ Scan the next token from the buffer.
            :return: The next Token. Once the input is exhausted, an EOF token (every time).
        """
        self.skip_whitespace()
        start = self.pos, self.line, self.column

        if self.at_end():
            self._finished = True
            return self._make(TK_EOF, start)

        char = self.current()
        nxt = self.peek()

        if char == '/' and nxt == '/':
            return self._scan_line_comment(start)
        if char == '/' and nxt == '*':
            return self._scan_block_comment(start)
        if char == '"':
            return self._scan_string(start)
        if char == "'":
            return self._scan_char(start)
        if is_digit(char):
            return self._scan_number(start)
        if is_identifier_start(char):
            return self._scan_word(start)

        if char == '=':
            self.advance()
            if self.current() == '=':
                self.advance()
                return self._make(TK_OPERATOR, start)
            return self._make(TK_ASSIGNMENT, start)

        operator = self._match_operator()
        if operator:
            for _ in operator:
                self.advance()
            return self._make(TK_OPERATOR, start)
        if char in SINGLE_CHAR_OPERATORS:
            self.advance()
            return self._make(TK_OPERATOR, start)

        if char in DELIMITERS:
            self.advance()
            return self._make(TK_DELIMITER, start)
        if char == '\n':
            self.advance()
            return self._make(TK_NEWLINE, start)

        self.advance()
        logger.debug('unrecognized character %r at %d:%d', char, start[1], start[2])
        return self._make(TK_ERROR, start)

    def _make(self, kind, start, value=None):
        """ Build a token whose lexeme is the source text from start up to the cursor. """
        offset, line, column = start
        lexeme = self.source[offset:self.pos]
        return Token(kind, lexeme, line, column, lexeme if value is None else value, offset)

    def _match_operator(self):
        """ Find a multi-char operator at the cursor. Returns it, or None. """
        longest = MAX_OPERATOR_LENGTH if self.longest_match else 2
        for length in range(longest, 1, -1):
            candidate = self.source[self.pos:self.pos + length]
            if len(candidate) == length and candidate in MULTI_CHAR_OPERATORS:
                return candidate
        return None

    def _scan_line_comment(self, start):
        while not self.at_end() and self.current() != '\n':
            self.advance()
        return self._make(TK_COMMENT, start)

    def _scan_block_comment(self, start):
        self.advance()  # '/'
        self.advance()  # '*'
        while not self.at_end():
            if self.current() == '*' and self.peek() == '/':
                self.advance()
                self.advance()
                return self._make(TK_COMMENT, start)
            self.advance()
        logger.debug('unterminated block comment starting at %d:%d', start[1], start[2])
        return self._make(TK_COMMENT, start)

    def _read_escape(self):
        """ Consume a backslash escape and return the decoded char.
            A backslash at the very end of the input is kept as is.
        """
        self.advance()  # '\'
        if self.at_end():
            return '\\'
        char = self.advance()
        return ESCAPES.get(char, char)

    def _scan_string(self, start):
        self.advance()  # opening quote
        chars = []
        while not self.at_end() and self.current() != '"':
            if self.current() == '\\':
                chars.append(self._read_escape())
            else:
                chars.append(self.advance())
        if self.at_end():
            logger.debug('unterminated string starting at %d:%d', start[1], start[2])
        else:
            self.advance()  # closing quote
        return self._make(TK_STRING, start, ''.join(chars))

    def _scan_char(self, start):
        self.advance()  # opening quote
        if self.at_end():
            value = ''
        elif self.current() == '\\':
            value = self._read_escape()
        else:
            value = self.advance()
        if self.current() == "'":
            self.advance()
        else:
            logger.debug('char literal at %d:%d has no closing quote', start[1], start[2])
        return self._make(TK_CHAR, start, value)

    def _scan_number(self, start):
        is_float = False
        while is_digit(self.current()) or self.current() == '.':
            if self.current() == '.':
                if is_float:
                    break  # A second dot belongs to the next token.
                is_float = True
            self.advance()
        text = self.source[start[0]:self.pos]
        if is_float:
            return self._make(TK_FLOAT, start, float(text))
        return self._make(TK_INTEGER, start, int(text))

    def _scan_word(self, start):
        while is_identifier_part(self.current()):
            self.advance()
        word = self.source[start[0]:self.pos]
        return self._make(TK_KEYWORD if word in KEYWORDS else TK_IDENTIFIER, start)


def scan_all(source, longest_match=False):
    """ Scan the whole buffer.
        :return: A list of tokens, the last of which is the EOF token.
    """
    tokens = list(Scanner(source, longest_match=longest_match))
    errors = sum(1 for tk in tokens if tk.kind == TK_ERROR)
    logger.info('scanned %d tokens (%d errors)', len(tokens), errors)
    return tokens


# endregion
