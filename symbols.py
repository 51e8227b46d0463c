#!/usr/bin/env python3
""" Scoped symbol table, and the passes that fill it from a token stream. """

import logging

from scanner import DATA_TYPES, TK_ASSIGNMENT, TK_EOF, TK_IDENTIFIER, TK_KEYWORD

logger = logging.getLogger(__name__)

SCOPE_GLOBAL = 'global'
DATA_TYPE_UNKNOWN = 'unknown'

# Token kinds that cannot initialize a declared variable.
NON_VALUE_KINDS = frozenset([TK_EOF])

# region:: Symbol Table ::


class SymbolTableEntry:
    """ Information about one identifier in one scope. """

    def __init__(self, name, kind, data_type, line, column, scope=SCOPE_GLOBAL):
        self.name = name
        self.kind = kind
        """ Token kind of the symbol; always TK_IDENTIFIER for scanned entries. """
        self.data_type = data_type
        """ Declared type name, or DATA_TYPE_UNKNOWN until a declaration is seen. """
        self.value = None
        """ Last value assigned to the symbol. Only meaningful if initialized is True. """
        self.line = line
        self.column = column
        """ Position of the first occurrence. """
        self.scope = scope
        self.initialized = False

    def __repr__(self):
        return 'SymbolTableEntry({!r}, scope={!r}, data_type={!r}, value={!r})'.format(
            self.name, self.scope, self.data_type, self.value)

    def __str__(self):
        init = '+' if self.initialized else '-'
        pos = '{}:{}'.format(self.line, self.column)
        value = 'null' if self.value is None else repr(self.value)
        return '{:15s} {:12s} {:10s} {:8s} {:4s} {:6s} {}'.format(
            self.name, self.kind, self.data_type, self.scope, init, pos, value)


class SymbolTable:
    """ Registry of identifiers keyed by (scope, name).

        In the default flat mode there is one current scope and exit_scope() always
        returns to the global scope. With nested=True scopes form a stack: exit_scope()
        returns to the enclosing scope and lookup() searches every enclosing scope.
    """

    def __init__(self, nested=False):
        self.nested = nested
        self._symbols = dict()
        """ dict: (scope, name) -> SymbolTableEntry. """
        self._scope_symbols = {SCOPE_GLOBAL: set()}
        """ dict: scope -> set of names declared in that scope. """
        self._scope_stack = [SCOPE_GLOBAL]

    @property
    def current_scope(self):
        return self._scope_stack[-1]

    def __len__(self):
        return len(self._symbols)

    def __contains__(self, key):
        return key in self._symbols

    def enter_scope(self, name):
        """ Make the given scope current, creating it if needed. """
        if self.nested:
            self._scope_stack.append(name)
        else:
            self._scope_stack[-1] = name
        self._scope_symbols.setdefault(name, set())

    def exit_scope(self):
        """ Leave the current scope. Flat tables always go back to the global scope. """
        if not self.nested:
            self._scope_stack[-1] = SCOPE_GLOBAL
        elif len(self._scope_stack) > 1:
            self._scope_stack.pop()
        else:
            logger.warning('exit_scope() called while already in the global scope')

    def insert(self, name, kind, data_type, line, column):
        """ Add a symbol to the current scope.
            :return: True if a new entry was created, False if the name already exists
                in the current scope (the existing entry is left untouched).
        """
        scope = self.current_scope
        if (scope, name) in self._symbols:
            logger.debug('%s is already declared in scope %s', name, scope)
            return False
        self._symbols[scope, name] = SymbolTableEntry(name, kind, data_type, line, column, scope)
        self._scope_symbols[scope].add(name)
        return True

    def lookup(self, name):
        """ Find a symbol visible from the current scope, or None.
            The current scope is searched first and the global scope last.
        """
        if self.nested:
            search = reversed(self._scope_stack)
        else:
            search = (self.current_scope, SCOPE_GLOBAL)
        for scope in search:
            entry = self._symbols.get((scope, name))
            if entry is not None:
                return entry
        return None

    def update_value(self, name, value):
        """ Record an assigned value. Does nothing if the name cannot be resolved. """
        entry = self.lookup(name)
        if entry is not None:
            entry.value = value
            entry.initialized = True

    def scope_names(self, scope):
        """ Names declared in the given scope, as a set (empty for unknown scopes). """
        return set(self._scope_symbols.get(scope, ()))

    def scopes(self):
        return list(self._scope_symbols)

    def get_all_symbols(self):
        """ A shallow copy of the (scope, name) -> entry mapping. """
        return dict(self._symbols)

    def entries(self):
        """ All entries ordered by scope, then by name. """
        return [self._symbols[key] for key in sorted(self._symbols)]


# endregion ------------------------------------------------------------------------------ ::
# region:: Passes Over the Token Stream ::


def register_identifiers(tokens, table):
    """ Add every identifier not yet visible in the table to its current scope.

        :param tokens: Iterable of Token objects, e.g. the output of scanner.scan_all().
        :param table: The SymbolTable to fill. New entries get the unknown data type.

        :return: Number of entries inserted.
    """
    inserted = 0
    for tk in tokens:
        if tk.kind != TK_IDENTIFIER:
            continue
        if table.lookup(tk.lexeme) is None:
            if table.insert(tk.lexeme, TK_IDENTIFIER, DATA_TYPE_UNKNOWN, tk.line, tk.column):
                inserted += 1
    logger.info('registered %d identifiers in scope %s', inserted, table.current_scope)
    return inserted


def analyze_declarations(tokens, table):
    """ Refine data types and initial values from 'type name [= value]' patterns.

        Matches the token window anywhere in the stream, without regard to grammar.
        A data-type keyword followed by an identifier sets the identifier's data type.
        If an assignment and another token follow, that token's value is recorded too
        (decoded for literals, the lexeme for keywords such as true or identifiers).

        :param tokens: Sequence of Token objects.
        :param table: SymbolTable that already holds the identifiers.

        :return: Number of declarations recognized.
    """
    tokens = list(tokens)
    found = 0
    for i in range(len(tokens) - 1):
        type_tk, name_tk = tokens[i], tokens[i + 1]
        if type_tk.kind != TK_KEYWORD or type_tk.lexeme not in DATA_TYPES:
            continue
        if name_tk.kind != TK_IDENTIFIER:
            continue
        entry = table.lookup(name_tk.lexeme)
        if entry is None:
            continue
        entry.data_type = type_tk.lexeme
        found += 1
        if (i + 3 < len(tokens) and tokens[i + 2].kind == TK_ASSIGNMENT
                and tokens[i + 3].kind not in NON_VALUE_KINDS):
            table.update_value(name_tk.lexeme, tokens[i + 3].value)
    logger.info('recognized %d declarations', found)
    return found


# endregion
