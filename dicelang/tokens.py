# -*- coding: utf-8 -*-
"""
Token metadata for the dice language.

Every symbol of the language is registered once, in a process wide
TokenRegistry, with a left binding power and up to three handlers:

    nud(token, parser)        token in prefix position
    led(token, parser, left)  token in infix position
    std(token, parser)        token at the head of a statement

The lexer hands out Node instances cloned from the registry, and the
handlers below grow those same nodes into the AST.
"""

from .errors import ParseError

NUMBER = '(NUMBER)'
IDENT = '(IDENT)'
NEWLINE = '(NEWLINE)'
EOF = '(EOF)'
ROOT = '(rootnode)'

REP_BP = 10
IF_BP = 20
COLLECT_BP = 25
COMPARISON_BP = 30
SUM_BP = 50
PRODUCT_BP = 60
POWER_BP = 70
DICE_BP = 80
DROP_BP = 80
CALL_BP = 90
MOD_BP = 95
PREFIX_BP = 200
TAG_BP = 300

DROPS = ('-H', '-L')
COMPARISONS = ('<', '>', '<=', '>=', '==', '!=')
ARITHMETIC = ('+', '-', '*', '/', '^', 'mod')


class Node(object):
    """A token as handed out by the lexer, and the AST node it turns into."""

    def __init__(self, sym, value='', line=0, col=0, bp=0,
                 nud=None, led=None, std=None):
        self.sym = sym
        self.value = value
        self.line = line
        self.col = col
        self.bp = bp
        self.nud = nud
        self.led = led
        self.std = std
        self.children = []

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.sym == other.sym and self.value == other.value and
                self.children == other.children)

    __hash__ = None

    def __repr__(self):
        if self.children:
            return 'Node({!r}, {!r}, {!r})'.format(self.sym, self.value, self.children)
        return 'Node({!r}, {!r})'.format(self.sym, self.value)


class _Symbol(object):
    __slots__ = ('bp', 'nud', 'led', 'std')

    def __init__(self, bp, nud, led, std):
        self.bp = bp
        self.nud = nud
        self.led = led
        self.std = std


class TokenRegistry(object):
    def __init__(self):
        self.symbols = {}

    def register(self, sym, bp=0, nud=None, led=None, std=None):
        # later registrations only fill in empty handler slots
        existing = self.symbols.get(sym)
        if existing is None:
            self.symbols[sym] = _Symbol(bp, nud, led, std)
            return
        if nud is not None and existing.nud is None:
            existing.nud = nud
        if led is not None and existing.led is None:
            existing.led = led
        if std is not None and existing.std is None:
            existing.std = std
        existing.bp = max(existing.bp, bp)

    def defined(self, sym):
        return sym in self.symbols

    def is_keyword(self, word):
        return word.isalpha() and word in self.symbols

    def token(self, sym, value, line=0, col=0):
        s = self.symbols[sym]
        return Node(sym, value, line, col, s.bp, s.nud, s.led, s.std)

    def infix(self, sym, bp):
        def led(token, parser, left):
            token.children.append(left)
            token.children.append(parser.expression(token.bp))
            return token
        self.register(sym, bp, led=led)

    def infix_right(self, sym, bp):
        def led(token, parser, left):
            token.children.append(left)
            token.children.append(parser.expression(token.bp - 1))
            return token
        self.register(sym, bp, led=led)

    def prefix(self, sym):
        def nud(token, parser):
            token.children.append(parser.expression(PREFIX_BP))
            return token
        self.register(sym, nud=nud)

    def symbol(self, sym):
        self.register(sym, nud=lambda token, parser: token)

    def consumable(self, sym):
        self.register(sym)

    def stmt(self, sym, std):
        self.register(sym, std=std)


def _drop(token, parser, left):
    # 3d6-L drops one die, 3d6-L2 drops two; either way the drop hangs off the throw
    if parser.stream.peek().sym == NUMBER:
        token.children.append(parser.expression(token.bp))
    else:
        token.children.append(parser.registry.token(NUMBER, '1', token.line, token.col))
    left.children.append(token)
    return left


def _tag(token, parser, left):
    token.value = token.value.capitalize()
    left.children.append(token)
    return left


def _dice_prefix(token, parser):
    # d20 is shorthand for 1d20
    token.children.append(parser.registry.token(NUMBER, '1', token.line, token.col))
    token.children.append(parser.expression(DICE_BP))
    return token


def _if_infix(token, parser, left):
    token.children.append(parser.expression(0))
    parser.advance('else')
    token.children.append(left)
    token.children.append(parser.expression(0))
    return token


def _call(token, parser, left):
    token.children.append(left)
    if parser.stream.peek().sym != ')':
        while True:
            token.children.append(parser.expression(COLLECT_BP))
            if parser.stream.peek().sym != ',':
                break
            parser.advance(',')
    parser.advance(')')
    return token


def _collect(token, parser, left):
    left.children.extend(token.children)
    return left


def _group(token, parser):
    while parser.stream.peek().sym not in (')', EOF):
        token.children.append(parser.expression(0))
    parser.advance(')')
    if not token.children:
        raise ParseError('empty parentheses', token.line, token.col)
    # only the first expression survives the grouping
    return token.children[0]


def _if_statement(token, parser):
    token.children.append(parser.expression(0))
    token.children.append(parser.block())
    if parser.stream.peek().sym == 'else':
        parser.stream.next()
        if parser.stream.peek().sym == 'if':
            token.children.append(parser.statement())
        else:
            token.children.append(parser.block())
    return token


def _newline(token, parser):
    nxt = parser.stream.peek()
    while nxt.sym == NEWLINE:
        parser.advance(NEWLINE)
        nxt = parser.stream.peek()
    if nxt.sym == EOF:
        return parser.advance(EOF)
    if nxt.sym == '}':
        return token
    return parser.statement()


def _roll(token, parser):
    token.children.append(parser.statement())
    return token


def _block(token, parser):
    token.children.extend(parser.statements())
    parser.advance('}')
    return token


def build_registry():
    t = TokenRegistry()

    t.symbol(NUMBER)

    for sym in (')', ',', 'and', 'else', ROOT, EOF, '{', '}', 'roll', NEWLINE):
        t.consumable(sym)

    t.infix('+', SUM_BP)
    t.infix('-', SUM_BP)
    t.infix('*', PRODUCT_BP)
    t.infix('/', PRODUCT_BP)
    t.infix('^', POWER_BP)
    t.infix('d', DICE_BP)
    t.register('d', nud=_dice_prefix)

    t.register('-L', DROP_BP, led=_drop)
    t.register('-H', DROP_BP, led=_drop)

    t.infix('mod', MOD_BP)
    for sym in COMPARISONS:
        t.infix(sym, COMPARISON_BP)

    t.register(IDENT, TAG_BP, led=_tag)
    t.register('if', IF_BP, led=_if_infix)
    t.register('(', CALL_BP, led=_call)
    t.register('and', COLLECT_BP, led=_collect)
    t.register(',', COLLECT_BP, led=_collect)
    t.infix('rep', REP_BP)

    t.prefix('-')
    t.register('(', nud=_group)

    t.stmt('if', _if_statement)
    t.stmt(NEWLINE, _newline)
    t.stmt('roll', _roll)
    t.stmt('{', _block)

    return t


# built once per process, read only afterwards
REGISTRY = build_registry()
