# -*- coding: utf-8 -*-
"""
Top down operator precedence parser for the dice language.

The parser only drives the loop; what each token does in prefix, infix or
statement position lives with the token's registry entry in tokens.py.
"""
from loguru import logger

from .errors import ErrorKind, ParseError
from .lexer import TokenStream
from .tokens import EOF, NEWLINE, REGISTRY, ROOT


class Parser(object):
    def __init__(self, source, registry=REGISTRY):
        self.registry = registry
        self.stream = TokenStream(source, registry)

    def expression(self, rbp):
        token = self.stream.next()
        if token.nud is None:
            raise ParseError('token "{}" is not prefix'.format(token.value),
                             token.line, token.col)
        left = token.nud(token, self)

        while rbp < self.stream.peek().bp:
            token = self.stream.next()
            if token.led is None:
                raise ParseError('token "{}" is not infix'.format(token.value),
                                 token.line, token.col)
            left = token.led(token, self, left)

        return left

    def statement(self):
        token = self.stream.peek()
        if token.std is not None:
            self.stream.next()
            return token.std(token, self)
        return self.expression(0)

    def statements(self):
        stmts = []
        while self.stream.peek().sym not in (EOF, '}'):
            stmt = self.statement()
            if stmt.sym not in (EOF, NEWLINE):
                stmts.append(stmt)
        return stmts

    def root(self):
        root = self.registry.token(ROOT, '')
        root.children.extend(self.statements())
        return root

    def block(self):
        token = self.stream.next()
        if token.sym != '{':
            raise ParseError('expected block start not found: {}'.format(token.sym),
                             token.line, token.col)
        return token.std(token, self)

    def advance(self, sym):
        token = self.stream.next()
        if token.sym != sym:
            raise ParseError('did not find expected character "{}". Found "{}"'
                             .format(sym, token.sym), token.line, token.col)
        return token


def parse(source):
    """parse a whole command into a (rootnode) holding one child per statement"""
    if not source:
        raise ParseError('zero length command is invalid', 1, 1, ErrorKind.FRIENDLY)

    logger.debug('parsing {!r}', source)
    parser = Parser(source)
    root = parser.root()

    trailing = parser.stream.peek()
    if trailing.sym != EOF:
        raise ParseError('unmatched "{}"'.format(trailing.value), trailing.line, trailing.col)
    return root


def print_ast(node, indent=0):
    text = '\n{}({}:{}'.format(' ' * indent, node.sym, node.value)
    for child in node.children:
        text += ' ' + print_ast(child, indent + 4)
    return text + ')'
