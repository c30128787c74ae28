# -*- coding: utf-8 -*-
import re

from loguru import logger
from sly import Lexer
from word2number import w2n

from .errors import LexError
from . import tokens as symbols
from .tokens import REGISTRY

# 'point' would turn a run of words into a decimal, which the dice language has no use for
NUMBER_WORDS = frozenset(w2n.american_number_system) - {'point'}

_NEXT_WORD = re.compile(r'[ \t]+([a-zA-Z_][a-zA-Z0-9_]*)')


def _find_column(text, index):
    return index - text.rfind('\n', 0, index)


class DiceLexer(Lexer):
    tokens = {NUMBER, DICE, IDENT, KEYWORD, OPERATOR, NEWLINE}
    ignore = ' \t\r\v\f\x85\xa0'
    ignore_comment = r'\#[^\n]*'

    def __init__(self, registry=REGISTRY):
        self.registry = registry

    @_(r'\d+(?:\.\d*)?')
    def NUMBER(self, t):
        return t

    # the d in 1d20, never the start of an identifier
    @_(r'[dD](?=\d)')
    def DICE(self, t):
        t.value = 'd'
        return t

    @_(r'[a-zA-Z_][a-zA-Z0-9_]*')
    def IDENT(self, t):
        word = t.value.lower()
        if self.registry.is_keyword(word):
            t.type = 'KEYWORD'
            t.value = word
        elif word in NUMBER_WORDS:
            t.type = 'NUMBER'
            t.value = self._number_phrase(t)
        return t

    def _number_phrase(self, t):
        words = [t.value]
        m = _NEXT_WORD.match(self.text, self.index)
        while m and m.group(1).lower() in NUMBER_WORDS:
            words.append(m.group(1))
            self.index = m.end()
            m = _NEXT_WORD.match(self.text, self.index)

        phrase = ' '.join(words)
        try:
            return str(w2n.word_to_num(phrase))
        except ValueError as e:
            raise LexError("invalid number '{}'".format(phrase),
                           t.lineno, _find_column(self.text, t.index)) from e

    @_(r'<=|>=|==|!=|-L|-H|[\^*()\-+=/?.,:;"|{}\[\]<>!]')
    def OPERATOR(self, t):
        t.value = t.value if len(t.value) > 1 else t.value.lower()
        if not self.registry.defined(t.value):
            raise LexError('operator not defined: {}'.format(t.value),
                           t.lineno, _find_column(self.text, t.index))
        return t

    @_(r'\n')
    def NEWLINE(self, t):
        self.lineno += 1
        return t

    def error(self, t):
        raise LexError("invalid character '{}'".format(t.value[0]),
                       self.lineno, _find_column(self.text, t.index))


class TokenStream(object):
    """Pull based view of the lexer with a single token of lookahead."""

    def __init__(self, source, registry=REGISTRY):
        self.source = source
        self.registry = registry
        self._tokens = DiceLexer(registry).tokenize(source)
        self._peeked = None
        self.line = 1
        self.col = 1

    def next(self):
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
        else:
            token = self._read()
        self.line, self.col = token.line, token.col
        return token

    def peek(self):
        if self._peeked is None:
            self._peeked = self._read()
        return self._peeked

    def _read(self):
        raw = next(self._tokens, None)
        if raw is None:
            # end of input, as many times as anyone asks
            return self.registry.token(symbols.EOF, 'EOF', self.source.count('\n') + 1,
                                       _find_column(self.source, len(self.source)))

        col = _find_column(self.source, raw.index)
        if raw.type == 'NUMBER':
            return self.registry.token(symbols.NUMBER, raw.value, raw.lineno, col)
        if raw.type == 'IDENT':
            return self.registry.token(symbols.IDENT, raw.value, raw.lineno, col)
        if raw.type == 'NEWLINE':
            return self.registry.token(symbols.NEWLINE, '\n', raw.lineno, col)
        return self.registry.token(raw.value, raw.value, raw.lineno, col)


def tokenize(source):
    """every token in source, ending with (EOF)"""
    stream = TokenStream(source)
    tokens = [stream.next()]
    while tokens[-1].sym != symbols.EOF:
        tokens.append(stream.next())
    logger.debug('lexed {} tokens from {!r}', len(tokens), source)
    return tokens
