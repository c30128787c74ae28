# -*- coding: utf-8 -*-
from enum import IntEnum


class ErrorKind(IntEnum):
    # the AST that came out of the command can't be turned back into text
    INVALID_AST = 0
    # the command can't be parsed into an AST
    INVALID_COMMAND = 1
    # an expected error, safe to show to whoever typed the command
    FRIENDLY = 2
    UNEXPECTED = 999


class DiceLangError(Exception):
    def __init__(self, message, kind=ErrorKind.UNEXPECTED, inner=None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.inner = inner


class LexError(DiceLangError):
    def __init__(self, message, line, col, kind=ErrorKind.INVALID_COMMAND):
        super().__init__(message, kind)
        self.line = line
        self.col = col

    def __str__(self):
        return '{} (line {}, col {})'.format(self.message, self.line, self.col)


class ParseError(LexError):
    pass


class EvalError(DiceLangError):
    pass


def friendly(message):
    return EvalError(message, ErrorKind.FRIENDLY)


_MESSAGES = {
    ErrorKind.INVALID_AST: 'The AST that resulted from your command was invalid.',
    ErrorKind.INVALID_COMMAND: 'Your command could not be parsed.',
}


def user_message(error):
    """the text a host should show for an error raised by dicelang"""
    if not isinstance(error, DiceLangError):
        return 'An unexpected error has occurred. Please try again later'
    if error.kind == ErrorKind.FRIENDLY:
        return error.message
    return _MESSAGES.get(error.kind,
                         'An unexpected error has occurred. Please try again later')
