# -*- coding: utf-8 -*-
import argparse
import sys

from loguru import logger

from .config import settings
from .diceset import totals_string
from .errors import DiceLangError, LexError
from .interpreter import Interpreter
from .logs import setup_logging
from .parser import parse, print_ast
from .probability import probability
from .restring import restring

RULE = '----------'


def print_dice_info(cmd, verbose=False, prob=False, out=None):
    out = out or sys.stdout

    def emit(*args):
        print(*args, file=out)

    try:
        root = parse(cmd)
    except LexError as e:
        emit(e.message, e.col, e.line)
        return

    try:
        total, dice_set = Interpreter().evaluate(root)
    except DiceLangError as e:
        emit('Could not parse input: {}'.format(e))
        return

    if verbose:
        emit('AST:')
        emit(RULE + print_ast(root))
        emit(RULE)

    if prob:
        for dice in dice_set.dice:
            table = probability(dice.count, dice.sides, dice.drop_highest, dice.drop_lowest)
            emit('Probability Map for {!r}:'.format(dice))
            for k, v in table.items():
                emit('{:2d}:  {:.5f}%'.format(k, v))
            emit(RULE)

    emit('Total: {}'.format(total))
    emit('Color Map: {}'.format(totals_string(dice_set.totals_by_color)))
    try:
        emit(restring(root))
    except DiceLangError as e:
        emit('Could not restring input: {}'.format(e))
    emit(RULE)
    emit(repr(dice_set))
    emit(RULE)


def main(argv=None):
    argparser = argparse.ArgumentParser(description='An interpreter for dice language commands.')
    argparser.add_argument('--cmd', default='roll 1d20 rep 5', help='the roll command to run')
    argparser.add_argument('--path', help='a file with one roll command per line')
    argparser.add_argument('--v', dest='verbose', action='store_true',
                           help='print the AST of each command')
    argparser.add_argument('--p', dest='prob', action='store_true',
                           help='print the probability map of each throw')
    args = argparser.parse_args(argv)

    setup_logging(settings.log_level, settings.log_path)

    if args.path is None:
        print(args.cmd)
        print_dice_info(args.cmd, args.verbose, args.prob)
        return 0

    try:
        with open(args.path, encoding='utf-8') as f:
            lines = f.read().splitlines()
    except OSError as e:
        logger.error('could not read {}: {}', args.path, e)
        print('Could not open file: {}'.format(e))
        return 1

    for line in lines:
        if not line.strip():
            continue
        print(line)
        print_dice_info(line, args.verbose, args.prob)
    return 0


if __name__ == '__main__':
    sys.exit(main())
