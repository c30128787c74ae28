# -*- coding: utf-8 -*-
import math
import operator

from loguru import logger

from .config import settings
from .diceset import Dice, DiceSet
from .errors import EvalError, friendly
from .tokens import IDENT, NUMBER, ROOT

COMPARE = {
    '<': operator.lt,
    '>': operator.gt,
    '<=': operator.le,
    '>=': operator.ge,
    '==': operator.eq,
    '!=': operator.ne,
}


def _fold(op, nums):
    if op == '+':
        return math.fsum(nums)
    if op == '-' and len(nums) == 1:
        return -nums[0]

    x = nums[0]
    for y in nums[1:]:
        if op == '-':
            x -= y
        elif op == '*':
            x *= y
        elif op == '/':
            x /= y
        elif op == '^':
            x = math.pow(x, y)
        elif op == 'mod':
            if y == 0:
                raise ZeroDivisionError('modulo by zero')
            x = math.fmod(x, y)
        else:
            raise EvalError('invalid operator: {}'.format(op))
    return x


class Interpreter(object):
    def __init__(self, max_dice=None, max_sides=None):
        self.max_dice = max_dice if max_dice is not None else settings.max_dice
        self.max_sides = max_sides if max_sides is not None else settings.max_sides

    def evaluate(self, ast):
        """roll everything in ast, returning the grand total and the DiceSet it produced"""
        ds = DiceSet(max_dice=self.max_dice, max_sides=self.max_sides)
        value = self.eval(ast, ds)
        logger.debug('evaluated to {} with colors {}', value, ds.totals_by_color)
        return value, ds

    def eval(self, node, ds):
        sym = node.sym.upper()

        if sym == NUMBER:
            # a color tagged onto a literal still has to reach the color stack
            for child in node.children:
                self.eval(child, ds)
            return float(node.value)

        if sym in ('-H', '-L'):
            count = int(sum(self.eval(c, ds) for c in node.children))
            if sym == '-H':
                ds.drop_highest = count
            else:
                ds.drop_lowest = count
            return 0

        if sym == 'D':
            nums = [int(self.eval(c, ds)) for c in node.children]
            dice = Dice(count=nums[0], sides=nums[1])
            return float(ds.push_and_roll(dice))

        if sym in ('+', '-', '*', '/', '^', 'MOD'):
            return self.arithmetic(node, ds)

        if sym in ('{', 'ROLL', ROOT.upper()):
            return sum(self.eval(c, ds) for c in node.children)

        if sym == IDENT:
            ds.push_color(node.value)
            return 0

        if sym == 'REP':
            reps = int(self.eval(node.children[1], ds))
            return sum(self.eval(node.children[0], ds) for _ in range(reps))

        if sym == 'IF':
            if self.evaluate_boolean(node.children[0], ds):
                return self.eval(node.children[1], ds)
            if len(node.children) < 3:
                return 0
            return self.eval(node.children[2], ds)

        raise EvalError('unsupported symbol: {}'.format(node.sym))

    def arithmetic(self, node, ds):
        dice_before = len(ds.dice)
        nums = []

        ds.color_depth += 1
        for child in node.children:
            if child.sym == IDENT:
                self.eval(child, ds)
            else:
                nums.append(self.eval(child, ds))
        ds.color_depth -= 1
        new_dice = len(ds.dice) - dice_before

        op = node.sym.lower()
        try:
            x = _fold(op, nums)
        except ZeroDivisionError:
            raise friendly('attempted to divide by zero')
        except OverflowError:
            raise friendly('result too large to calculate')
        except ValueError:
            raise friendly('result is not a real number')

        if len(ds.colors) > 1:
            raise friendly("cannot perform arithmetic on different color dice, "
                           "try ',' or 'and' instead")

        if ds.color_depth == 0:
            # back at the top of the chain, everything rolled inside takes the color
            color = ds.pop_color()
            for i in range(new_dice):
                ds.top(i).color = color
            ds.add_to_color(color, x)

        return x

    def evaluate_boolean(self, node, ds):
        compare = COMPARE.get(node.sym)
        if compare is None:
            raise EvalError('bad bool: {}'.format(node.sym))
        left = self.eval(node.children[0], ds)
        right = self.eval(node.children[1], ds)
        return compare(left, right)


def evaluate(ast):
    return Interpreter().evaluate(ast)
