# -*- coding: utf-8 -*-
import secrets
from dataclasses import dataclass, field
from typing import Dict, List

from loguru import logger

from .errors import EvalError, friendly

MAX_DICE = 1000
MAX_SIDES = 1000


def uniform(minimum, maximum):
    """a cryptographically random integer in [minimum, maximum]"""
    if maximum <= 0 or minimum < 0:
        raise EvalError('cannot make a random int of size zero')
    size = maximum - minimum
    if size == 0:
        return 1
    return minimum + secrets.randbelow(size + 1)


def roll(count, sides, drop_highest=0, drop_lowest=0,
         max_dice=MAX_DICE, max_sides=MAX_SIDES):
    """roll count dice, returning the sorted faces and the total of the kept ones"""
    if count > max_dice:
        raise friendly("I can't hold that many dice!")
    if sides > max_sides:
        raise friendly('A die with that many sides is basically round')
    if sides < 1:
        raise friendly('/me ponders the meaning of a zero sided die')
    if count < 0:
        raise friendly('attempted to roll a negative number of dice')
    if drop_highest + drop_lowest > count:
        raise friendly('attempted to drop {} dice when only {} were rolled'
                       .format(drop_highest + drop_lowest, count))

    faces = sorted(uniform(1, sides) for _ in range(count))
    if drop_highest > 0:
        total = sum(faces[:count - drop_highest])
    elif drop_lowest > 0:
        total = sum(faces[drop_lowest:])
    else:
        total = sum(faces)
    return faces, total


@dataclass
class Dice:
    """one throw of count dice with the same number of sides"""

    count: int = 0
    sides: int = 0
    total: int = 0
    faces: List[int] = field(default_factory=list)
    min: int = 0
    max: int = 0
    drop_highest: int = 0
    drop_lowest: int = 0
    color: str = ''

    def roll(self, max_dice=MAX_DICE, max_sides=MAX_SIDES):
        # a throw only ever happens once
        if self.total != 0:
            return self.total

        self.faces, self.total = roll(self.count, self.sides,
                                      self.drop_highest, self.drop_lowest,
                                      max_dice, max_sides)
        kept = self.count - (self.drop_highest + self.drop_lowest)
        self.min = kept
        self.max = kept * self.sides
        return self.total

    def __str__(self):
        text = '{}d{}'.format(self.count, self.sides)
        if self.drop_highest:
            text += '-H{}'.format(self.drop_highest)
        if self.drop_lowest:
            text += '-L{}'.format(self.drop_lowest)
        text += ': {} ({})'.format(faces_string(self.faces), self.total)
        if self.color:
            text += ' {}'.format(self.color)
        return text


@dataclass
class DiceSet:
    """Everything one evaluation rolled, plus the scratch state the evaluator works with."""

    dice: List[Dice] = field(default_factory=list)
    totals_by_color: Dict[str, float] = field(default_factory=dict)
    drop_highest: int = 0
    drop_lowest: int = 0
    colors: List[str] = field(default_factory=list)
    color_depth: int = 0
    max_dice: int = field(default=MAX_DICE, repr=False, compare=False)
    max_sides: int = field(default=MAX_SIDES, repr=False, compare=False)

    def push_and_roll(self, dice):
        if self.color_depth == 0:
            dice.color = self.pop_color()
        dice.drop_highest = self.drop_highest
        dice.drop_lowest = self.drop_lowest
        self.drop_highest = 0
        self.drop_lowest = 0

        result = dice.roll(self.max_dice, self.max_sides)
        logger.debug('rolled {}', dice)
        self.dice.append(dice)
        self.add_to_color(dice.color, result)
        return result

    def push_color(self, color):
        self.colors.append(color)

    def pop_color(self):
        return self.colors.pop() if self.colors else ''

    def top(self, offset=0):
        """the throw offset places below the most recent one"""
        if not self.dice:
            return None
        return self.dice[-offset - 1]

    def add_to_color(self, color, value):
        # nested arithmetic adds its result once, when it unwinds to the top
        if self.color_depth == 0:
            self.totals_by_color[color] = self.totals_by_color.get(color, 0) + value


def faces_string(faces):
    return ', '.join(str(f) for f in faces)


def totals_string(totals):
    if len(totals) == 1 and totals.get('', 0) != 0:
        return '{:.1f}'.format(totals[''])
    return ', '.join('{}: {:.1f}'.format(color or 'Unspecified', value)
                     for color, value in totals.items())
