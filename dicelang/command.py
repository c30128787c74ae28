# -*- coding: utf-8 -*-
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loguru import logger

from .diceset import DiceSet
from .errors import ErrorKind, ParseError
from .interpreter import Interpreter
from .parser import parse
from .probability import probability
from .restring import format_faces, restring


@dataclass
class RollResult:
    """one dice set: a statement, or one repetition of a rep statement"""

    dice_set: DiceSet
    total: float
    restring: str
    probabilities: Optional[List[Dict[int, float]]] = None

    def __str__(self):
        return '{} = *{}*'.format(format_faces(self.restring, self.dice_set.dice),
                                  int(round(self.total)))


@dataclass
class RollResponse:
    command: str
    dice_sets: List[RollResult] = field(default_factory=list)

    @property
    def total(self):
        # summed first and rounded once, so halves from several sets still count
        return int(round(sum(r.total for r in self.dice_sets)))

    def totals_by_color(self):
        merged = {}
        for result in self.dice_sets:
            for color, value in result.dice_set.totals_by_color.items():
                merged[color] = merged.get(color, 0) + value
        return merged

    def __str__(self):
        lines = [str(r) for r in self.dice_sets]
        if len(self.dice_sets) > 1:
            lines.append('Total: {}'.format(self.total))
        return '\n'.join(lines)


def _repeated(stmt):
    """the rep node of a statement like `roll 1d20 rep 5`, if it is one"""
    if stmt.sym == 'roll' and len(stmt.children) == 1:
        stmt = stmt.children[0]
    if stmt.sym == 'rep':
        return stmt
    return None


def roll_command(command, probabilities=False, interpreter=None):
    """
    Parse and roll a whole command, one dice set per top level statement.

    A rep statement becomes one dice set per repetition, sorted by total.
    """
    if not command:
        raise ParseError('zero length command is invalid', 1, 1, ErrorKind.FRIENDLY)

    interpreter = interpreter or Interpreter()
    root = parse(command)
    if not root.children:
        raise ParseError('No dice sets resulted from that command', 1, 1)

    def result_for(stmt):
        total, ds = interpreter.evaluate(stmt)
        probs = None
        if probabilities:
            probs = [probability(d.count, d.sides, d.drop_highest, d.drop_lowest)
                     for d in ds.dice]
        return RollResult(ds, total, restring(stmt), probs)

    response = RollResponse(command)
    for stmt in root.children:
        rep = _repeated(stmt)
        if rep is None:
            response.dice_sets.append(result_for(stmt))
            continue

        reps, _ = interpreter.evaluate(rep.children[1])
        results = [result_for(rep.children[0]) for _ in range(int(reps))]
        response.dice_sets.extend(sorted(results, key=lambda r: r.total))

    logger.debug('{!r} rolled {} dice sets', command, len(response.dice_sets))
    return response
