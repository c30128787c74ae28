# -*- coding: utf-8 -*-
import math
from collections import defaultdict

from loguru import logger


def _outcomes(count, sides, drop_highest, drop_lowest, memo):
    if count == 0:
        return {0: 1}
    if sides == 0:
        return {}

    result = defaultdict(int)
    for showing_max in range(count + 1):
        rest = memo[(count - showing_max, sides - 1,
                     max(drop_highest - showing_max, 0), drop_lowest)]
        kept = max(min(showing_max - drop_highest,
                       count - drop_highest - drop_lowest), 0)
        multiplier = math.comb(count, showing_max)
        for subtotal, ways in rest.items():
            result[kept * sides + subtotal] += multiplier * ways
    return result


def probability(count, sides, drop_highest=0, drop_lowest=0):
    """
    Exact distribution of the kept total of a single throw of count dice.

    Returns a dict mapping each possible total to its probability in percent.
    Outcomes are partitioned by how many dice show the highest face; the rest
    of the throw is the same problem with one face fewer, so every
    (count, sides, drop_highest, drop_lowest) state is worked out once.
    """
    if count < 0 or sides < 0:
        return {}

    # the states the full throw can reach, one layer per face removed
    layers = [{(count, drop_highest)}]
    for _ in range(sides):
        reachable = set()
        for c, h in layers[-1]:
            for k in range(c + 1):
                reachable.add((c - k, max(h - k, 0)))
        layers.append(reachable)

    # fill the memo from no faces left upwards
    memo = {}
    for s in range(sides + 1):
        for c, h in layers[sides - s]:
            memo[(c, s, h, drop_lowest)] = _outcomes(c, s, h, drop_lowest, memo)

    ways = memo[(count, sides, drop_highest, drop_lowest)]
    total = sum(ways.values())
    if not total:
        return {}

    logger.debug('{}d{} -H{} -L{} has {} possible totals',
                 count, sides, drop_highest, drop_lowest, len(ways))
    return {k: v * 100 / total for k, v in sorted(ways.items())}
