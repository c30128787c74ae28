"""Dice, DiceSet and random number tests"""
import math
from collections import Counter

import pytest

from dicelang.diceset import Dice, DiceSet, faces_string, roll, totals_string, uniform
from dicelang.errors import ErrorKind, EvalError
from dicelang.probability import probability

# z for a one sided p of 0.001, loose enough that a fair generator almost never fails
Z_LENIENT = 3.0902


def chi_square(observed, expected):
    """Pearson's statistic for observed counts against expected counts"""
    return sum((observed.get(k, 0) - e) ** 2 / e for k, e in expected.items())


def critical_value(df, z=Z_LENIENT):
    # Wilson-Hilferty approximation of the chi-square quantile
    return df * (1 - 2 / (9 * df) + z * math.sqrt(2 / (9 * df))) ** 3


def expected_counts(table, draws):
    return {total: pct / 100 * draws for total, pct in table.items()}


class TestUniform:
    """cryptographically sourced integers"""

    def test_bounds(self):
        draws = {uniform(1, 6) for _ in range(2000)}
        assert draws == {1, 2, 3, 4, 5, 6}

    def test_single_value(self):
        assert uniform(1, 1) == 1

    def test_equal_bounds_return_one(self):
        assert uniform(5, 5) == 1

    def test_zero_size(self):
        with pytest.raises(EvalError):
            uniform(0, 0)

    def test_negative_minimum(self):
        with pytest.raises(EvalError):
            uniform(-1, 6)

    def test_distribution(self):
        buckets = 200
        draws = 1000000
        observed = Counter(uniform(1, buckets) for _ in range(draws))
        assert len(observed) == buckets

        expected = {k: draws / buckets for k in range(1, buckets + 1)}
        assert chi_square(observed, expected) < critical_value(buckets - 1)


class TestRollDistribution:
    """many throws match the exact outcome table"""

    draws = 20000

    def throws(self, count, sides, drop_highest=0, drop_lowest=0, bias=0):
        return Counter(roll(count, sides, drop_highest, drop_lowest)[1] + bias
                       for _ in range(self.draws))

    def test_3d6(self):
        table = probability(3, 6)
        expected = expected_counts(table, self.draws)
        assert chi_square(self.throws(3, 6), expected) < critical_value(len(table) - 1)

    def test_4d6_drop_lowest(self):
        table = probability(4, 6, 0, 1)
        expected = expected_counts(table, self.draws)
        assert chi_square(self.throws(4, 6, 0, 1), expected) < critical_value(len(table) - 1)

    def test_biased_throws_fail(self):
        table = probability(3, 6)
        expected = expected_counts(table, self.draws)
        assert chi_square(self.throws(3, 6, bias=1), expected) > critical_value(len(table) - 1)


class TestRoll:
    """one throw of several dice"""

    def test_d1(self):
        faces, total = roll(20, 1)
        assert faces == [1] * 20
        assert total == 20

    def test_faces_are_sorted_and_in_range(self):
        faces, total = roll(50, 6)
        assert len(faces) == 50
        assert faces == sorted(faces)
        assert all(1 <= f <= 6 for f in faces)
        assert total == sum(faces)

    def test_drop_lowest(self):
        faces, total = roll(4, 6, drop_lowest=1)
        assert total == sum(faces[1:])

    def test_drop_highest(self):
        faces, total = roll(3, 20, drop_highest=2)
        assert total == faces[0]

    def test_no_dice(self):
        assert roll(0, 6) == ([], 0)

    @pytest.mark.parametrize("args, message", [
        ((1001, 6), "I can't hold that many dice!"),
        ((1, 1001), 'A die with that many sides is basically round'),
        ((1, 0), '/me ponders the meaning of a zero sided die'),
        ((-1, 6), 'attempted to roll a negative number of dice'),
        ((1, 4, 0, 2), 'attempted to drop 2 dice when only 1 were rolled'),
    ])
    def test_friendly_errors(self, args, message):
        with pytest.raises(EvalError) as exc:
            roll(*args)
        assert exc.value.message == message
        assert exc.value.kind == ErrorKind.FRIENDLY

    def test_custom_limits(self):
        with pytest.raises(EvalError):
            roll(5, 6, max_dice=4)
        with pytest.raises(EvalError):
            roll(1, 20, max_sides=12)
        assert roll(4, 12, max_dice=4, max_sides=12)[1] >= 4


class TestDice:
    """a single throw"""

    def test_roll_is_idempotent(self):
        dice = Dice(count=3, sides=6)
        first = dice.roll()
        faces = list(dice.faces)
        assert dice.roll() == first
        assert dice.faces == faces

    @pytest.mark.parametrize("dice, low, high", [
        (Dice(count=1, sides=4), 1, 4),
        (Dice(count=2, sides=4), 2, 8),
        (Dice(count=2, sides=4, drop_lowest=1), 1, 4),
        (Dice(count=2, sides=4, drop_highest=1), 1, 4),
        (Dice(count=20, sides=4, drop_highest=5), 15, 60),
    ])
    def test_min_max(self, dice, low, high):
        dice.roll()
        assert (dice.min, dice.max) == (low, high)
        assert low <= dice.total <= high

    def test_str(self):
        dice = Dice(count=3, sides=1, drop_lowest=1, color='Fire')
        dice.roll()
        assert str(dice) == '3d1-L1: 1, 1, 1 (2) Fire'

    def test_str_without_color(self):
        dice = Dice(count=2, sides=1)
        dice.roll()
        assert str(dice) == '2d1: 1, 1 (2)'


class TestDiceSet:
    """evaluation scratch state and results"""

    def test_push_and_roll_takes_color_at_top_level(self):
        ds = DiceSet()
        ds.push_color('Mundane')
        result = ds.push_and_roll(Dice(count=20, sides=1))
        assert result == 20
        assert ds.dice[0].color == 'Mundane'
        assert ds.colors == []
        assert ds.totals_by_color == {'Mundane': 20}

    def test_push_and_roll_defers_inside_arithmetic(self):
        ds = DiceSet()
        ds.push_color('Fire')
        ds.color_depth = 1
        ds.push_and_roll(Dice(count=2, sides=1))
        assert ds.dice[0].color == ''
        assert ds.colors == ['Fire']
        assert ds.totals_by_color == {}

    def test_drops_are_consumed(self):
        ds = DiceSet()
        ds.drop_lowest = 1
        ds.push_and_roll(Dice(count=2, sides=1))
        assert ds.dice[0].drop_lowest == 1
        assert ds.dice[0].total == 1
        assert ds.drop_lowest == 0

        ds.push_and_roll(Dice(count=2, sides=1))
        assert ds.dice[1].drop_lowest == 0
        assert ds.dice[1].total == 2

    def test_limits_are_passed_on(self):
        ds = DiceSet(max_dice=2)
        with pytest.raises(EvalError):
            ds.push_and_roll(Dice(count=3, sides=6))

    def test_color_stack(self):
        ds = DiceSet()
        assert ds.pop_color() == ''
        ds.push_color('Fire')
        ds.push_color('Cold')
        assert ds.pop_color() == 'Cold'
        assert ds.pop_color() == 'Fire'

    def test_top(self):
        ds = DiceSet()
        assert ds.top() is None
        ds.push_and_roll(Dice(count=1, sides=1))
        ds.push_and_roll(Dice(count=2, sides=1))
        assert ds.top().count == 2
        assert ds.top(1).count == 1


class TestFormatting:
    def test_faces_string(self):
        assert faces_string([1, 2, 3]) == '1, 2, 3'
        assert faces_string([]) == ''

    def test_single_unnamed_total(self):
        assert totals_string({'': 20}) == '20.0'

    def test_named_totals(self):
        assert totals_string({'Mundane': 41, 'Fire': 3}) == 'Mundane: 41.0, Fire: 3.0'

    def test_unnamed_among_named(self):
        assert totals_string({'': 5, 'Fire': 2}) == 'Unspecified: 5.0, Fire: 2.0'
