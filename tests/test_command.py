"""roll_command tests"""
import pytest

from dicelang.command import RollResponse, roll_command
from dicelang.errors import ErrorKind, EvalError, ParseError
from dicelang.interpreter import Interpreter


class TestRollCommand:
    """one dice set per statement"""

    def test_single_statement(self):
        response = roll_command("roll 20d1 mundane")
        assert isinstance(response, RollResponse)
        assert len(response.dice_sets) == 1
        result = response.dice_sets[0]
        assert result.total == 20
        assert result.restring == "Roll 20d1(%s) Mundane"
        assert result.dice_set.totals_by_color == {'Mundane': 20}
        assert result.probabilities is None

    def test_str_single(self):
        faces = ', '.join(['1'] * 20)
        assert str(roll_command("roll 20d1 mundane")) == \
            "Roll 20d1({}) Mundane = *20*".format(faces)

    def test_statements_roll_separately(self):
        response = roll_command("1d1 fire, 2d1")
        assert len(response.dice_sets) == 2
        assert response.dice_sets[0].dice_set.totals_by_color == {'Fire': 1}
        assert response.dice_sets[1].dice_set.totals_by_color == {'': 2}
        assert response.total == 3
        assert response.totals_by_color() == {'Fire': 1, '': 2}

    def test_str_several(self):
        assert str(roll_command("1d1 fire, 2d1")).split('\n') == [
            "1d1(1) Fire = *1*",
            "2d1(1, 1) = *2*",
            "Total: 3",
        ]

    def test_colors_in_separate_statements(self):
        response = roll_command("(8d1+10)*2+5 mundane and 6d1/2 fire")
        assert [r.total for r in response.dice_sets] == [41, 3]
        assert response.totals_by_color() == {'Mundane': 41, 'Fire': 3}

    def test_rep_expands_into_sets(self):
        response = roll_command("roll 1d20 rep 5")
        assert len(response.dice_sets) == 5
        for result in response.dice_sets:
            assert len(result.dice_set.dice) == 1
            dice = result.dice_set.dice[0]
            assert (dice.count, dice.sides) == (1, 20)
            assert 1 <= result.total <= 20
            assert result.restring == "1d20(%s)"
        totals = [r.total for r in response.dice_sets]
        assert totals == sorted(totals)

    def test_bare_rep(self):
        response = roll_command("2d1+1 rep 3")
        assert [r.total for r in response.dice_sets] == [3, 3, 3]
        assert response.total == 9

    def test_fractional_total_is_rounded(self):
        response = roll_command("3d1/2")
        assert response.dice_sets[0].total == 1.5
        assert response.total == 2
        assert str(response) == "3d1(1, 1, 1) / 2 = *2*"

    def test_fractions_are_summed_before_rounding(self):
        response = roll_command("3d1/2, 3d1/2")
        assert response.total == 3
        assert str(response).split('\n') == [
            "3d1(1, 1, 1) / 2 = *2*",
            "3d1(1, 1, 1) / 2 = *2*",
            "Total: 3",
        ]

    def test_probabilities(self):
        response = roll_command("3d6 + 1d4", probabilities=True)
        probs = response.dice_sets[0].probabilities
        assert len(probs) == 2
        assert min(probs[0]) == 3
        assert max(probs[1]) == 4
        assert sum(probs[0].values()) == pytest.approx(100.0)

    def test_custom_interpreter(self):
        with pytest.raises(EvalError):
            roll_command("3d6", interpreter=Interpreter(max_dice=2))


class TestRollCommandErrors:
    def test_empty(self):
        with pytest.raises(ParseError) as exc:
            roll_command("")
        assert exc.value.message == 'zero length command is invalid'
        assert exc.value.kind == ErrorKind.FRIENDLY

    def test_nothing_to_roll(self):
        with pytest.raises(ParseError) as exc:
            roll_command("# just a comment")
        assert exc.value.message == 'No dice sets resulted from that command'

    def test_parse_error(self):
        with pytest.raises(ParseError):
            roll_command("roll")

    def test_mixed_colors(self):
        with pytest.raises(EvalError) as exc:
            roll_command("20d1 red + 12d1 blue")
        assert exc.value.kind == ErrorKind.FRIENDLY
