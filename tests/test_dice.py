"""Tests for the die and dice collection model."""

import dataclasses
import pickle

import numpy as np
import pytest

from dicegame.dice import VALID_SIDES, Dice, Die


class TestDie:
    """Test Die class."""

    @pytest.mark.parametrize("sides", VALID_SIDES)
    def test_roll_within_bounds(self, sides):
        """Every roll lies in [1, sides] and every face shows up."""
        rng = np.random.default_rng(42)
        die = Die(sides)

        values = [die.roll(rng) for _ in range(2000)]

        assert min(values) == 1
        assert max(values) == sides
        assert set(values) == set(range(1, sides + 1))
        assert all(isinstance(v, int) for v in values)

    @pytest.mark.parametrize("sides", VALID_SIDES)
    def test_roll_roughly_uniform(self, sides):
        """Face frequencies stay close to 1/sides."""
        rng = np.random.default_rng(7)
        n_rolls = 3000 * sides
        values = np.array([Die(sides).roll(rng) for _ in range(n_rolls)])

        counts = np.bincount(values, minlength=sides + 1)[1:]
        expected = n_rolls / sides
        assert np.all(np.abs(counts - expected) < 0.15 * expected)

    def test_roll_default_rng(self):
        """Rolling without a generator still works."""
        assert 1 <= Die(20).roll() <= 20

    @pytest.mark.parametrize("sides", [0, 1, 2, 3, 5, 7, 100, -6])
    def test_invalid_sides(self, sides):
        """Unsupported face counts are rejected at construction."""
        with pytest.raises(ValueError, match="Invalid die type"):
            Die(sides)

    def test_immutable(self):
        die = Die(6)
        with pytest.raises(dataclasses.FrozenInstanceError):
            die.sides = 8

    def test_equality_by_sides(self):
        assert Die(10) == Die(10)
        assert Die(10) != Die(12)

    def test_string_form(self):
        assert str(Die(6)) == "d6"
        assert repr(Die(20)) == "d20"


class TestDice:
    """Test Dice collection."""

    def test_sequence_behaviour(self):
        dice = Dice([Die(4), Die(10), Die(10)])

        assert len(dice) == 3
        assert dice[1] == Die(10)
        assert list(dice) == [Die(4), Die(10), Die(10)]
        assert dice.sides == (4, 10, 10)
        assert dice[:2] == Dice([Die(4), Die(10)])

    def test_string_form(self):
        dice = Dice([Die(4), Die(6), Die(10), Die(10)])
        assert str(dice) == "d4, d6, d10, d10"
        assert str(Dice()) == ""

    def test_roll_all(self):
        """Rolling the collection gives one in-range value per die."""
        rng = np.random.default_rng(1)
        dice = Dice([Die(s) for s in VALID_SIDES])

        for _ in range(500):
            values = dice.roll(rng)
            assert len(values) == len(dice)
            for die, value in zip(dice, values):
                assert 1 <= value <= die.sides

    def test_roll_subset(self):
        """Only the requested positions are rolled, in the requested order."""
        rng = np.random.default_rng(2)
        dice = Dice([Die(4), Die(20), Die(6)])

        for _ in range(500):
            values = dice.roll(rng, indices=[1, 2])
            assert len(values) == 2
            assert 1 <= values[0] <= 20
            assert 1 <= values[1] <= 6

    def test_roll_empty(self):
        assert Dice().roll(np.random.default_rng(0)) == []
        assert Dice([Die(6)]).roll(np.random.default_rng(0), indices=[]) == []

    def test_same_seed_same_rolls(self):
        dice = Dice([Die(8), Die(12)])
        first = dice.roll(np.random.default_rng(99))
        second = dice.roll(np.random.default_rng(99))
        assert first == second

    def test_picklable(self):
        dice = Dice([Die(4), Die(12)])
        assert pickle.loads(pickle.dumps(dice)) == dice
