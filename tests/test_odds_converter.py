from decimal import Decimal

import pytest

from soccer_scoreboard.betting.odds_converter import (
    american_to_implied_probability,
    american_to_percentage,
    coerce_american,
    format_probability,
)


@pytest.mark.parametrize("odds", [1, 100, 130, 250, 10000])
def test_positive_odds_use_underdog_formula(odds):
    assert american_to_implied_probability(odds) == Decimal(100) / (Decimal(odds) + 100)


@pytest.mark.parametrize("odds", [-1, -110, -150, -400, 0])
def test_non_positive_odds_use_favourite_formula(odds):
    expected = Decimal(abs(odds)) / (Decimal(abs(odds)) + 100)
    assert american_to_implied_probability(odds) == expected


def test_zero_odds_is_zero_probability():
    assert american_to_implied_probability(0) == Decimal(0)


@pytest.mark.parametrize("odds", [None, "", "abc", "nan", "inf", float("nan"), True, {}, []])
def test_absent_or_non_numeric_odds_yield_none(odds):
    assert american_to_implied_probability(odds) is None


@pytest.mark.parametrize("odds", [-10000, -150, -1, 1, 130, 99999])
def test_probability_is_bounded(odds):
    probability = american_to_implied_probability(odds)
    assert Decimal(0) <= probability <= Decimal(1)


def test_numeric_strings_are_coerced():
    assert coerce_american("-150") == Decimal("-150")
    assert coerce_american(" +130 ") == Decimal("130")
    assert american_to_implied_probability("-150") == Decimal("0.6")


def test_float_odds():
    assert american_to_implied_probability(150.0) == Decimal("0.4")


def test_percentage_formatting():
    assert american_to_percentage(-150) == "60.0%"
    assert american_to_percentage(130) == "43.5%"
    assert american_to_percentage(None) is None
    assert format_probability(None) is None
    assert format_probability(Decimal("0.5")) == "50.0%"


@pytest.mark.parametrize(
    "odds, expected",
    [("1e1000000", Decimal(0)), ("-1e1000000", Decimal(1)), ("1e999999", None)],
)
def test_out_of_range_magnitudes_clamp_instead_of_raising(odds, expected):
    probability = american_to_implied_probability(odds)

    assert Decimal(0) <= probability <= Decimal(1)
    if expected is not None:
        assert probability == expected
    assert american_to_percentage(odds) in {"0.0%", "100.0%"}
