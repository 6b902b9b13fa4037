from itertools import product

import pytest

from slotserver.games.slots import payout_multiplier, probabilities, resolve_symbols
from slotserver.models import Symbol, SYMBOLS

S = Symbol


def test_probabilities_of_first_default_reel(model):
    reel = model.reels[0]
    assert len(reel) == 15
    p = probabilities(reel)
    assert p[S.SEVEN] == pytest.approx(2 / 15)
    assert p[S.BAR] == pytest.approx(3 / 15)
    assert p[S.BELL] == pytest.approx(2 / 15)
    assert p[S.CHERRY] == pytest.approx(4 / 15)
    assert p[S.LEMON] == pytest.approx(4 / 15)


def test_probabilities_sum_to_one_for_every_reel(model):
    for reel in model.reels:
        assert sum(probabilities(reel).values()) == pytest.approx(1.0)


def test_probabilities_cover_absent_symbols():
    p = probabilities((S.LEMON, S.LEMON))
    assert set(p) == set(SYMBOLS)
    assert p[S.LEMON] == 1.0
    assert p[S.SEVEN] == 0.0


def test_probabilities_empty_reel_does_not_crash():
    assert probabilities(()) == {s: 0.0 for s in SYMBOLS}


@pytest.mark.parametrize("hand, mult, reason", [
    ((S.SEVEN, S.SEVEN, S.SEVEN), 100, 'Seven x3'),
    ((S.BAR, S.BAR, S.BAR), 40, 'Bar x3'),
    ((S.LEMON, S.LEMON, S.LEMON), 0, 'Lemon x3'),
    ((S.SEVEN, S.SEVEN, S.BAR), 5, 'Any 2 Sevens'),
    ((S.BAR, S.SEVEN, S.SEVEN), 5, 'Any 2 Sevens'),
    ((S.SEVEN, S.SEVEN, S.CHERRY), 5, 'Any 2 Sevens'),
    ((S.CHERRY, S.BELL, S.CHERRY), 3, 'Any 2 Cherries'),
    ((S.LEMON, S.CHERRY, S.BAR), 1, 'Single Cherry'),
    ((S.SEVEN, S.CHERRY, S.BAR), 1, 'Single Cherry'),
    ((S.SEVEN, S.BAR, S.BELL), 0, 'No win'),
])
def test_payout_rules(model, hand, mult, reason):
    assert payout_multiplier(*hand, model) == (mult, reason)


def test_triple_cherry_pays_three_of_a_kind_only(model):
    mult, reason = payout_multiplier(S.CHERRY, S.CHERRY, S.CHERRY, model)
    assert mult == model.pay3[S.CHERRY] == 10
    assert reason == 'Cherry x3'


def test_payout_is_deterministic(model):
    for hand in product(SYMBOLS, repeat=3):
        assert payout_multiplier(*hand, model) == payout_multiplier(*hand, model)


def test_resolve_symbols(model):
    assert resolve_symbols(model.reels, [0, 0, 1]) == (S.SEVEN, S.SEVEN, S.BAR)
    assert resolve_symbols(model.reels, [7, 6, 5]) == (S.CHERRY, S.CHERRY, S.CHERRY)
