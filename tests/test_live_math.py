import random
from itertools import product

import pytest

from slotserver.games.live_math import calc_stats, simulate_rtp
from slotserver.games.slots import payout_multiplier
from slotserver.services.config_store import build_model
from slotserver.games.defaults import default_config


def _model(**overrides):
    cfg = default_config()
    cfg.update(overrides)
    return build_model(cfg)


def test_single_symbol_reels():
    stats = calc_stats(_model(reels=[['Seven'], ['Seven'], ['Seven']]))
    assert stats.rtp == pytest.approx(100)
    assert stats.hit_rate == pytest.approx(1)
    assert stats.p_triple_seven == pytest.approx(1)
    assert stats.p_two_sevens == 0


def test_cherry_lemon_partition():
    # Каждая комбинация имеет вероятность 1/8
    stats = calc_stats(_model(reels=[['Cherry', 'Lemon']] * 3))
    assert stats.p_triple_cherry == pytest.approx(1 / 8)
    assert stats.p_two_cherries == pytest.approx(3 / 8)
    assert stats.p_single_cherry == pytest.approx(3 / 8)
    assert stats.hit_rate == pytest.approx(7 / 8)
    assert stats.rtp == pytest.approx((10 + 3 * 3 + 3 * 1) / 8)


def test_rule_breakdown_is_consistent():
    stats = calc_stats(_model())
    assert sum(stats.rule_mass.values()) == pytest.approx(1.0)
    assert sum(stats.rule_rtp.values()) == pytest.approx(stats.rtp)
    winning = sum(mass for reason, mass in stats.rule_mass.items() if stats.rule_rtp[reason] > 0)
    assert winning == pytest.approx(stats.hit_rate)


def test_rtp_matches_stop_enumeration(model):
    total = 0.0
    count = 0
    for stops in product(*(range(len(reel)) for reel in model.reels)):
        symbols = [reel[i] for reel, i in zip(model.reels, stops)]
        total += payout_multiplier(*symbols, model)[0]
        count += 1
    assert calc_stats(model).rtp == pytest.approx(total / count)


def test_reels_of_different_lengths():
    stats = calc_stats(_model(reels=[['Seven'], ['Seven', 'Bar'], ['Seven', 'Bar', 'Bell', 'Lemon']]))
    assert stats.p_triple_seven == pytest.approx(1 / 8)
    assert stats.p_two_sevens == pytest.approx(1 / 2 * 3 / 4 + 1 / 2 * 1 / 4)


def test_percent_rendering():
    data = calc_stats(_model(reels=[['Seven'], ['Seven'], ['Seven']])).to_dict()
    assert data['p777'] == pytest.approx(100)
    assert data['rules']['Seven x3']['probability'] == pytest.approx(100)


def test_simulation_is_close_to_theory(model):
    empirical = simulate_rtp(model, 50000, random.Random(7))
    assert empirical == pytest.approx(calc_stats(model).rtp, abs=0.15)


def test_simulation_rejects_zero_spins(model):
    with pytest.raises(ValueError):
        simulate_rtp(model, 0)
