"""
Теоретическая математика слота (RTP, частота выигрышей)
"""
import random
from dataclasses import dataclass, field
from itertools import product
from typing import Dict, Optional

from slotserver.games.slots import payout_multiplier, probabilities
from slotserver.models import PaytableModel, Symbol, SYMBOLS


@dataclass
class LiveMathStats:
    """Теоретические показатели (доли, не проценты)"""
    rtp: float = 0.0
    hit_rate: float = 0.0
    p_triple_seven: float = 0.0
    p_triple_cherry: float = 0.0
    p_two_sevens: float = 0.0
    p_two_cherries: float = 0.0
    p_single_cherry: float = 0.0
    rule_mass: Dict[str, float] = field(default_factory=dict)
    rule_rtp: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        """Проценты для админки"""
        return {
            'rtp': self.rtp * 100,
            'hit': self.hit_rate * 100,
            'p777': self.p_triple_seven * 100,
            'pCherry3': self.p_triple_cherry * 100,
            'p2Seven': self.p_two_sevens * 100,
            'p2Cherry': self.p_two_cherries * 100,
            'pSingleCherry': self.p_single_cherry * 100,
            'rules': {
                reason: {'probability': mass * 100, 'rtp': self.rule_rtp[reason] * 100}
                for reason, mass in self.rule_mass.items()
            },
        }


def calc_stats(model: PaytableModel) -> LiveMathStats:
    """
    Полный перебор комбинаций символов с весами каждого барабана.

    Барабаны могут отличаться длиной и составом. Разбивка по правилам
    строится через payout_multiplier, поэтому совпадает с боевой выплатой.
    """
    reel_probs = [probabilities(reel) for reel in model.reels]
    stats = LiveMathStats()

    for a, b, c in product(SYMBOLS, repeat=3):
        p = reel_probs[0][a] * reel_probs[1][b] * reel_probs[2][c]
        if p == 0:
            continue

        mult, reason = payout_multiplier(a, b, c, model)
        stats.rtp += p * mult
        if mult > 0:
            stats.hit_rate += p
        stats.rule_mass[reason] = stats.rule_mass.get(reason, 0.0) + p
        stats.rule_rtp[reason] = stats.rule_rtp.get(reason, 0.0) + p * mult

        triple = a == b == c
        hand = (a, b, c)
        sevens = hand.count(Symbol.SEVEN)
        cherries = hand.count(Symbol.CHERRY)

        if triple and a == Symbol.SEVEN:
            stats.p_triple_seven += p
        if triple and a == Symbol.CHERRY:
            stats.p_triple_cherry += p
        if sevens == 2:
            stats.p_two_sevens += p
        if cherries == 2:
            stats.p_two_cherries += p
        # Остаток с вишней: без троек и без двух вишен
        if cherries >= 1 and not (cherries == 2 or triple):
            stats.p_single_cherry += p

    return stats


def simulate_rtp(model: PaytableModel, spins: int, rng: Optional[random.Random] = None) -> float:
    """Монте-Карло оценка RTP для сверки с calc_stats"""
    if spins <= 0:
        raise ValueError("spins must be > 0")
    rng = rng or random.Random()
    returned = 0.0
    for _ in range(spins):
        a, b, c = (reel[rng.randrange(len(reel))] for reel in model.reels)
        mult, _reason = payout_multiplier(a, b, c, model)
        returned += mult
    return returned / spins
