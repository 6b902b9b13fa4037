from typing import Dict, Sequence, Tuple

from slotserver.models import PaytableModel, Reel, Symbol, SYMBOLS

REASON_NO_WIN = 'No win'
REASON_TWO_SEVENS = 'Any 2 Sevens'
REASON_TWO_CHERRIES = 'Any 2 Cherries'
REASON_SINGLE_CHERRY = 'Single Cherry'


def triple_reason(symbol: Symbol) -> str:
    return f"{symbol.value} x3"


def probabilities(reel: Sequence[Symbol]) -> Dict[Symbol, float]:
    """Доля каждого символа на ленте барабана"""
    total = len(reel) or 1  # пустой барабан отсекается валидацией
    counts = {s: 0 for s in SYMBOLS}
    for s in reel:
        counts[Symbol(s)] += 1
    return {s: counts[s] / total for s in SYMBOLS}


def payout_multiplier(a: Symbol, b: Symbol, c: Symbol, model: PaytableModel) -> Tuple[float, str]:
    """
    Множитель выплаты и название правила.
    Правила проверяются строго по порядку, срабатывает первое.
    """
    if a == b == c:
        return model.pay3[a], triple_reason(a)

    hand = (a, b, c)
    sevens = hand.count(Symbol.SEVEN)
    cherries = hand.count(Symbol.CHERRY)

    if sevens == 2:
        return model.any_two_sevens_mult, REASON_TWO_SEVENS
    if cherries == 2:
        return model.any_two_cherries_mult, REASON_TWO_CHERRIES
    if cherries >= 1:
        return model.single_cherry_mult, REASON_SINGLE_CHERRY

    return 0, REASON_NO_WIN


def resolve_symbols(reels: Sequence[Reel], stops: Sequence[int]) -> Tuple[Symbol, Symbol, Symbol]:
    """Символы на выпавших позициях"""
    return tuple(reel[stop] for reel, stop in zip(reels, stops))
