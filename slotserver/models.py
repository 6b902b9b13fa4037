from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class Symbol(str, Enum):
    """Символы барабанов"""
    SEVEN = 'Seven'
    BAR = 'Bar'
    BELL = 'Bell'
    CHERRY = 'Cherry'
    LEMON = 'Lemon'

    def __str__(self) -> str:
        return self.value


SYMBOLS: Tuple[Symbol, ...] = tuple(Symbol)
SYMBOL_NAMES: Tuple[str, ...] = tuple(s.value for s in Symbol)

Reel = Tuple[Symbol, ...]


@dataclass(frozen=True)
class PaytableModel:
    """Неизменяемая таблица выплат и барабаны"""
    start_balance_minor: int
    reels: Tuple[Reel, Reel, Reel]
    pay3: Mapping[Symbol, float]
    any_two_sevens_mult: float
    any_two_cherries_mult: float
    single_cherry_mult: float
    min_bet_minor: int
    allow_over_balance: bool

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь (формат API и хранилища)"""
        return {
            'startBalanceMinor': self.start_balance_minor,
            'reels': [[s.value for s in reel] for reel in self.reels],
            'pay3': {s.value: self.pay3[s] for s in SYMBOLS},
            'anyTwoSevensMult': self.any_two_sevens_mult,
            'anyTwoCherriesMult': self.any_two_cherries_mult,
            'singleCherryMult': self.single_cherry_mult,
            'minBetMinor': self.min_bet_minor,
            'allowOverBalance': self.allow_over_balance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PaytableModel':
        """Создать из проверенного словаря"""
        return cls(
            start_balance_minor=int(data['startBalanceMinor']),
            reels=tuple(tuple(Symbol(s) for s in reel) for reel in data['reels']),
            pay3=MappingProxyType({s: data['pay3'][s.value] for s in SYMBOLS}),
            any_two_sevens_mult=data['anyTwoSevensMult'],
            any_two_cherries_mult=data['anyTwoCherriesMult'],
            single_cherry_mult=data['singleCherryMult'],
            min_bet_minor=int(data['minBetMinor']),
            allow_over_balance=data['allowOverBalance'],
        )


@dataclass
class SessionRecord:
    """Запись гостевой сессии в памяти"""
    balance_minor: int
    spinning: bool = False


@dataclass(frozen=True)
class SpinOutcome:
    """Результат одного спина"""
    spin_id: str
    stops: Tuple[int, int, int]
    symbols: Tuple[Symbol, Symbol, Symbol]
    mult: float
    win_minor: int
    reason: str
    sig: str
    balance_minor: Optional[int] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Тело ответа на спин"""
        data = {
            'spinId': self.spin_id,
            'reelStops': list(self.stops),
            'winMinor': self.win_minor,
            'breakdown': {
                'symbols': [s.value for s in self.symbols],
                'mult': self.mult,
                'reason': self.reason,
            },
            'sig': self.sig,
        }
        if self.balance_minor is not None:
            data['balanceMinor'] = self.balance_minor
        return data
