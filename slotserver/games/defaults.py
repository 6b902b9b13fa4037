"""
Встроенная конфигурация слота.
Значения в минорных единицах (центы) и множителях ставки.
"""
from copy import deepcopy
from typing import Any, Dict

# Чем чаще символ встречается на ленте, тем выше его шанс
DEFAULT_CONFIG: Dict[str, Any] = {
    'startBalanceMinor': 100000,  # $1000.00 для новой гостевой сессии
    'reels': [
        [
            'Seven', 'Seven',
            'Bar', 'Bar', 'Bar',
            'Bell', 'Bell',
            'Cherry', 'Cherry', 'Cherry', 'Cherry',
            'Lemon', 'Lemon', 'Lemon', 'Lemon',
        ],
        [
            'Seven',
            'Bar', 'Bar', 'Bar',
            'Bell', 'Bell',
            'Cherry', 'Cherry', 'Cherry', 'Cherry',
            'Lemon', 'Lemon', 'Lemon', 'Lemon',
            'Seven', 'Lemon',
        ],
        [
            'Seven',
            'Bar', 'Bar',
            'Bell', 'Bell',
            'Cherry', 'Cherry', 'Cherry',
            'Lemon', 'Lemon', 'Lemon',
            'Seven', 'Bar', 'Cherry', 'Lemon', 'Bell',
        ],
    ],
    # Три одинаковых символа
    'pay3': {
        'Seven': 100,
        'Bar': 40,
        'Bell': 20,
        'Cherry': 10,
        'Lemon': 0,
    },
    'anyTwoSevensMult': 5,    # Две семёрки + любой третий
    'anyTwoCherriesMult': 3,  # Две вишни + любой третий
    'singleCherryMult': 1,    # Хотя бы одна вишня
    'minBetMinor': 100,
    'allowOverBalance': False,  # true не для реальных денег
}


def default_config() -> Dict[str, Any]:
    """Свежая копия встроенной конфигурации"""
    return deepcopy(DEFAULT_CONFIG)
