import logging
import math
import secrets
import uuid
from typing import Any

from slotserver.errors import BadBetError
from slotserver.games.slots import payout_multiplier, resolve_symbols
from slotserver.models import PaytableModel, SessionRecord, SpinOutcome
from slotserver.services.config_store import ConfigStore
from slotserver.services.session_ledger import SessionLedger
from slotserver.services.signing import SpinSigner

logger = logging.getLogger(__name__)


def normalize_bet(bet_minor: Any) -> int:
    """Ставка в целых минорных единицах (с округлением вниз)"""
    if isinstance(bet_minor, bool):
        raise BadBetError()
    try:
        value = float(bet_minor)
    except (TypeError, ValueError, OverflowError):
        raise BadBetError()
    if not math.isfinite(value):
        raise BadBetError()
    bet = math.floor(value)
    if bet <= 0:
        raise BadBetError()
    return bet


def check_bet(bet: int, model: PaytableModel, record: SessionRecord):
    """Минимальная ставка и покрытие балансом"""
    if bet < model.min_bet_minor:
        raise BadBetError(f"Bet below minimum of {model.min_bet_minor}")
    if not model.allow_over_balance and bet > record.balance_minor:
        raise BadBetError("Bet exceeds balance")


class SpinEngine:
    """Серверный спин: валидация ставки, выпадение, выплата, подпись"""

    def __init__(self, config_store: ConfigStore, ledger: SessionLedger, signer: SpinSigner, rng=None):
        self.config_store = config_store
        self.ledger = ledger
        self.signer = signer
        # Нужен randrange(n); в тестах подменяется детерминированным
        self.rng = rng or secrets.SystemRandom()

    def spin(self, session_id: str, bet_minor: Any) -> SpinOutcome:
        """Один спин. Либо отказ без изменений, либо полный расчёт"""
        model = self.config_store.get()
        record = self.ledger.get(session_id)

        bet = normalize_bet(bet_minor)
        check_bet(bet, model, record)

        with self.ledger.spinning(session_id) as record:
            # Баланс мог измениться, пока флаг держал другой поток
            check_bet(bet, model, record)

            stops = tuple(self.rng.randrange(len(reel)) for reel in model.reels)
            symbols = resolve_symbols(model.reels, stops)
            mult, reason = payout_multiplier(*symbols, model)
            win_minor = math.floor(bet * mult)

            spin_id = str(uuid.uuid4())
            sig = self.signer.sign(spin_id, stops, win_minor)

            balance = self.ledger.settle(session_id, bet, win_minor)

        logger.info(f"🎰 Spin settled: bet={bet}, win={win_minor}, reason={reason}, balance={balance}")

        return SpinOutcome(
            spin_id=spin_id,
            stops=stops,
            symbols=symbols,
            mult=mult,
            win_minor=win_minor,
            reason=reason,
            sig=sig,
            balance_minor=balance,
        )
