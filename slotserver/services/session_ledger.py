import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from slotserver.errors import SpinInProgressError, UnauthorizedError
from slotserver.models import SessionRecord

logger = logging.getLogger(__name__)


class SessionLedger:
    """Гостевые сессии и их балансы (только в памяти процесса)"""

    def __init__(self, config_store):
        self.config_store = config_store
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create_guest_session(self) -> str:
        """Создать гостевую сессию со стартовым балансом"""
        session_id = str(uuid.uuid4())
        balance = self.config_store.get().start_balance_minor
        with self._lock:
            self._sessions[session_id] = SessionRecord(balance_minor=balance)
        logger.info(f"👤 Guest session created: balance={balance}")
        return session_id

    def get(self, session_id: Optional[str]) -> SessionRecord:
        """Запись сессии. Идентификатор - единственная проверка доступа"""
        record = self._sessions.get(session_id) if session_id else None
        if record is None:
            raise UnauthorizedError()
        return record

    def get_balance(self, session_id: Optional[str]) -> int:
        """Получить баланс сессии"""
        return self.get(session_id).balance_minor

    @contextmanager
    def spinning(self, session_id: str) -> Iterator[SessionRecord]:
        """Флаг спина: второй спин той же сессии отклоняется, а не ждёт"""
        record = self.get(session_id)
        with self._lock:
            if record.spinning:
                raise SpinInProgressError()
            record.spinning = True
        try:
            yield record
        finally:
            record.spinning = False

    def settle(self, session_id: str, bet_minor: int, win_minor: int) -> int:
        """Списать ставку и начислить выигрыш"""
        record = self.get(session_id)
        record.balance_minor -= bet_minor
        record.balance_minor += win_minor
        return record.balance_minor

    def clear(self):
        """Удалить все сессии"""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.info(f"🧹 Session table cleared: {count} sessions")
