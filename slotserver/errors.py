"""
Ошибки сервиса слотов
"""
from typing import Any, Dict, List, Optional


class SlotError(Exception):
    """Базовая ошибка со стабильным kind и HTTP статусом"""

    kind: str = 'Error'
    status: int = 500
    default_message: str = 'Internal error'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Тело ответа с ошибкой"""
        return {'ok': False, 'error': {'kind': self.kind, 'message': self.message}}


class UnauthorizedError(SlotError):
    """Неизвестная сессия или неверный токен администратора"""

    kind = 'Unauthorized'
    status = 401
    default_message = 'Unauthorized'


class BadBetError(SlotError):
    """Ставка не прошла нормализацию или проверки"""

    kind = 'BadBet'
    status = 400
    default_message = 'Bad bet'


class SpinInProgressError(SlotError):
    """Для этой сессии уже идёт спин"""

    kind = 'SpinInProgress'
    status = 429
    default_message = 'Spin in progress'


class ConfigValidationError(SlotError):
    """Конфигурация нарушает инварианты"""

    kind = 'ConfigValidation'
    status = 400
    default_message = 'Invalid config'

    def __init__(self, issues: List[str]):
        self.issues = list(issues) or [self.default_message]
        super().__init__('; '.join(self.issues))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['error']['issues'] = self.issues
        return data


class ConfigStorageError(SlotError):
    """Не удалось прочитать или записать конфигурацию"""

    kind = 'ConfigStorage'
    status = 500
    default_message = 'Config storage failure'


class IntegrityMismatchError(SlotError):
    """Подпись результата спина не совпала (проверка на клиенте)"""

    kind = 'IntegrityMismatch'
    status = 502
    default_message = 'Invalid signature'


ERRORS_BY_KIND = {
    cls.kind: cls
    for cls in (
        UnauthorizedError,
        BadBetError,
        SpinInProgressError,
        ConfigStorageError,
        IntegrityMismatchError,
    )
}
