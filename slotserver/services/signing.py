"""
Подпись результата спина (HMAC-SHA256).

Сообщение: spinId|stop0,stop1,stop2|winMinor
Клиент с тем же секретом пересчитывает подпись и сверяет её
с заголовком x-spin-sig или полем sig. Это защита от подмены,
а не шифрование: стопы и выигрыш передаются открыто.
"""
import hashlib
import hmac
from typing import Any, Dict, Optional, Sequence

from slotserver.errors import IntegrityMismatchError

SIGNATURE_HEADER = 'x-spin-sig'


def canonical_message(spin_id: str, stops: Sequence[int], win_minor: int) -> str:
    """Каноническая строка для подписи"""
    return f"{spin_id}|{','.join(str(int(s)) for s in stops)}|{win_minor}"


def sign_message(secret: str, message: str) -> str:
    return hmac.new(secret.encode('utf-8'), message.encode('utf-8'), hashlib.sha256).hexdigest()


class SpinSigner:
    """Подписывает результаты спинов секретом сервера"""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("HMAC secret must not be empty")
        self._secret = secret

    def sign(self, spin_id: str, stops: Sequence[int], win_minor: int) -> str:
        return sign_message(self._secret, canonical_message(spin_id, stops, win_minor))


def verify_spin_payload(secret: str, payload: Dict[str, Any], header_sig: Optional[str] = None) -> str:
    """
    Проверка на стороне клиента. Возвращает подпись или бросает
    IntegrityMismatchError, и тогда результат нельзя показывать.
    """
    try:
        message = canonical_message(payload['spinId'], payload['reelStops'], payload['winMinor'])
    except (KeyError, TypeError, ValueError) as e:
        raise IntegrityMismatchError(f"Malformed spin payload: {e}") from e

    server_sig = header_sig or payload.get('sig') or ''
    local_sig = sign_message(secret, message)
    if not hmac.compare_digest(local_sig, str(server_sig)):
        raise IntegrityMismatchError()
    return local_sig
