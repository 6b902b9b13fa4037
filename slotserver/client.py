"""
Клиент API слота с проверкой подписи спина.

    async with SlotClient('http://localhost:3001', hmac_secret='dev-secret') as client:
        await client.create_guest_session()
        result = await client.spin(100)
"""
import logging
from typing import Any, Dict, Optional

import aiohttp

from slotserver.errors import ConfigValidationError, ERRORS_BY_KIND, SlotError
from slotserver.services.signing import SIGNATURE_HEADER, verify_spin_payload

logger = logging.getLogger(__name__)


class SlotClient:
    """Асинхронный клиент поверх aiohttp.ClientSession"""

    def __init__(self, base_url: str, hmac_secret: str, admin_token: Optional[str] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip('/')
        self.hmac_secret = hmac_secret
        self.admin_token = admin_token
        self.session_id: Optional[str] = None
        self._http = session
        self._owns_http = session is None

    async def __aenter__(self) -> 'SlotClient':
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        if self._http is not None and self._owns_http:
            await self._http.close()
        self._http = None

    async def _request(self, method: str, path: str, headers: Optional[Dict[str, str]] = None,
                       json: Any = None):
        async with self._http.request(method, self.base_url + path, headers=headers, json=json) as resp:
            try:
                data = await resp.json(content_type=None)
            except ValueError:
                data = None
            if resp.status >= 400:
                raise self._error_from(data, resp.status)
            return data, resp.headers.get(SIGNATURE_HEADER)

    @staticmethod
    def _error_from(data: Any, status: int) -> SlotError:
        error = data.get('error', {}) if isinstance(data, dict) else {}
        kind = error.get('kind')
        message = error.get('message') or f"HTTP {status}"
        if kind == ConfigValidationError.kind:
            return ConfigValidationError(error.get('issues') or [message])
        cls = ERRORS_BY_KIND.get(kind, SlotError)
        return cls(message)

    def _session_headers(self) -> Dict[str, str]:
        return {'x-session-id': self.session_id or ''}

    def _admin_headers(self) -> Dict[str, str]:
        return {'x-admin-token': self.admin_token or ''}

    async def create_guest_session(self) -> str:
        """Новая гостевая сессия (запоминается в клиенте)"""
        data, _ = await self._request('POST', '/api/v1/auth/guest')
        self.session_id = data['sessionId']
        return self.session_id

    async def get_balance(self) -> int:
        data, _ = await self._request('GET', '/api/v1/wallet/balance', headers=self._session_headers())
        return data['balanceMinor']

    async def spin(self, bet_minor: int) -> Dict[str, Any]:
        """Спин; результат с неверной подписью не возвращается"""
        data, header_sig = await self._request(
            'POST', '/api/v1/slot/spin',
            headers=self._session_headers(),
            json={'betMinor': bet_minor},
        )
        try:
            verify_spin_payload(self.hmac_secret, data, header_sig)
        except SlotError:
            spin_id = data.get('spinId') if isinstance(data, dict) else None
            logger.error(f"❌ Spin {spin_id} failed signature check, discarding")
            raise
        return data

    async def get_config(self) -> Dict[str, Any]:
        data, _ = await self._request('GET', '/api/v1/admin/config', headers=self._admin_headers())
        return data

    async def update_config(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        data, _ = await self._request('PUT', '/api/v1/admin/config', headers=self._admin_headers(), json=partial)
        return data['config']

    async def reset_config(self) -> Dict[str, Any]:
        data, _ = await self._request('POST', '/api/v1/admin/config/reset', headers=self._admin_headers())
        return data['config']

    async def preview_config(self, partial: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        data, _ = await self._request(
            'POST', '/api/v1/admin/config/preview',
            headers=self._admin_headers(),
            json=partial or {},
        )
        return data

    async def health(self) -> Dict[str, Any]:
        data, _ = await self._request('GET', '/api/v1/health')
        return data
