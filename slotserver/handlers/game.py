import hashlib
import json
import platform
import time

from aiohttp import web

from slotserver.errors import BadBetError
from slotserver.handlers import read_json
from slotserver.keys import config_store_key, engine_key, ledger_key, started_at_key
from slotserver.services.signing import SIGNATURE_HEADER

routes = web.RouteTableDef()

SESSION_HEADER = 'x-session-id'


def config_hash(config: dict) -> str:
    """Короткий отпечаток активной конфигурации"""
    raw = json.dumps(config, separators=(',', ':'))
    return hashlib.sha1(raw.encode('utf-8')).hexdigest()[:12]


@routes.get('/api/v1/health')
async def health(request: web.Request) -> web.Response:
    """Состояние сервиса"""
    config = request.app[config_store_key].get().to_dict()
    return web.json_response({
        'ok': True,
        'now': int(time.time() * 1000),
        'uptimeSec': round(time.monotonic() - request.app[started_at_key], 2),
        'python': platform.python_version(),
        'configHash': config_hash(config),
    })


@routes.post('/api/v1/auth/guest')
async def guest(request: web.Request) -> web.Response:
    """Создать гостевую сессию"""
    session_id = request.app[ledger_key].create_guest_session()
    return web.json_response({'sessionId': session_id})


@routes.get('/api/v1/wallet/balance')
async def balance(request: web.Request) -> web.Response:
    """Баланс сессии"""
    session_id = request.headers.get(SESSION_HEADER)
    return web.json_response({'balanceMinor': request.app[ledger_key].get_balance(session_id)})


@routes.post('/api/v1/slot/spin')
async def spin(request: web.Request) -> web.Response:
    """Спин. Подпись дублируется в заголовке и в теле"""
    session_id = request.headers.get(SESSION_HEADER)
    # Неизвестная сессия важнее кривого тела
    request.app[ledger_key].get(session_id)

    body = await read_json(request, BadBetError)
    if not isinstance(body, dict):
        raise BadBetError()

    outcome = request.app[engine_key].spin(session_id, body.get('betMinor'))
    return web.json_response(outcome.to_dict(), headers={SIGNATURE_HEADER: outcome.sig})
