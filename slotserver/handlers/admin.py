import hmac
import logging

from aiohttp import web

from slotserver.errors import ConfigValidationError, UnauthorizedError
from slotserver.games.live_math import calc_stats
from slotserver.handlers import read_json
from slotserver.keys import config_store_key, settings_key

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()

ADMIN_HEADER = 'x-admin-token'


def is_admin(request: web.Request) -> bool:
    """Проверка токена администратора. Без настроенного токена доступа нет"""
    expected = request.app[settings_key].ADMIN_TOKEN or ''
    token = request.headers.get(ADMIN_HEADER, '')
    if not expected:
        return False
    return hmac.compare_digest(token.encode('utf-8'), expected.encode('utf-8'))


def require_admin(request: web.Request):
    if not is_admin(request):
        logger.warning(f"🚫 Admin access denied: {request.method} {request.path}")
        raise UnauthorizedError()


@routes.get('/api/v1/admin/config')
async def get_config(request: web.Request) -> web.Response:
    """Активная конфигурация"""
    require_admin(request)
    return web.json_response(request.app[config_store_key].get().to_dict())


@routes.put('/api/v1/admin/config')
async def update_config(request: web.Request) -> web.Response:
    """Частичное обновление конфигурации"""
    require_admin(request)
    partial = await read_json(request, ConfigValidationError, issues=['Body must be valid JSON'])
    model = await request.app[config_store_key].set(partial)
    return web.json_response({'ok': True, 'config': model.to_dict()})


@routes.post('/api/v1/admin/config/reset')
async def reset_config(request: web.Request) -> web.Response:
    """Сброс к встроенной конфигурации"""
    require_admin(request)
    model = await request.app[config_store_key].reset()
    return web.json_response({'ok': True, 'config': model.to_dict()})


@routes.post('/api/v1/admin/config/preview')
async def preview_config(request: web.Request) -> web.Response:
    """RTP и список ошибок для несохранённой правки, без применения"""
    require_admin(request)
    partial = await read_json(request, ConfigValidationError, issues=['Body must be valid JSON'])
    issues, model = request.app[config_store_key].preview(partial)
    return web.json_response({
        'ok': not issues,
        'issues': issues,
        'stats': calc_stats(model).to_dict() if model else None,
    })
