import logging
from typing import Any, Type

from aiohttp import web

from slotserver.errors import SlotError

logger = logging.getLogger(__name__)


@web.middleware
async def error_middleware(request: web.Request, handler):
    """SlotError -> JSON {ok: false, error: {kind, message}}"""
    try:
        return await handler(request)
    except SlotError as e:
        if e.status >= 500:
            logger.error(f"❌ {request.method} {request.path}: {e.kind}: {e.message}")
        return web.json_response(e.to_dict(), status=e.status)


async def read_json(request: web.Request, error_cls: Type[SlotError], **error_kwargs) -> Any:
    """Тело запроса как JSON; пустое тело - пустой объект"""
    if not request.can_read_body:
        return {}
    try:
        return await request.json()
    except ValueError:
        raise error_cls(**error_kwargs)
