import logging
import time

from aiohttp import web

from slotserver.config import settings as default_settings
from slotserver.handlers import admin, error_middleware, game
from slotserver.keys import (
    blob_store_key,
    config_store_key,
    engine_key,
    ledger_key,
    settings_key,
    started_at_key,
)
from slotserver.services.config_store import ConfigStore
from slotserver.services.session_ledger import SessionLedger
from slotserver.services.signing import SpinSigner
from slotserver.services.spin_engine import SpinEngine
from slotserver.storage import BlobStore, create_blob_store

logger = logging.getLogger(__name__)


async def on_startup(app: web.Application):
    """Загрузка конфигурации из хранилища"""
    model = await app[config_store_key].load()
    logger.info(f"🎰 Slot server ready: minBet={model.min_bet_minor}, startBalance={model.start_balance_minor}")


async def on_cleanup(app: web.Application):
    """Сессии не переживают рестарт"""
    app[ledger_key].clear()
    await app[blob_store_key].close()


def create_app(app_settings=None, blob_store: BlobStore = None, rng=None) -> web.Application:
    """Собрать aiohttp приложение со всеми сервисами"""
    app_settings = app_settings or default_settings
    blob_store = blob_store or create_blob_store(app_settings)

    config_store = ConfigStore(blob_store, key=app_settings.CONFIG_KEY)
    ledger = SessionLedger(config_store)
    engine = SpinEngine(config_store, ledger, SpinSigner(app_settings.HMAC_SECRET), rng=rng)

    app = web.Application(middlewares=[error_middleware])
    app[settings_key] = app_settings
    app[blob_store_key] = blob_store
    app[config_store_key] = config_store
    app[ledger_key] = ledger
    app[engine_key] = engine
    app[started_at_key] = time.monotonic()

    app.add_routes(game.routes)
    app.add_routes(admin.routes)
    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)
    return app
