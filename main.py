import asyncio
import logging

from aiohttp import web

from slotserver.config import settings as app_settings
from slotserver.app import create_app

# Настройка логирования
logging.basicConfig(
    level=getattr(logging, app_settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Главная функция запуска сервера"""
    app_settings.validate()
    app = create_app(app_settings)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, app_settings.HOST, app_settings.PORT)
    await site.start()
    logger.info(f"🎰 Slot server listening on http://{app_settings.HOST}:{app_settings.PORT}")

    # Держим сервер запущенным
    try:
        await asyncio.Future()
    finally:
        await runner.cleanup()


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("👋 Server stopped")
