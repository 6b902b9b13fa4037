#!/usr/bin/env python3
"""
Проверка запущенного сервера: гостевая сессия, несколько спинов, подписи
Запуск: python scripts/smoke_spin.py --url http://localhost:3001 --spins 5 --bet 100
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Добавляем корневую директорию в путь
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotserver.client import SlotClient
from slotserver.config import settings
from slotserver.errors import SlotError
from slotserver.utils.formatters import format_currency

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def smoke(url: str, spins: int, bet: int):
    """Прогон спинов с проверкой подписи"""
    async with SlotClient(url, hmac_secret=settings.HMAC_SECRET) as client:
        health = await client.health()
        logger.info(f"✅ Server up, configHash={health['configHash']}")

        await client.create_guest_session()
        logger.info(f"👤 Balance: {format_currency(await client.get_balance())}")

        for _ in range(spins):
            try:
                result = await client.spin(bet)
            except SlotError as e:
                logger.error(f"❌ {e.kind}: {e.message}")
                raise
            breakdown = result['breakdown']
            logger.info(f"🎰 {' | '.join(breakdown['symbols'])} -> {breakdown['reason']}, "
                        f"win {format_currency(result['winMinor'])}")

        logger.info(f"💰 Final balance: {format_currency(await client.get_balance())}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Slot server smoke test')
    parser.add_argument('--url', default=f'http://localhost:{settings.PORT}')
    parser.add_argument('--spins', type=int, default=5)
    parser.add_argument('--bet', type=int, default=100)
    args = parser.parse_args()
    asyncio.run(smoke(args.url, args.spins, args.bet))
