#!/usr/bin/env python3
"""
Отчёт по теоретическому RTP сохранённой конфигурации
Запуск: python scripts/rtp_report.py [--simulate 1000000] [--seed 42]
"""
import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

# Добавляем корневую директорию в путь
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotserver.config import settings
from slotserver.games.live_math import calc_stats, simulate_rtp
from slotserver.services.config_store import ConfigStore
from slotserver.storage import create_blob_store
from slotserver.utils.formatters import format_currency, format_percent

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(simulate: int, seed: int):
    """Загрузить конфигурацию и вывести показатели"""
    blob_store = create_blob_store(settings)
    try:
        model = await ConfigStore(blob_store, key=settings.CONFIG_KEY).load()
    finally:
        await blob_store.close()

    stats = calc_stats(model)
    logger.info(f"💰 Start balance: {format_currency(model.start_balance_minor)}, "
                f"min bet: {format_currency(model.min_bet_minor)}")
    logger.info(f"📊 RTP: {format_percent(stats.rtp)}")
    logger.info(f"🎯 Hit rate: {format_percent(stats.hit_rate)}")
    logger.info(f"  - 777: {format_percent(stats.p_triple_seven, 4)}")
    logger.info(f"  - Cherry x3: {format_percent(stats.p_triple_cherry, 4)}")
    logger.info(f"  - Any 2 Sevens: {format_percent(stats.p_two_sevens)}")
    logger.info(f"  - Any 2 Cherries: {format_percent(stats.p_two_cherries)}")
    logger.info(f"  - Single Cherry: {format_percent(stats.p_single_cherry)}")
    for reason, mass in sorted(stats.rule_mass.items(), key=lambda item: -stats.rule_rtp[item[0]]):
        logger.info(f"  {reason}: p={format_percent(mass)}, rtp={format_percent(stats.rule_rtp[reason])}")

    if simulate:
        empirical = simulate_rtp(model, simulate, random.Random(seed))
        logger.info(f"🎲 Simulated RTP over {simulate:,} spins: {format_percent(empirical)} "
                    f"(delta {format_percent(empirical - stats.rtp, 3)})")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Slot RTP report')
    parser.add_argument('--simulate', type=int, default=0, help='Monte Carlo spins for cross-check')
    parser.add_argument('--seed', type=int, default=42)
    args = parser.parse_args()
    asyncio.run(main(args.simulate, args.seed))
