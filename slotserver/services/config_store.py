"""
Хранилище активной конфигурации слота: валидация, частичное обновление,
сброс к встроенным значениям, сохранение и загрузка.
"""
import asyncio
import json
import logging
import math
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from slotserver.errors import ConfigStorageError, ConfigValidationError
from slotserver.games.defaults import default_config
from slotserver.models import PaytableModel, SYMBOL_NAMES
from slotserver.storage import BlobStore

logger = logging.getLogger(__name__)

CONFIG_FIELDS = (
    'startBalanceMinor',
    'reels',
    'pay3',
    'anyTwoSevensMult',
    'anyTwoCherriesMult',
    'singleCherryMult',
    'minBetMinor',
    'allowOverBalance',
)
MULTIPLIER_FIELDS = ('anyTwoSevensMult', 'anyTwoCherriesMult', 'singleCherryMult')
REEL_COUNT = 3
# Граница точных целых в JSON-клиентах
MAX_SAFE_NUMBER = 2 ** 53 - 1


def _is_number(value: Any) -> bool:
    # bool - подкласс int, но числом не считается
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return abs(value) <= MAX_SAFE_NUMBER


def _is_whole(value: Any) -> bool:
    if not _is_number(value):
        return False
    return isinstance(value, int) or value.is_integer()


def collect_config_issues(cfg: Any) -> List[str]:
    """Все нарушения в кандидате конфигурации (пустой список - валиден)"""
    if not isinstance(cfg, dict):
        return ['Config must be an object']

    issues = []

    start_balance = cfg.get('startBalanceMinor')
    if not _is_whole(start_balance) or start_balance < 0:
        issues.append('startBalanceMinor must be a non-negative integer')

    reels = cfg.get('reels')
    if not isinstance(reels, list) or len(reels) != REEL_COUNT:
        issues.append(f'reels must be an array of {REEL_COUNT} arrays')
    else:
        for i, reel in enumerate(reels):
            if not isinstance(reel, list) or not reel:
                issues.append(f'reel {i} must be a non-empty array')
                continue
            for j, symbol in enumerate(reel):
                if symbol not in SYMBOL_NAMES:
                    issues.append(f'Invalid symbol "{symbol}" in reel {i} at #{j}')

    pay3 = cfg.get('pay3')
    if not isinstance(pay3, dict):
        issues.append('pay3 missing')
    else:
        for name in SYMBOL_NAMES:
            value = pay3.get(name)
            if not _is_number(value) or value < 0:
                issues.append(f'pay3.{name} must be >= 0')

    for key in MULTIPLIER_FIELDS:
        value = cfg.get(key)
        if not _is_number(value) or value < 0:
            issues.append(f'{key} must be >= 0')

    min_bet = cfg.get('minBetMinor')
    if not _is_whole(min_bet) or min_bet <= 0:
        issues.append('minBetMinor must be a positive integer')

    if not isinstance(cfg.get('allowOverBalance'), bool):
        issues.append('allowOverBalance must be boolean')

    return issues


def validate_config(cfg: Any):
    """Бросает ConfigValidationError со списком всех нарушений"""
    issues = collect_config_issues(cfg)
    if issues:
        raise ConfigValidationError(issues)


def merge_config(base: Dict[str, Any], partial: Any) -> Dict[str, Any]:
    """
    Наложить частичное обновление на базовую конфигурацию.

    pay3 сливается по символам, остальные поля (включая массивы)
    заменяются целиком. Неизвестные поля отклоняются.
    """
    if not isinstance(partial, dict):
        raise ConfigValidationError(['Config must be an object'])

    issues = [f'Unknown config field "{key}"' for key in partial if key not in CONFIG_FIELDS]
    merged = deepcopy(base)

    for key, value in partial.items():
        if key not in CONFIG_FIELDS:
            continue
        if key == 'pay3' and isinstance(value, dict):
            issues.extend(
                f'Unknown pay3 symbol "{name}"' for name in value if name not in SYMBOL_NAMES
            )
            current = merged.get('pay3')
            pay3 = dict(current) if isinstance(current, dict) else {}
            pay3.update(deepcopy(value))
            merged['pay3'] = pay3
        else:
            merged[key] = deepcopy(value)

    if issues:
        raise ConfigValidationError(issues)
    return merged


def build_model(cfg: Dict[str, Any]) -> PaytableModel:
    """Проверить словарь и собрать неизменяемую модель"""
    validate_config(cfg)
    return PaytableModel.from_dict(cfg)


def default_model() -> PaytableModel:
    return build_model(default_config())


class ConfigStore:
    """Активная модель выплат процесса"""

    def __init__(self, blob_store: BlobStore, key: str = 'slot:runtime-config'):
        self.blob_store = blob_store
        self.key = key
        self._current = default_model()
        # Сериализует админские изменения, чтение не блокирует
        self._lock = asyncio.Lock()

    def get(self) -> PaytableModel:
        """Текущая модель (неизменяемый снимок)"""
        return self._current

    async def set(self, partial: Any) -> PaytableModel:
        """Частичное обновление: слияние, проверка, сохранение, замена ссылки"""
        async with self._lock:
            merged = merge_config(self._current.to_dict(), partial)
            candidate = build_model(merged)
            await self._save(candidate)
            self._current = candidate
            logger.info(f"⚙️ Config updated: fields={', '.join(sorted(partial))}")
            return candidate

    async def reset(self) -> PaytableModel:
        """Сброс к встроенной конфигурации"""
        async with self._lock:
            candidate = default_model()
            await self._save(candidate)
            self._current = candidate
            logger.info("♻️ Config reset to defaults")
            return candidate

    def preview(self, partial: Any = None) -> Tuple[List[str], Optional[PaytableModel]]:
        """Слияние без сохранения: список нарушений и модель (если валидна)"""
        try:
            merged = merge_config(self._current.to_dict(), {} if partial is None else partial)
        except ConfigValidationError as e:
            return e.issues, None
        issues = collect_config_issues(merged)
        if issues:
            return issues, None
        return [], PaytableModel.from_dict(merged)

    async def load(self) -> PaytableModel:
        """Загрузка при старте. Любая проблема - откат к встроенной конфигурации"""
        async with self._lock:
            try:
                raw = await self.blob_store.get(self.key)
            except ConfigStorageError as e:
                logger.error(f"❌ Config read failed, using defaults: {e}")
                raw = None

            if raw is not None:
                try:
                    data = json.loads(raw)
                    self._current = build_model(merge_config(default_config(), data))
                    logger.info("✅ Config loaded from storage")
                    return self._current
                except (ValueError, TypeError, OverflowError, RecursionError, ConfigValidationError) as e:
                    logger.warning(f"⚠️ Stored config rejected, falling back to defaults: {e}")

            self._current = default_model()
            try:
                await self._save(self._current)
            except ConfigStorageError as e:
                logger.error(f"❌ Could not persist default config: {e}")
            return self._current

    async def _save(self, model: PaytableModel):
        await self.blob_store.set(self.key, json.dumps(model.to_dict(), indent=2))
