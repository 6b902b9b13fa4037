"""
Хранилища для конфигурации слота (ключ -> строка JSON)
"""
import logging
import os
from pathlib import Path
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from slotserver.errors import ConfigStorageError

logger = logging.getLogger(__name__)


class BlobStore:
    """Базовый интерфейс хранилища"""

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set(self, key: str, value: str):
        raise NotImplementedError

    async def close(self):
        pass


class MemoryBlobStore(BlobStore):
    """Хранилище в памяти процесса"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str):
        self.data[key] = value


class FileBlobStore(BlobStore):
    """Один файл на хранилище, ключ игнорируется"""

    def __init__(self, path):
        self.path = Path(path)

    async def get(self, key: str) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigStorageError(f"Cannot read {self.path}: {e}") from e

    async def set(self, key: str, value: str):
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding='utf-8')
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise ConfigStorageError(f"Cannot write {self.path}: {e}") from e


class RedisBlobStore(BlobStore):
    """Хранилище в Redis"""

    def __init__(self, url: Optional[str] = None, client=None):
        self.url = url
        self.client = client

    async def connect(self):
        """Подключение к Redis"""
        if self.client is None:
            self.client = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True
            )
        try:
            await self.client.ping()
            logger.info("✅ Redis подключение установлено")
        except RedisError as e:
            logger.error(f"❌ Ошибка подключения к Redis: {e}")
            raise ConfigStorageError(f"Redis unavailable: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        if self.client is None:
            await self.connect()
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise ConfigStorageError(f"Redis read failed: {e}") from e

    async def set(self, key: str, value: str):
        if self.client is None:
            await self.connect()
        try:
            await self.client.set(key, value)
        except RedisError as e:
            raise ConfigStorageError(f"Redis write failed: {e}") from e

    async def close(self):
        """Отключение от Redis"""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.info("✅ Redis соединение закрыто")


def create_blob_store(settings) -> BlobStore:
    """Хранилище по настройке CONFIG_BACKEND"""
    if settings.CONFIG_BACKEND == 'redis':
        return RedisBlobStore(settings.REDIS_URL)
    if settings.CONFIG_BACKEND == 'memory':
        return MemoryBlobStore()
    return FileBlobStore(settings.CONFIG_PATH)
