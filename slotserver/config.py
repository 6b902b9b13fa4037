import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEV_HMAC_SECRET = 'dev-secret'
CONFIG_BACKENDS = ('file', 'redis', 'memory')


class Settings:
    """Настройки приложения"""

    # Security
    HMAC_SECRET: str = os.getenv('HMAC_SECRET', DEV_HMAC_SECRET)
    ADMIN_TOKEN: str = os.getenv('ADMIN_TOKEN', '')

    # Server
    HOST: str = os.getenv('HOST', '0.0.0.0')
    PORT: int = int(os.getenv('PORT', 3001))
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    # Хранилище конфигурации слота
    CONFIG_BACKEND: str = os.getenv('CONFIG_BACKEND', 'file')
    CONFIG_PATH: str = os.getenv('CONFIG_PATH', os.path.join('data', 'runtime-config.json'))
    CONFIG_KEY: str = os.getenv('CONFIG_KEY', 'slot:runtime-config')

    # Redis
    REDIS_URL: str = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

    def validate(self):
        """Валидация настроек"""
        if self.CONFIG_BACKEND not in CONFIG_BACKENDS:
            raise ValueError(f"❌ CONFIG_BACKEND must be one of {', '.join(CONFIG_BACKENDS)}")
        if not 0 < self.PORT < 65536:
            raise ValueError("❌ PORT must be between 1 and 65535")
        if self.HMAC_SECRET == DEV_HMAC_SECRET:
            logger.warning("⚠️ HMAC_SECRET не задан, используется dev-secret")
        if not self.ADMIN_TOKEN:
            logger.warning("⚠️ ADMIN_TOKEN не задан, админка закрыта")


settings = Settings()
