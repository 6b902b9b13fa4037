"""Общие фикстуры тестов."""

import sys
from pathlib import Path

import pytest


def _ensure_repo_on_path() -> None:
    """Импорт пакета без установки в editable режиме."""
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from slotserver.config import Settings  # noqa: E402
from slotserver.services.config_store import ConfigStore, default_model  # noqa: E402
from slotserver.services.session_ledger import SessionLedger  # noqa: E402
from slotserver.services.signing import SpinSigner  # noqa: E402
from slotserver.services.spin_engine import SpinEngine  # noqa: E402
from slotserver.storage import MemoryBlobStore  # noqa: E402

SECRET = 'dev-secret'
ADMIN_TOKEN = 'admin-token'

# Позиции на встроенных барабанах
SEVEN_SEVEN_BAR = [0, 0, 1]
SEVEN_X3 = [0, 0, 0]
CHERRY_X3 = [7, 6, 5]
CHERRY_CHERRY_BAR = [7, 6, 1]
CHERRY_BAR_BAR = [7, 1, 1]
SEVEN_SEVEN_CHERRY = [0, 0, 5]
BAR_BELL_BAR = [2, 4, 1]


class ScriptedRandom:
    """randrange по заранее заданному списку стопов"""

    def __init__(self, stops):
        self.stops = list(stops)
        self.calls = []

    def randrange(self, n):
        value = self.stops.pop(0)
        assert 0 <= value < n
        self.calls.append(n)
        return value


def make_settings(**overrides) -> Settings:
    app_settings = Settings()
    app_settings.HMAC_SECRET = SECRET
    app_settings.ADMIN_TOKEN = ADMIN_TOKEN
    app_settings.CONFIG_BACKEND = 'memory'
    app_settings.CONFIG_KEY = 'slot:test-config'
    for key, value in overrides.items():
        setattr(app_settings, key, value)
    return app_settings


@pytest.fixture
def model():
    return default_model()


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def config_store(blob_store):
    return ConfigStore(blob_store, key='slot:test-config')


@pytest.fixture
def ledger(config_store):
    return SessionLedger(config_store)


@pytest.fixture
def make_engine(config_store, ledger):
    def _make(stops=None, rng=None):
        return SpinEngine(config_store, ledger, SpinSigner(SECRET), rng=rng or ScriptedRandom(stops or []))
    return _make
