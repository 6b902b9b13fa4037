from aiohttp import web

from slotserver.services.config_store import ConfigStore
from slotserver.services.session_ledger import SessionLedger
from slotserver.services.spin_engine import SpinEngine
from slotserver.storage import BlobStore

settings_key = web.AppKey('settings', object)
blob_store_key = web.AppKey('blob_store', BlobStore)
config_store_key = web.AppKey('config_store', ConfigStore)
ledger_key = web.AppKey('ledger', SessionLedger)
engine_key = web.AppKey('engine', SpinEngine)
started_at_key = web.AppKey('started_at', float)
