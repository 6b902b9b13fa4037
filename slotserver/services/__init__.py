from slotserver.services.config_store import ConfigStore
from slotserver.services.session_ledger import SessionLedger
from slotserver.services.signing import SpinSigner
from slotserver.services.spin_engine import SpinEngine

__all__ = ['ConfigStore', 'SessionLedger', 'SpinSigner', 'SpinEngine']
