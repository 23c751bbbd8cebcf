__version__ = "1.0.0"

from .facts import Fact
from .fact_store import FactStore, FactStoreStats, ImportRejected
from .modes import Mode, next_mode
from .response_composer import ComposedResponse, ResponseEngine, SessionState
from .session import BrainnovaSession, SessionBusy, SessionConfig, SessionResponse

__all__ = [
    '__version__',
    'Fact',
    'FactStore',
    'FactStoreStats',
    'ImportRejected',
    'Mode',
    'next_mode',
    'ComposedResponse',
    'ResponseEngine',
    'SessionState',
    'BrainnovaSession',
    'SessionBusy',
    'SessionConfig',
    'SessionResponse',
]
