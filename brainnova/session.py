"""
Unified session management for Brainnova.

This module wires the pieces a text interface needs (fact store, storage
backend, external lookup, response engine, conversation state) behind one
object, so the CLI or any other front end only deals with messages,
mode toggles and backups.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from brainnova.fact_store import FactStore, FactStoreStats
from brainnova.knowledge_augmenter import WikipediaLookup
from brainnova.modes import MODE_INFO, Mode, ModeInfo, next_mode
from brainnova.response_composer import ResponseEngine, SessionState
from brainnova.storage_bridge import JsonFileStorage

logger = logging.getLogger(__name__)

BOOT_MESSAGE = (
    "System Online. Ready for input.\n"
    "Try: `teach: {\"topic\":\"x\", \"core\":\"y\"}`"
)


def _truthy(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


class SessionBusy(RuntimeError):
    """Raised when a message arrives while another is still being answered."""


@dataclass
class SessionConfig:
    """Configuration for a Brainnova session."""

    # Storage
    data_path: str = "data"
    db_filename: str = "brainnova_db.json"

    # Web mode
    enable_web_lookup: bool = True
    lookup_timeout: float = 5.0

    initial_mode: Mode = Mode.STANDARD

    @property
    def db_path(self) -> Path:
        return Path(self.data_path) / self.db_filename

    @classmethod
    def from_env(cls) -> 'SessionConfig':
        """Defaults overridden by BRAINNOVA_* environment variables."""
        config = cls()
        config.data_path = os.getenv("BRAINNOVA_DATA_PATH", config.data_path)
        config.enable_web_lookup = _truthy("BRAINNOVA_WEB_ENABLE", config.enable_web_lookup)
        timeout = os.getenv("BRAINNOVA_LOOKUP_TIMEOUT")
        if timeout:
            try:
                config.lookup_timeout = float(timeout)
            except ValueError:
                logger.warning(f"Ignoring BRAINNOVA_LOOKUP_TIMEOUT={timeout!r}")
        return config


@dataclass
class SessionResponse:
    """Response from processing a message."""

    text: str
    reason: str
    confidence: int
    mode: Mode = Mode.STANDARD

    @property
    def mode_info(self) -> ModeInfo:
        return MODE_INFO[self.mode]


class BrainnovaSession:
    """
    Session manager for one Brainnova conversation.

    Usage:
        session = BrainnovaSession(config=SessionConfig(data_path="data"))
        response = session.process_message("Rust is a programming language")
        print(response.text)          # asks for confirmation
        session.process_message("yes")
    """

    def __init__(self,
                 config: Optional[SessionConfig] = None,
                 storage=None,  # Optional pre-configured backend
                 lookup=None):  # Optional pre-configured lookup
        """
        Initialize a session and load the fact store.

        Args:
            config: Session configuration
            storage: Storage backend; defaults to a JSON file under data_path
            lookup: External lookup; defaults to Wikipedia when enabled
        """
        self.config = config or SessionConfig()

        if storage is None:
            storage = JsonFileStorage(self.config.db_path)

        if lookup is None and self.config.enable_web_lookup:
            lookup = WikipediaLookup(timeout=self.config.lookup_timeout)

        self.store = FactStore(storage)
        self.store.load()

        self.state = SessionState(mode=self.config.initial_mode)
        self.engine = ResponseEngine(self.store, lookup=lookup)
        self.busy = False

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def mode_info(self) -> ModeInfo:
        return MODE_INFO[self.state.mode]

    def toggle_mode(self) -> Mode:
        """Switch to the next mode and return it."""
        self.state.mode = next_mode(self.state.mode)
        logger.info(f"Switched to {self.mode_info.name}")
        return self.state.mode

    def process_message(self, content: str) -> SessionResponse:
        """
        Answer one user message.

        Raises:
            SessionBusy: if called again before the previous call returned
        """
        if self.busy:
            raise SessionBusy("Still answering the previous message")

        self.busy = True
        try:
            mode = self.state.mode
            composed = self.engine.respond(self.state, content.strip())
        finally:
            self.busy = False

        return SessionResponse(
            text=composed.text,
            reason=composed.reason,
            confidence=composed.confidence,
            mode=mode,
        )

    def export_backup(self, path: Path) -> Path:
        """Write every fact to ``path`` as pretty-printed JSON."""
        path = Path(path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.store.export_json(), encoding="utf-8")
        logger.info(f"Exported {len(self.store)} facts to {path}")
        return path

    def import_backup(self, path: Path) -> int:
        """
        Merge facts from a backup file.

        Raises:
            ImportRejected: if the file is not valid JSON
            OSError: if the file cannot be read
        """
        payload = Path(path).expanduser().read_text(encoding="utf-8")
        return self.store.import_json(payload)

    def wipe(self) -> None:
        """Forget everything (data manager wipe)."""
        self.store.reset()

    def get_stats(self) -> FactStoreStats:
        return self.store.get_stats()
