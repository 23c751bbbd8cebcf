"""
Fact store - Brainnova's long-term memory.

Holds a flat mapping of lower-cased topic -> Fact, loaded once from a
storage backend and written back as a whole after every mutation.

Usage:
    store = FactStore(JsonFileStorage(Path("data/brainnova_db.json")))
    store.load()
    store.save("Python", Fact(topic="Python", core="A programming language"))
    key = store.find("tell me about python")
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from brainnova.facts import Fact
from brainnova.matcher import find_topic

logger = logging.getLogger(__name__)


class ImportRejected(ValueError):
    """Raised when an import payload is not valid JSON."""


@dataclass
class FactStoreStats:
    """Aggregate figures shown by the data manager."""
    count: int
    size_bytes: int

    @property
    def size_kb(self) -> str:
        return f"{self.size_bytes / 1024:.2f} KB"


StatsObserver = Callable[[FactStoreStats], None]


class FactStore:
    """
    Topic -> Fact mapping persisted through a storage backend.

    The backend only needs ``read_all()``, ``write_all(payload)`` and
    ``clear()`` (see ``brainnova.storage_bridge``).
    """

    def __init__(self, storage):
        self.storage = storage
        self.facts: Dict[str, Fact] = {}
        self._observers: List[StatsObserver] = []

    def __len__(self) -> int:
        return len(self.facts)

    def __contains__(self, key: str) -> bool:
        return key in self.facts

    def subscribe(self, observer: StatsObserver) -> None:
        """Call ``observer`` with fresh stats after every mutation."""
        self._observers.append(observer)

    def load(self) -> None:
        """
        Read the backend into memory.

        Missing or unreadable data leaves the store empty; this never
        raises. Entries that are not complete facts are dropped.
        """
        self.facts = {}

        try:
            raw = self.storage.read_all()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read fact storage: {e}")
            return

        if not raw:
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Fact storage is corrupt, starting empty: {e}")
            return

        if not isinstance(data, dict):
            logger.warning("Fact storage is not a JSON object, starting empty")
            return

        for key, record in data.items():
            fact = Fact.from_dict(record)
            if fact is None:
                logger.debug(f"Skipping incomplete stored fact '{key}'")
                continue
            self.facts[key] = fact

        logger.info(f"Loaded {len(self.facts)} facts")

    def save(self, topic: str, fact: Fact) -> str:
        """
        Store ``fact`` under ``topic`` lower-cased (last write wins).

        Returns:
            The storage key
        """
        key = topic.lower()
        facts = dict(self.facts)
        facts[key] = fact
        self._commit(facts)
        logger.info(f"Saved fact '{key}'")
        return key

    def get(self, key: str) -> Optional[Fact]:
        return self.facts.get(key)

    def find(self, text: str) -> Optional[str]:
        """Return the key of the stored topic ``text`` refers to, or None."""
        key = find_topic(text, self.facts.keys())
        if key is not None:
            logger.debug(f"Matched '{text}' -> '{key}'")
        return key

    def reset(self) -> None:
        """Forget every fact, in memory and in the backend."""
        self.storage.clear()
        self.facts = {}
        self._notify()
        logger.info("Fact store wiped")

    def bulk_import(self, items: Union[Dict[str, Any], Iterable[Any]]) -> int:
        """
        Merge a single fact record or a sequence of records into the store.

        Records without a non-empty ``topic`` and ``core`` are skipped.
        Later records overwrite earlier ones with the same key.

        Returns:
            Number of records written
        """
        if isinstance(items, dict):
            items = [items]

        facts = dict(self.facts)
        count = 0
        for item in items:
            fact = Fact.from_dict(item)
            if fact is None:
                continue
            facts[fact.key] = fact
            count += 1

        self._commit(facts)
        logger.info(f"Batch imported {count} facts")
        return count

    def import_json(self, payload: str) -> int:
        """
        Parse an exported backup (object or array) and merge it.

        Raises:
            ImportRejected: if ``payload`` is not valid JSON
        """
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ImportRejected(f"Invalid JSON: {e}") from e

        if not isinstance(data, (dict, list)):
            data = [data]

        return self.bulk_import(data)

    def export_json(self) -> str:
        """Pretty-printed JSON of the whole store."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {key: fact.to_dict() for key, fact in self.facts.items()}

    def get_stats(self) -> FactStoreStats:
        serialized = json.dumps(self.to_dict(), ensure_ascii=False)
        return FactStoreStats(
            count=len(self.facts),
            size_bytes=len(serialized.encode("utf-8")),
        )

    def _commit(self, facts: Dict[str, Fact]) -> None:
        # Memory only changes once the backend accepted the write.
        payload = {key: fact.to_dict() for key, fact in facts.items()}
        self.storage.write_all(json.dumps(payload, ensure_ascii=False))
        self.facts = facts
        self._notify()

    def _notify(self) -> None:
        if not self._observers:
            return
        stats = self.get_stats()
        for observer in self._observers:
            observer(stats)
