from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from brainnova.fact_store import FactStore
from brainnova.knowledge_augmenter import LookupHit, NotFound
from brainnova.session import BrainnovaSession, SessionConfig
from brainnova.storage_bridge import MemoryStorage


class StubLookup:
    """Canned external lookup: answers from ``articles``, records queries."""

    def __init__(self, articles=None):
        self.articles = articles or {}
        self.queries = []

    def lookup(self, query):
        self.queries.append(query)
        if query in self.articles:
            title, extract = self.articles[query]
            return LookupHit(title=title, extract=extract)
        return NotFound(query)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    fact_store = FactStore(storage)
    fact_store.load()
    return fact_store


@pytest.fixture
def lookup():
    return StubLookup({"Rust": ("Rust (programming language)", "Rust is a systems language.")})


@pytest.fixture
def session(tmp_path, lookup):
    """BrainnovaSession with an isolated data dir and no network."""
    cfg = SessionConfig(data_path=str(tmp_path / "brainnova_data"))
    return BrainnovaSession(config=cfg, lookup=lookup)
