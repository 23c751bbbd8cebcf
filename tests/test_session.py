"""
Tests for BrainnovaSession: configuration, modes, persistence and backups.
"""

import json

import pytest

from brainnova.fact_store import ImportRejected
from brainnova.knowledge_augmenter import WikipediaLookup
from brainnova.modes import MODE_INFO, Mode, next_mode
from brainnova.session import BrainnovaSession, SessionBusy, SessionConfig


def test_next_mode_cycles_in_order():
    assert next_mode(Mode.STANDARD) is Mode.ANALYTIC
    assert next_mode(Mode.ANALYTIC) is Mode.WEB
    assert next_mode(Mode.WEB) is Mode.STANDARD


def test_mode_info_names():
    assert [MODE_INFO[m].id for m in Mode] == ["v1", "v2", "v6"]
    assert MODE_INFO[Mode.ANALYTIC].name == "v2 DeepThought"


def test_toggle_mode_changes_dispatch(session):
    session.process_message("teach: {\"topic\":\"Tea\",\"core\":\"A drink\"}")

    assert session.toggle_mode() is Mode.ANALYTIC
    response = session.process_message("tea")

    assert response.reason == "DEEP RECALL"
    assert response.mode is Mode.ANALYTIC
    assert response.mode_info.id == "v2"
    assert "**Logic:** Imported via console" in response.text


def test_web_mode_through_session(session, lookup):
    session.toggle_mode()
    session.toggle_mode()

    response = session.process_message("  search Rust  ")

    assert response.reason == "WEB FETCH"
    assert lookup.queries == ["Rust"]
    assert session.store.find("rust (programming language)") is not None


def test_facts_persist_across_sessions(tmp_path, lookup):
    cfg = SessionConfig(data_path=str(tmp_path))
    first = BrainnovaSession(config=cfg, lookup=lookup)
    first.process_message("Foo is Bar")
    first.process_message("yes")

    second = BrainnovaSession(config=cfg, lookup=lookup)

    assert second.process_message("foo").text == "**Foo**\nBar"
    assert json.loads(cfg.db_path.read_text(encoding="utf-8"))["foo"]["core"] == "Bar"


def test_pending_fact_is_not_persisted(tmp_path, lookup):
    cfg = SessionConfig(data_path=str(tmp_path))
    first = BrainnovaSession(config=cfg, lookup=lookup)
    first.process_message("Foo is Bar")

    second = BrainnovaSession(config=cfg, lookup=lookup)

    assert second.process_message("yes").reason == "MISS"


def test_busy_session_rejects_reentrant_input(session):
    session.busy = True

    with pytest.raises(SessionBusy):
        session.process_message("help")


def test_busy_flag_cleared_after_message(session):
    session.process_message("help")
    assert session.busy is False


def test_export_and_import_backup(session, tmp_path, lookup):
    session.process_message("teach: {\"topic\":\"Tea\",\"core\":\"A drink\"}")
    backup = session.export_backup(tmp_path / "backup" / "brainnova_backup.json")

    records = list(json.loads(backup.read_text(encoding="utf-8")).values())
    batch = tmp_path / "batch.json"
    batch.write_text(json.dumps(records + [{"topic": "broken"}]), encoding="utf-8")

    other = BrainnovaSession(config=SessionConfig(data_path=str(tmp_path / "other")), lookup=lookup)

    assert other.import_backup(batch) == 1
    assert other.store.get("tea").why == "Imported via console"


def test_import_backup_rejects_invalid_json(session, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("not json", encoding="utf-8")

    with pytest.raises(ImportRejected):
        session.import_backup(bad)


def test_wipe_and_stats(session):
    session.process_message("teach: {\"topic\":\"Tea\",\"core\":\"A drink\"}")
    assert session.get_stats().count == 1

    session.wipe()

    assert session.get_stats().count == 0


def test_default_lookup_is_wikipedia(tmp_path):
    cfg = SessionConfig(data_path=str(tmp_path), lookup_timeout=1.5)
    session = BrainnovaSession(config=cfg)

    assert isinstance(session.engine.lookup, WikipediaLookup)
    assert session.engine.lookup.timeout == 1.5


def test_disabled_web_lookup_misses_without_io(tmp_path):
    cfg = SessionConfig(data_path=str(tmp_path), enable_web_lookup=False, initial_mode=Mode.WEB)
    session = BrainnovaSession(config=cfg)

    assert session.engine.lookup is None
    assert session.process_message("Rust").reason == "404"


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("BRAINNOVA_DATA_PATH", str(tmp_path))
    monkeypatch.setenv("BRAINNOVA_WEB_ENABLE", "off")
    monkeypatch.setenv("BRAINNOVA_LOOKUP_TIMEOUT", "9")

    cfg = SessionConfig.from_env()

    assert cfg.data_path == str(tmp_path)
    assert cfg.enable_web_lookup is False
    assert cfg.lookup_timeout == 9.0
    assert cfg.db_path == tmp_path / "brainnova_db.json"


def test_config_from_env_ignores_bad_timeout(monkeypatch):
    monkeypatch.delenv("BRAINNOVA_DATA_PATH", raising=False)
    monkeypatch.delenv("BRAINNOVA_WEB_ENABLE", raising=False)
    monkeypatch.setenv("BRAINNOVA_LOOKUP_TIMEOUT", "soon")

    cfg = SessionConfig.from_env()

    assert cfg.lookup_timeout == 5.0
    assert cfg.enable_web_lookup is True


def test_session_starts_over_undecodable_database(tmp_path, lookup):
    cfg = SessionConfig(data_path=str(tmp_path))
    cfg.db_path.write_bytes(b"\xff\xff\xff")

    session = BrainnovaSession(config=cfg, lookup=lookup)

    assert session.get_stats().count == 0
    assert session.process_message("anything").reason == "MISS"
