import datetime as dt
import json
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from booker.application.service import StudyService
from booker.domain.errors import ImportRejected, ItemNotFound, ItemValidationError
from booker.domain.models import Category, Language, SessionState
from booker.domain.ports import ItemStore, Notifier, StateStore
from booker.infrastructure.adapters import JsonStateStore

DAY_ZERO = dt.date(2024, 3, 10)


def test_log_persists_to_both_tiers(service, data_dir):
    item = service.log("Phrasal verbs", language=Language.ENGLISH, category=Category.LEXIS)

    assert item.next_due_date == DAY_ZERO + dt.timedelta(days=1)
    assert service.items == (item,)
    assert json.loads((data_dir / "items.json").read_text())[0]["topic"] == "Phrasal verbs"
    assert (data_dir / "items.yaml").exists()


def test_log_rejects_invalid_input(service):
    with pytest.raises(ItemValidationError):
        service.log("   ")
    assert service.items == ()


def test_complete_uses_effective_today(service):
    item = service.log("Subjuntivo")
    service.advance_day()

    updated = service.complete(item.id)

    assert updated.stage == 2
    assert updated.next_due_date == DAY_ZERO + dt.timedelta(days=2)
    assert service.get(item.id) == updated


def test_complete_unknown_item(service):
    with pytest.raises(ItemNotFound):
        service.complete("nope")


def test_delete(service):
    item = service.log("Subjuntivo")
    assert service.delete(item.id) == item
    assert service.items == ()
    with pytest.raises(ItemNotFound):
        service.delete(item.id)


def test_collection_survives_restart(service, tiered_store, data_dir):
    item = service.log("Subjuntivo")

    reopened = StudyService(
        tiered_store, JsonStateStore(data_dir / "state.json"), today_provider=lambda: DAY_ZERO
    )

    assert reopened.items == (item,)


def test_restart_recovers_from_fallback(service, tiered_store, data_dir):
    item = service.log("Subjuntivo")
    (data_dir / "items.json").write_text("{broken")

    reopened = StudyService(
        tiered_store, JsonStateStore(data_dir / "state.json"), today_provider=lambda: DAY_ZERO
    )

    assert reopened.items == (item,)


def test_unreadable_store_starts_empty():
    store = MagicMock(spec=ItemStore)
    store.load.side_effect = ImportRejected("bad")
    state_store = MagicMock(spec=StateStore)
    state_store.load.return_value = SessionState()

    svc = StudyService(store, state_store)

    assert svc.items == ()


def test_day_offset_persists(service, tiered_store, data_dir):
    service.advance_day()
    service.advance_day()

    reopened = StudyService(
        tiered_store, JsonStateStore(data_dir / "state.json"), today_provider=lambda: DAY_ZERO
    )
    assert reopened.today == DAY_ZERO + dt.timedelta(days=2)

    assert reopened.reset_date() == DAY_ZERO
    assert reopened.state.day_offset == 0


def test_today_stats_and_agenda(service):
    a = service.log("A", duration=20)
    b = service.log("B", duration=40)
    service.advance_day()
    service.advance_day()

    stats = service.today_stats()
    agenda = service.agenda()

    assert stats.count == 2
    assert stats.time_string == "1h 0m"
    assert list(agenda) == [service.today]
    assert {i.id for i in agenda[service.today]} == {a.id, b.id}


def test_archive_and_schedule(service):
    item = service.log("A")
    assert [e.stage for e in service.schedule(item.id)] == [1, 2, 3, 4, 5]
    assert service.archive() == []


def test_import_replaces_collection(service):
    service.log("Old")
    text = service.export_text()
    service.log("Newer")

    assert service.import_text(text) == 1
    assert [i.topic for i in service.items] == ["Old"]


def test_failed_import_keeps_collection(service):
    item = service.log("Keep me")

    with pytest.raises(ImportRejected):
        service.import_text("[{}]")

    assert service.items == (item,)


def test_notifications_flow(tiered_store, data_dir):
    notifier = MagicMock(spec=Notifier)
    notifier.request_permission.return_value = True
    svc = StudyService(
        tiered_store,
        JsonStateStore(data_dir / "state.json"),
        notifier=notifier,
        today_provider=lambda: DAY_ZERO,
    )
    svc.log("A")
    svc.advance_day()

    assert svc.enable_notifications() is True
    assert svc.check_and_notify() is True
    assert svc.check_and_notify() is False
    notifier.notify.assert_called_once()

    saved = json.loads((data_dir / "state.json").read_text())
    assert saved == {"day_offset": 1, "last_notified": "2024-03-11", "notifications_granted": True}


def test_no_notifier_is_a_noop(service):
    service.log("A")
    assert service.enable_notifications() is False
    assert service.check_and_notify() is False


def test_invalid_state_file_falls_back_to_real_date(tiered_store, data_dir):
    (data_dir / "state.json").write_text('{"day_offset": "soon"}')

    svc = StudyService(
        tiered_store, JsonStateStore(data_dir / "state.json"), today_provider=lambda: DAY_ZERO
    )

    assert svc.today == DAY_ZERO


@pytest.fixture
def read_only_store():
    store = MagicMock(spec=ItemStore)
    store.load.return_value = []
    store.save.side_effect = PermissionError("read-only file system")
    return store


def test_failed_save_keeps_last_saved_collection(read_only_store, data_dir):
    svc = StudyService(read_only_store, JsonStateStore(data_dir / "state.json"))

    with pytest.raises(OSError):
        svc.log("Subjuntivo")

    assert svc.items == ()


def test_failed_state_save_keeps_clock(data_dir, tiered_store):
    state_store = MagicMock(spec=StateStore)
    state_store.load.return_value = SessionState()
    state_store.save.side_effect = OSError("disk full")
    svc = StudyService(tiered_store, state_store, today_provider=lambda: DAY_ZERO)

    with pytest.raises(OSError):
        svc.advance_day()

    assert svc.today == DAY_ZERO
    assert svc.state.day_offset == 0


def test_concurrent_logs_are_all_kept(service, tiered_store):
    topics = [f"Topic {n}" for n in range(40)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(service.log, topics))

    assert sorted(i.topic for i in service.items) == sorted(topics)
    assert len(tiered_store.load()) == 40


def test_export_without_codec(tiered_store, data_dir):
    svc = StudyService(tiered_store, JsonStateStore(data_dir / "state.json"))

    with pytest.raises(RuntimeError, match="export/import"):
        svc.export_text()
