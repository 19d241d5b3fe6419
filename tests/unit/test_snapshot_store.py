from tracking import t
from datetime import date, datetime

from domain.results import Slot, Snapshot, VenueResult
from scraping.store import SnapshotStore, snapshot_filename
from tests.helpers import make_venue

TARGET = date(2025, 11, 4)


def build_snapshot(region=None):
    t('tests.unit.test_snapshot_store.build_snapshot')
    stamp = datetime(2025, 11, 3, 20, 0)
    ok = VenueResult.succeeded(
        make_venue("coogee"),
        "Eastern Suburbs",
        TARGET,
        [Slot("07:00", "7:00 am", "Court 1", "https://example.com/b?1")],
        scraped_at=stamp,
    )
    failed = VenueResult.failed(make_venue("glebe", postcode="2037"), "Inner West", TARGET, "boom", scraped_at=stamp)
    return Snapshot(TARGET, region, (ok, failed), stamp, stamp)


def test_snapshot_filename_region_suffix():
    t('tests.unit.test_snapshot_store.test_snapshot_filename_region_suffix')
    assert snapshot_filename(TARGET) == "tennis-availability-2025-11-04.json"
    assert snapshot_filename(TARGET, "all") == "tennis-availability-2025-11-04.json"
    assert snapshot_filename(TARGET, "All Regions") == "tennis-availability-2025-11-04.json"
    assert snapshot_filename(TARGET, "Eastern Suburbs") == "tennis-availability-2025-11-04-Eastern-Suburbs.json"


def test_save_and_load_round_trip(tmp_path):
    t('tests.unit.test_snapshot_store.test_save_and_load_round_trip')
    store = SnapshotStore(tmp_path / "snapshots")

    path = store.save(build_snapshot("Eastern Suburbs"))
    records = store.load(TARGET, "Eastern Suburbs")

    assert path.name == "tennis-availability-2025-11-04-Eastern-Suburbs.json"
    assert [r["venueKey"] for r in records] == ["coogee", "glebe"]
    assert records[0]["availableSlots"] == [
        {"time": "07:00", "timeDisplay": "7:00 am", "court": "Court 1", "bookingUrl": "https://example.com/b?1"}
    ]
    assert records[0]["success"] is True and "error" not in records[0]
    assert records[1]["success"] is False and records[1]["error"] == "boom"
    assert records[1]["availableSlots"] == []
    assert not list((tmp_path / "snapshots").glob("*.tmp"))


def test_save_replaces_previous_snapshot(tmp_path):
    t('tests.unit.test_snapshot_store.test_save_replaces_previous_snapshot')
    store = SnapshotStore(tmp_path)
    store.save(build_snapshot())
    snapshot = build_snapshot()
    store.save(Snapshot(TARGET, None, snapshot.results[:1], snapshot.started_at, snapshot.finished_at))

    assert len(store.load(TARGET)) == 1


def test_load_missing_or_invalid_returns_none(tmp_path):
    t('tests.unit.test_snapshot_store.test_load_missing_or_invalid_returns_none')
    store = SnapshotStore(tmp_path)
    assert store.load(TARGET) is None

    store.path_for(TARGET).write_text('{"not": "a list"}', encoding="utf-8")
    assert store.load(TARGET) is None

    store.path_for(TARGET).write_text("{broken", encoding="utf-8")
    assert store.load(TARGET) is None
