from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import WeeklyLoad
from utils.load_repository import LoadRepository, StorageError


def test_insert_and_fetch_all_ordered_by_date(repository, make_record):
    inserted = repository.insert_records([
        make_record("Levi", day=date(2025, 3, 5), total_distance=4200),
        make_record("Smith", day=date(2025, 3, 3), total_distance=5100, acceleration_efforts=12),
        make_record("Cohen", day=date(2025, 3, 4), total_distance=3900),
    ])

    records = repository.fetch_all()

    assert inserted == 3
    assert [r.player_name for r in records] == ["Smith", "Cohen", "Levi"]
    assert records[0].total_distance == 5100
    assert records[0].acceleration_efforts == 12
    assert records[0].period_name == "Session"


def test_insert_nothing(repository):
    assert repository.insert_records([]) == 0
    assert repository.count() == 0


def test_counts_and_date_range(repository, make_record):
    assert repository.date_range() == (None, None)

    repository.insert_records([
        make_record("Smith", day=date(2025, 3, 3)),
        make_record("Smith", day=date(2025, 3, 10)),
        make_record("Levi", day=date(2025, 3, 4)),
    ])

    assert repository.count() == 3
    assert repository.count_players() == 2
    assert repository.date_range() == (date(2025, 3, 3), date(2025, 3, 10))


def test_bulk_update_targets_is_inclusive_of_both_ends(repository, make_record):
    repository.insert_records([
        make_record(day=date(2025, 3, 1), target_distance_km=20),
        make_record(day=date(2025, 3, 2), target_distance_km=20),
        make_record("Levi", day=date(2025, 3, 5), target_distance_km=20),
        make_record(day=date(2025, 3, 8), target_distance_km=20),
        make_record(day=date(2025, 3, 9), target_distance_km=20),
    ])

    updated = repository.bulk_update_targets(date(2025, 3, 2), date(2025, 3, 8), 27.5, 90)

    targets = {(r.player_name, r.date): (r.target_distance_km, r.target_intensity_pct)
               for r in repository.fetch_all()}
    assert updated == 3
    assert targets[("Smith", date(2025, 3, 1))] == (20, 0)
    assert targets[("Smith", date(2025, 3, 2))] == (27.5, 90)
    assert targets[("Levi", date(2025, 3, 5))] == (27.5, 90)
    assert targets[("Smith", date(2025, 3, 8))] == (27.5, 90)
    assert targets[("Smith", date(2025, 3, 9))] == (20, 0)


def test_update_week_notes_only_touches_one_player(repository, make_record):
    repository.insert_records([
        make_record("Smith", day=date(2025, 3, 3)),
        make_record("Smith", day=date(2025, 3, 5)),
        make_record("Levi", day=date(2025, 3, 5)),
    ])

    updated = repository.update_week_notes("Smith", date(2025, 3, 2), date(2025, 3, 8), "Knock on ankle")

    notes = {(r.player_name, r.date): r.notes for r in repository.fetch_all()}
    assert updated == 2
    assert notes[("Smith", date(2025, 3, 3))] == "Knock on ankle"
    assert notes[("Levi", date(2025, 3, 5))] == ""


def test_add_week_note_stores_zero_load_placeholder(repository):
    repository.add_week_note("Smith", date(2025, 3, 2), "National team duty", 25, 80)

    [record] = repository.fetch_all()

    assert record.period_name == "NOTE_ONLY"
    assert record.date == date(2025, 3, 2)
    assert record.day_name == "Sunday"
    assert record.total_distance == 0
    assert record.target_distance_km == 25
    assert record.target_intensity_pct == 80
    assert record.notes == "National team duty"


def test_delete_all(repository, make_record):
    repository.insert_records([make_record(), make_record("Levi")])

    assert repository.delete_all() == 2
    assert repository.count() == 0


def test_database_errors_surface_as_storage_error():
    # No tables created on this engine
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    repository = LoadRepository(session_factory=sessionmaker(bind=engine))

    with pytest.raises(StorageError, match="fetching data"):
        repository.fetch_all()

    with pytest.raises(StorageError, match="updating targets"):
        repository.bulk_update_targets(date(2025, 3, 2), date(2025, 3, 8), 25, 80)


def test_note_only_row_flag(session_factory, repository):
    repository.add_week_note("Smith", date(2025, 3, 2), "Ill")

    session = session_factory()
    try:
        row = session.query(WeeklyLoad).one()
        assert row.is_note_only
    finally:
        session.close()
