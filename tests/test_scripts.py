from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from scripts.import_csv import collect_files
from scripts.init_db import check_database, init_database


def memory_engine():
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def test_init_then_check_database():
    engine = memory_engine()

    assert not check_database(engine)
    assert init_database(engine=engine)
    assert "weekly_load" in inspect(engine).get_table_names()
    assert check_database(engine)


def test_init_with_drop_recreates_tables(engine):
    assert init_database(drop_existing=True, engine=engine)
    assert check_database(engine)


def test_collect_files_expands_directories(tmp_path):
    (tmp_path / "b.csv").write_text("")
    (tmp_path / "a.csv").write_text("")
    (tmp_path / "readme.txt").write_text("")
    single = tmp_path / "single.csv"

    files = collect_files([str(tmp_path), str(single)])

    assert [f.name for f in files] == ["a.csv", "b.csv", "single.csv"]
