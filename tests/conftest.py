"""Shared fixtures: an in-memory database and record builders."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base, LoadRecord
from utils.load_repository import LoadRepository


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def repository(session_factory):
    return LoadRepository(session_factory=session_factory)


@pytest.fixture
def make_record():
    """Build a Session record with sensible defaults."""

    def _make(player_name="Smith", day=date(2025, 3, 3), **fields):
        fields.setdefault("period_name", "Session")
        return LoadRecord(player_name=player_name, date=day, **fields)

    return _make
