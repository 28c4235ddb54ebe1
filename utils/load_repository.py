"""Storage of weekly load records in the relational database."""

from contextlib import contextmanager
from datetime import date
from typing import Callable, Iterable, Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import get_database_engine, get_database_session
from models.database.base import Base
from models.database.weekly_load import WeeklyLoad
from models.records import LoadRecord
from utils.logger import get_logger

logger = get_logger(__name__)

_schema_ready = False


class StorageError(RuntimeError):
    """A database read or write failed; carries the underlying message."""


def ensure_schema(engine=None):
    """Create missing tables on the configured database (once per process)."""
    global _schema_ready
    if _schema_ready and engine is None:
        return
    try:
        Base.metadata.create_all(engine or get_database_engine())
    except SQLAlchemyError as e:
        raise StorageError(f"Error preparing database: {e}") from e
    if engine is None:
        _schema_ready = True


class LoadRepository:
    """
    Reads and writes ``weekly_load`` rows.

    Each operation runs in its own short-lived session. Database errors are
    rolled back and re-raised as :class:`StorageError`. Bulk updates are a
    single statement, so their atomicity is whatever the database gives a
    single UPDATE.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        """
        Args:
            session_factory: Callable returning a new session, defaults to the
                configured database
        """
        if session_factory is None:
            ensure_schema()
            session_factory = get_database_session
        self.session_factory = session_factory

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"{action} failed: {e}")
            raise StorageError(f"Error {action}: {e}") from e
        finally:
            session.close()

    def fetch_all(self) -> List[LoadRecord]:
        """Get every record ordered by date ascending."""
        with self._session("fetching data") as session:
            rows = session.query(WeeklyLoad).order_by(WeeklyLoad.date.asc(), WeeklyLoad.id.asc()).all()
            records = [row.to_record() for row in rows]

        logger.info(f"Fetched {len(records)} load records")
        return records

    def count(self) -> int:
        with self._session("counting records") as session:
            return session.query(WeeklyLoad).count()

    def count_players(self) -> int:
        with self._session("counting players") as session:
            return session.query(WeeklyLoad.player_name).distinct().count()

    def date_range(self):
        """Get (first date, last date) of stored records, or (None, None)."""
        with self._session("reading date range") as session:
            first, last = session.query(func.min(WeeklyLoad.date), func.max(WeeklyLoad.date)).one()
        return first, last

    def insert_records(self, records: Iterable[LoadRecord]) -> int:
        """
        Insert records in one transaction.

        Returns:
            Number of rows inserted
        """
        rows = [WeeklyLoad.from_record(record) for record in records]
        if not rows:
            return 0

        with self._session("inserting records") as session:
            session.add_all(rows)

        logger.info(f"Inserted {len(rows)} load records")
        return len(rows)

    def bulk_update_targets(
        self,
        start: date,
        end: date,
        target_distance_km: float,
        target_intensity_pct: float
    ) -> int:
        """
        Rewrite weekly targets on every record dated within ``[start, end]``.

        Returns:
            Number of rows updated
        """
        with self._session("updating targets") as session:
            updated = session.query(WeeklyLoad).filter(
                WeeklyLoad.date >= start,
                WeeklyLoad.date <= end
            ).update(
                {
                    WeeklyLoad.target_km: target_distance_km,
                    WeeklyLoad.target_intensity: target_intensity_pct,
                },
                synchronize_session=False
            )

        logger.info(
            f"Updated targets on {updated} records between {start} and {end}: "
            f"{target_distance_km} km, {target_intensity_pct}%"
        )
        return updated

    def update_week_notes(self, player_name: str, start: date, end: date, notes: str) -> int:
        """Replace the notes of one player's records dated within ``[start, end]``."""
        with self._session("updating note") as session:
            updated = session.query(WeeklyLoad).filter(
                WeeklyLoad.player_name == player_name,
                WeeklyLoad.date >= start,
                WeeklyLoad.date <= end
            ).update({WeeklyLoad.notes: notes}, synchronize_session=False)

        logger.info(f"Updated note on {updated} records for {player_name} ({start} - {end})")
        return updated

    def add_week_note(
        self,
        player_name: str,
        week_start: date,
        notes: str,
        target_distance_km: float = 0.0,
        target_intensity_pct: float = 0.0
    ) -> LoadRecord:
        """
        Store a note for a week in which the player has no sessions.

        The note lives on a zero-load ``NOTE_ONLY`` record dated on the week's
        first day.
        """
        record = LoadRecord(
            player_name=player_name,
            date=week_start,
            period_name="NOTE_ONLY",
            day_name=week_start.strftime("%A"),
            activity_name="Missing Week Note",
            total_duration="00:00:00",
            target_distance_km=target_distance_km,
            target_intensity_pct=target_intensity_pct,
            notes=notes,
        )
        self.insert_records([record])
        return record

    def delete_all(self) -> int:
        """Delete every record. Returns the number of rows deleted."""
        with self._session("deleting records") as session:
            deleted = session.query(WeeklyLoad).delete(synchronize_session=False)

        logger.warning(f"Deleted {deleted} load records")
        return deleted
