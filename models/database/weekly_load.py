"""Weekly load model storing one row per player, session and activity."""

from sqlalchemy import Column, Integer, String, Date, Float, Text, Index
from models.database.base import Base, TimestampMixin
from models.records import LoadRecord


class WeeklyLoad(Base, TimestampMixin):
    """
    Training-load sensor data uploaded from CSV exports.

    Weekly targets (``target_km``, ``target_intensity``) are denormalized onto
    every row of the week and rewritten in bulk when staff edit them.
    Rows with ``period_name == "NOTE_ONLY"`` carry a note for a week in which
    the player has no recorded sessions.
    """

    __tablename__ = "weekly_load"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identity
    player_name = Column(String(200), nullable=False)
    date = Column(Date, nullable=False)

    # Session information
    period_name = Column(String(100), default="")
    period_number = Column(Integer, default=0)
    day_name = Column(String(20), default="")
    activity_name = Column(String(200), default="")
    total_duration = Column(String(20), default="")

    # Load metrics
    total_distance = Column(Float, default=0.0)  # meters
    maximum_velocity = Column(Float, default=0.0)
    acceleration_b3_efforts_gen2 = Column(Integer, default=0)
    deceleration_b3_efforts_gen2 = Column(Integer, default=0)
    rhie_total_bouts = Column(Integer, default=0)
    meterage_per_minute = Column(Float, default=0.0)
    high_speed_running_total_distance_b6 = Column(Float, default=0.0)  # meters
    velocity_b4_plus_total_efforts_gen2 = Column(Integer, default=0)
    very_high_speed_running_total_distance_b7 = Column(Float, default=0.0)  # meters
    running_imbalance = Column(Float, default=0.0)
    hmld_gen2 = Column(Float, default=0.0)
    hmld_per_min_gen2 = Column(Float, default=0.0)

    # Weekly targets
    target_km = Column(Float, default=0.0)
    target_intensity = Column(Float, default=0.0)  # percent

    notes = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_weekly_load_date", "date"),
        Index("idx_weekly_load_player_date", "player_name", "date"),
    )

    def __repr__(self) -> str:
        return f"<WeeklyLoad(player='{self.player_name}', date={self.date}, distance={self.total_distance})>"

    @property
    def is_note_only(self) -> bool:
        """Check if this row only carries a note for a missing week."""
        return self.period_name == "NOTE_ONLY"

    @classmethod
    def from_record(cls, record: LoadRecord) -> "WeeklyLoad":
        """Build a row from an ingested record."""
        return cls(
            player_name=record.player_name,
            date=record.date,
            period_name=record.period_name,
            period_number=record.period_number,
            day_name=record.day_name,
            activity_name=record.activity_name,
            total_duration=record.total_duration,
            total_distance=record.total_distance,
            maximum_velocity=record.maximum_velocity,
            acceleration_b3_efforts_gen2=record.acceleration_efforts,
            deceleration_b3_efforts_gen2=record.deceleration_efforts,
            rhie_total_bouts=record.rhie_total_bouts,
            meterage_per_minute=record.meterage_per_minute,
            high_speed_running_total_distance_b6=record.high_speed_running_distance,
            velocity_b4_plus_total_efforts_gen2=record.velocity_b4_plus_efforts,
            very_high_speed_running_total_distance_b7=record.sprint_distance,
            running_imbalance=record.running_imbalance,
            hmld_gen2=record.hmld,
            hmld_per_min_gen2=record.hmld_per_min,
            target_km=record.target_distance_km,
            target_intensity=record.target_intensity_pct,
            notes=record.notes,
        )

    def to_record(self) -> LoadRecord:
        """Convert the row to the record type consumed by the aggregator."""
        return LoadRecord(
            player_name=self.player_name,
            date=self.date,
            total_distance=self.total_distance or 0.0,
            maximum_velocity=self.maximum_velocity or 0.0,
            acceleration_efforts=self.acceleration_b3_efforts_gen2 or 0,
            deceleration_efforts=self.deceleration_b3_efforts_gen2 or 0,
            high_speed_running_distance=self.high_speed_running_total_distance_b6 or 0.0,
            sprint_distance=self.very_high_speed_running_total_distance_b7 or 0.0,
            target_distance_km=self.target_km or 0.0,
            target_intensity_pct=self.target_intensity or 0.0,
            period_name=self.period_name or "",
            period_number=self.period_number or 0,
            day_name=self.day_name or "",
            activity_name=self.activity_name or "",
            total_duration=self.total_duration or "",
            rhie_total_bouts=self.rhie_total_bouts or 0,
            meterage_per_minute=self.meterage_per_minute or 0.0,
            velocity_b4_plus_efforts=self.velocity_b4_plus_total_efforts_gen2 or 0,
            running_imbalance=self.running_imbalance or 0.0,
            hmld=self.hmld_gen2 or 0.0,
            hmld_per_min=self.hmld_per_min_gen2 or 0.0,
            notes=self.notes or "",
        )
