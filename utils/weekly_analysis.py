"""Weekly analysis: report building and week target/note edits."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

import pandas as pd

from models.records import LoadRecord, WeekBucket
from utils.load_repository import LoadRepository
from utils.logger import get_logger
from utils.weekly_metrics import (
    IntensityScales,
    PerformanceClass,
    classify_performance,
    group_by_player_week,
    index_buckets,
    sort_buckets,
    week_end,
    week_label,
    week_start,
)

logger = get_logger(__name__)


class NoDataError(LookupError):
    """No load records are stored yet."""


@dataclass(frozen=True)
class WeekTarget:
    """Club target for one week."""

    distance_km: float = 0.0
    intensity_pct: float = 0.0

    @property
    def distance_m(self) -> float:
        return self.distance_km * 1000


@dataclass
class TeamAverage:
    """Squad average for one week, zeros excluded."""

    week_start: date
    distance: float
    intensity: float
    distance_players: int
    intensity_players: int
    distance_class: PerformanceClass
    intensity_class: PerformanceClass

    @property
    def has_data(self) -> bool:
        return self.distance_players > 0 or self.intensity_players > 0


@dataclass
class WeeklyReport:
    """Player x week view of the aggregated load."""

    weeks: List[date]
    players: List[str]
    buckets: Dict[Tuple[str, date], WeekBucket]
    week_targets: Dict[date, WeekTarget]
    team_averages: Dict[date, TeamAverage] = field(default_factory=dict)

    def cell(self, player_name: str, week: date) -> Optional[WeekBucket]:
        return self.buckets.get((player_name, week))

    def target(self, week: date) -> WeekTarget:
        return self.week_targets.get(week, WeekTarget())

    def to_dataframe(self) -> pd.DataFrame:
        """
        Flatten the report for CSV export.

        Returns:
            One row per player and week with data, ordered by week then player
        """
        rows = []
        for week in self.weeks:
            target = self.target(week)
            for player_name in self.players:
                bucket = self.cell(player_name, week)
                if bucket is None:
                    continue
                distance_class, intensity_class = classify_bucket(bucket, target)
                rows.append({
                    "Player": player_name,
                    "Week": week_label(week),
                    "Week Start": week.isoformat(),
                    "Total Distance (m)": round(bucket.total_distance, 1),
                    "Intensity (%)": round(bucket.intensity_score * 100, 1),
                    "HSR Distance (m)": round(bucket.hsr_distance, 1),
                    "Sprint Distance (m)": round(bucket.sprint_distance, 1),
                    "Accelerations": int(bucket.accel_sum),
                    "Decelerations": int(bucket.decel_sum),
                    "Max Velocity": round(bucket.max_velocity, 2),
                    "Target (km)": target.distance_km,
                    "Target Intensity (%)": target.intensity_pct,
                    "Distance Grade": distance_class.value,
                    "Intensity Grade": intensity_class.value,
                    "Notes": bucket.notes,
                })

        columns = [
            "Player", "Week", "Week Start", "Total Distance (m)", "Intensity (%)",
            "HSR Distance (m)", "Sprint Distance (m)", "Accelerations", "Decelerations",
            "Max Velocity", "Target (km)", "Target Intensity (%)", "Distance Grade",
            "Intensity Grade", "Notes",
        ]
        return pd.DataFrame(rows, columns=columns)


def classify_bucket(bucket: WeekBucket, target: WeekTarget) -> Tuple[PerformanceClass, PerformanceClass]:
    """Grade a bucket's distance (meters vs km target) and intensity (percent)."""
    return (
        classify_performance(bucket.total_distance, target.distance_m),
        classify_performance(bucket.intensity_score * 100, target.intensity_pct),
    )


def _team_average(week: date, buckets: List[WeekBucket], target: WeekTarget) -> TeamAverage:
    distances = [b.total_distance for b in buckets if b.total_distance > 0]
    intensities = [b.intensity_score for b in buckets if b.intensity_score > 0]

    avg_distance = sum(distances) / len(distances) if distances else 0.0
    avg_intensity = sum(intensities) / len(intensities) if intensities else 0.0

    return TeamAverage(
        week_start=week,
        distance=avg_distance,
        intensity=avg_intensity,
        distance_players=len(distances),
        intensity_players=len(intensities),
        distance_class=classify_performance(avg_distance, target.distance_m),
        intensity_class=classify_performance(avg_intensity * 100, target.intensity_pct),
    )


def build_weekly_report(
    records: List[LoadRecord],
    scales: Optional[IntensityScales] = None
) -> WeeklyReport:
    """
    Aggregate records into the weekly report.

    Weeks are ordered chronologically, players alphabetically. A week's
    target is taken from its earliest bucket.

    Raises:
        NoDataError: If there are no records
    """
    if not records:
        raise NoDataError("No data found. Please upload some fitness data first.")

    buckets = sort_buckets(group_by_player_week(records, scales))

    weeks = sorted({bucket.week_start for bucket in buckets})
    players = sorted({bucket.player_name for bucket in buckets})

    week_targets: Dict[date, WeekTarget] = {}
    by_week: Dict[date, List[WeekBucket]] = {}
    for bucket in buckets:
        week_targets.setdefault(
            bucket.week_start,
            WeekTarget(bucket.target_distance_km, bucket.target_intensity_pct)
        )
        by_week.setdefault(bucket.week_start, []).append(bucket)

    team_averages = {
        week: _team_average(week, by_week[week], week_targets[week])
        for week in weeks
    }

    logger.info(f"Weekly report built: {len(players)} players over {len(weeks)} weeks")

    return WeeklyReport(
        weeks=weeks,
        players=players,
        buckets=index_buckets(buckets),
        week_targets=week_targets,
        team_averages=team_averages,
    )


def load_weekly_report(
    repository: LoadRepository,
    scales: Optional[IntensityScales] = None
) -> WeeklyReport:
    """Fetch every stored record and build the weekly report."""
    return build_weekly_report(repository.fetch_all(), scales)


def update_week_target(
    repository: LoadRepository,
    week_key: date,
    new_distance_km: float,
    new_intensity_pct: float
) -> int:
    """
    Set the targets of a week on every stored record dated in it.

    ``week_key`` may be any date of the week; it is normalized to the week's
    Sunday.

    Returns:
        Number of records updated
    """
    start = week_start(week_key)
    return repository.bulk_update_targets(start, week_end(start), new_distance_km, new_intensity_pct)


def save_week_note(repository: LoadRepository, player_name: str, week_key: date, notes: str) -> int:
    """Replace a player's note for a week that has data."""
    start = week_start(week_key)
    return repository.update_week_notes(player_name, start, week_end(start), notes)


def add_missing_week_note(
    repository: LoadRepository,
    player_name: str,
    week_key: date,
    notes: str,
    target: Optional[WeekTarget] = None
) -> LoadRecord:
    """Attach a note to a week in which the player has no data."""
    target = target or WeekTarget()
    return repository.add_week_note(
        player_name,
        week_start(week_key),
        notes,
        target_distance_km=target.distance_km,
        target_intensity_pct=target.intensity_pct,
    )


def format_distance(distance: float) -> str:
    return f"{distance:.0f}m"


def format_intensity(intensity: float) -> str:
    return f"{intensity * 100:.0f}%"
