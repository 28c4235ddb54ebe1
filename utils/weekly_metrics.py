"""Weekly load aggregation and performance classification."""

import math
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from config.settings import settings
from models.records import LoadRecord, WeekBucket
from utils.logger import get_logger

logger = get_logger(__name__)


class PerformanceClass(str, Enum):
    """Grade of an actual value against its weekly target."""

    NONE = "none"
    CRITICAL = "critical"
    BELOW = "below"
    EXCELLENT = "excellent"


@dataclass(frozen=True)
class IntensityScales:
    """Divisors normalizing summed weekly metrics into virtual intensity terms."""

    acceleration: float = 30.0
    deceleration: float = 35.0
    high_speed_running: float = 600.0

    def __post_init__(self):
        for name in ("acceleration", "deceleration", "high_speed_running"):
            if getattr(self, name) <= 0:
                raise ValueError(f"Intensity scale '{name}' must be greater than zero")

    @classmethod
    def from_settings(cls) -> "IntensityScales":
        return cls(
            acceleration=settings.VIR_ACCELERATION_SCALE,
            deceleration=settings.VIR_DECELERATION_SCALE,
            high_speed_running=settings.VIR_HSR_SCALE,
        )


def week_start(day: date) -> date:
    """
    Get the Sunday that opens the week containing ``day``.

    Python's ``weekday()`` counts from Monday, so it is shifted to make
    Sunday day 0.
    """
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def week_end(start: date) -> date:
    """Get the Saturday closing a week that opens on ``start``."""
    return start + timedelta(days=6)


def week_label(start: date) -> str:
    """Human readable week span, e.g. ``"March 2, 2025 - March 8, 2025"``."""
    end = week_end(start)
    return f"{_long_date(start)} - {_long_date(end)}"


def _long_date(day: date) -> str:
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def _number(value) -> float:
    """Missing or NaN metrics count as zero."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


class WeeklyAggregator:
    """Groups load records by player and week and derives virtual intensity."""

    def __init__(self, scales: Optional[IntensityScales] = None):
        self.scales = scales or IntensityScales.from_settings()

    def group_by_player_week(self, records: Iterable[LoadRecord]) -> List[WeekBucket]:
        """
        Aggregate records into one bucket per (player, week).

        Buckets are returned in first-seen order, which callers must not rely
        on; use :func:`sort_buckets` for display order. Target values come from
        the first record of each group in input order.

        Args:
            records: Load records in any order

        Returns:
            List of week buckets, empty for an empty input
        """
        groups: "OrderedDict[Tuple[str, date], List[LoadRecord]]" = OrderedDict()
        for record in records:
            key = (record.player_name, week_start(record.date))
            groups.setdefault(key, []).append(record)

        if not groups:
            logger.debug("No load records to aggregate")
            return []

        buckets = [
            self._build_bucket(player_name, start, group)
            for (player_name, start), group in groups.items()
        ]
        logger.debug(f"Aggregated {sum(len(g) for g in groups.values())} records into {len(buckets)} week buckets")
        return buckets

    def _build_bucket(self, player_name: str, start: date, group: List[LoadRecord]) -> WeekBucket:
        total_distance = float(np.sum([_number(r.total_distance) for r in group]))
        sprint_distance = float(np.sum([_number(r.sprint_distance) for r in group]))
        hsr_distance = float(np.sum([_number(r.high_speed_running_distance) for r in group]))
        accel_sum = float(np.sum([_number(r.acceleration_efforts) for r in group]))
        decel_sum = float(np.sum([_number(r.deceleration_efforts) for r in group]))
        max_velocity = float(np.max([_number(r.maximum_velocity) for r in group]))

        vir_acceleration = accel_sum / self.scales.acceleration
        vir_deceleration = decel_sum / self.scales.deceleration
        vir_high_speed_running = hsr_distance / self.scales.high_speed_running
        intensity_score = (vir_acceleration + vir_deceleration + vir_high_speed_running) / 3

        first = group[0]
        # Week notes are written to every record of the week
        notes = "; ".join(OrderedDict.fromkeys(r.notes.strip() for r in group if r.notes and r.notes.strip()))

        return WeekBucket(
            player_name=player_name,
            week_start=start,
            first_date=min(r.date for r in group),
            total_distance=total_distance,
            sprint_distance=sprint_distance,
            hsr_distance=hsr_distance,
            accel_sum=accel_sum,
            decel_sum=decel_sum,
            max_velocity=max_velocity,
            vir_acceleration=vir_acceleration,
            vir_deceleration=vir_deceleration,
            vir_high_speed_running=vir_high_speed_running,
            intensity_score=intensity_score,
            target_distance_km=_number(first.target_distance_km),
            target_intensity_pct=_number(first.target_intensity_pct),
            notes=notes,
        )


def classify_performance(actual: float, target: Optional[float]) -> PerformanceClass:
    """
    Grade an actual value against its target.

    - no target (missing or <= 0): NONE
    - below 20% of target: CRITICAL
    - 100% of target or more: EXCELLENT
    - anything in between: BELOW

    Args:
        actual: Achieved value, in the same unit as ``target``
        target: Target value

    Returns:
        Performance class
    """
    if target is None or target <= 0:
        return PerformanceClass.NONE

    percentage = actual / target * 100

    if percentage < 20:
        return PerformanceClass.CRITICAL
    if percentage >= 100:
        return PerformanceClass.EXCELLENT
    return PerformanceClass.BELOW


# Convenience functions

def group_by_player_week(
    records: Iterable[LoadRecord],
    scales: Optional[IntensityScales] = None
) -> List[WeekBucket]:
    """Aggregate records with the configured (or given) intensity scales."""
    return WeeklyAggregator(scales).group_by_player_week(records)


def sort_buckets(buckets: Iterable[WeekBucket]) -> List[WeekBucket]:
    """Order buckets by the date of their earliest contributing record."""
    return sorted(buckets, key=lambda bucket: bucket.first_date)


def index_buckets(buckets: Iterable[WeekBucket]) -> Dict[Tuple[str, date], WeekBucket]:
    """Map (player, week start) to its bucket."""
    return {(bucket.player_name, bucket.week_start): bucket for bucket in buckets}
