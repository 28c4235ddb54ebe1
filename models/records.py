"""Plain record types passed between ingestion, storage and aggregation."""

from dataclasses import dataclass
from datetime import date


@dataclass
class LoadRecord:
    """
    One row of sensor-derived training data for one player on one date/activity.

    Distances are in meters. ``target_distance_km`` and ``target_intensity_pct``
    are the club's weekly targets and are shared by every record of the week.
    """

    player_name: str
    date: date
    total_distance: float = 0.0
    maximum_velocity: float = 0.0
    acceleration_efforts: int = 0
    deceleration_efforts: int = 0
    high_speed_running_distance: float = 0.0
    sprint_distance: float = 0.0
    target_distance_km: float = 0.0
    target_intensity_pct: float = 0.0

    # Remaining export columns, stored but not aggregated
    period_name: str = ""
    period_number: int = 0
    day_name: str = ""
    activity_name: str = ""
    total_duration: str = ""
    rhie_total_bouts: int = 0
    meterage_per_minute: float = 0.0
    velocity_b4_plus_efforts: int = 0
    running_imbalance: float = 0.0
    hmld: float = 0.0
    hmld_per_min: float = 0.0
    notes: str = ""


@dataclass
class WeekBucket:
    """Aggregated load of one player over one Sunday-anchored week."""

    player_name: str
    week_start: date
    first_date: date
    total_distance: float
    sprint_distance: float
    hsr_distance: float
    accel_sum: float
    decel_sum: float
    max_velocity: float
    vir_acceleration: float
    vir_deceleration: float
    vir_high_speed_running: float
    intensity_score: float
    target_distance_km: float
    target_intensity_pct: float
    notes: str = ""
