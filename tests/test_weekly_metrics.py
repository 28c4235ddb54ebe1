from datetime import date

import pytest

from utils.weekly_metrics import (
    IntensityScales,
    PerformanceClass,
    WeeklyAggregator,
    classify_performance,
    group_by_player_week,
    index_buckets,
    sort_buckets,
    week_end,
    week_label,
    week_start,
)

DEFAULT_SCALES = IntensityScales()

SUNDAY = date(2025, 3, 2)
SATURDAY = date(2025, 3, 8)
NEXT_SUNDAY = date(2025, 3, 9)


def test_week_start_is_the_preceding_sunday():
    assert week_start(SUNDAY) == SUNDAY
    assert week_start(date(2025, 3, 5)) == SUNDAY
    assert week_start(SATURDAY) == SUNDAY
    assert week_start(NEXT_SUNDAY) == NEXT_SUNDAY


def test_week_end_and_label():
    assert week_end(SUNDAY) == SATURDAY
    assert week_label(SUNDAY) == "March 2, 2025 - March 8, 2025"


def test_week_spanning_year_end():
    assert week_start(date(2025, 1, 1)) == date(2024, 12, 29)
    assert week_label(date(2024, 12, 29)) == "December 29, 2024 - January 4, 2025"


def test_sunday_and_saturday_share_a_bucket_next_sunday_does_not(make_record):
    records = [
        make_record(day=SUNDAY, total_distance=1000),
        make_record(day=SATURDAY, total_distance=2000),
        make_record(day=NEXT_SUNDAY, total_distance=4000),
    ]

    buckets = index_buckets(group_by_player_week(records, DEFAULT_SCALES))

    assert len(buckets) == 2
    assert buckets[("Smith", SUNDAY)].total_distance == 3000
    assert buckets[("Smith", NEXT_SUNDAY)].total_distance == 4000


def test_smith_week_reaches_full_intensity(make_record):
    records = [
        make_record(
            day=date(2025, 3, 3),
            total_distance=4000,
            acceleration_efforts=15,
            deceleration_efforts=10,
            high_speed_running_distance=300,
        ),
        make_record(
            day=date(2025, 3, 5),
            total_distance=3000,
            acceleration_efforts=15,
            deceleration_efforts=25,
            high_speed_running_distance=300,
        ),
    ]

    [bucket] = group_by_player_week(records, DEFAULT_SCALES)

    assert bucket.player_name == "Smith"
    assert bucket.week_start == SUNDAY
    assert bucket.total_distance == 7000
    assert bucket.accel_sum == 30
    assert bucket.decel_sum == 35
    assert bucket.hsr_distance == 600
    assert bucket.vir_acceleration == pytest.approx(1.0)
    assert bucket.vir_deceleration == pytest.approx(1.0)
    assert bucket.vir_high_speed_running == pytest.approx(1.0)
    assert bucket.intensity_score == pytest.approx(1.0)


def test_players_are_bucketed_separately(make_record):
    records = [
        make_record("Smith", total_distance=5000),
        make_record("Cohen", total_distance=6000),
        make_record("Smith", day=date(2025, 3, 4), total_distance=1000),
    ]

    buckets = index_buckets(group_by_player_week(records, DEFAULT_SCALES))

    assert buckets[("Smith", SUNDAY)].total_distance == 6000
    assert buckets[("Cohen", SUNDAY)].total_distance == 6000


def test_missing_and_nan_metrics_count_as_zero(make_record):
    records = [
        make_record(total_distance=float("nan"), high_speed_running_distance=None),
        make_record(day=date(2025, 3, 4), total_distance=2500, high_speed_running_distance=120),
    ]

    [bucket] = group_by_player_week(records, DEFAULT_SCALES)

    assert bucket.total_distance == 2500
    assert bucket.hsr_distance == 120


def test_sprint_distance_and_max_velocity(make_record):
    records = [
        make_record(sprint_distance=80, maximum_velocity=31.2),
        make_record(day=date(2025, 3, 6), sprint_distance=45, maximum_velocity=33.9),
    ]

    [bucket] = group_by_player_week(records, DEFAULT_SCALES)

    assert bucket.sprint_distance == 125
    assert bucket.max_velocity == pytest.approx(33.9)


def test_targets_come_from_first_record_in_input_order(make_record):
    records = [
        make_record(day=date(2025, 3, 6), target_distance_km=25, target_intensity_pct=80),
        make_record(day=date(2025, 3, 3), target_distance_km=30, target_intensity_pct=90),
    ]

    [bucket] = group_by_player_week(records, DEFAULT_SCALES)

    assert bucket.target_distance_km == 25
    assert bucket.target_intensity_pct == 80
    assert bucket.first_date == date(2025, 3, 3)


def test_grouping_is_idempotent_and_order_independent(make_record):
    records = [
        make_record("Smith", day=date(2025, 3, 3), total_distance=4100.5, acceleration_efforts=12),
        make_record("Levi", day=date(2025, 3, 4), total_distance=3900, deceleration_efforts=18),
        make_record("Smith", day=date(2025, 3, 10), total_distance=5200, high_speed_running_distance=410),
        make_record("Smith", day=date(2025, 3, 7), total_distance=2300.25, acceleration_efforts=9),
    ]
    aggregator = WeeklyAggregator(DEFAULT_SCALES)

    first = index_buckets(aggregator.group_by_player_week(records))
    second = index_buckets(aggregator.group_by_player_week(records))
    reversed_input = index_buckets(aggregator.group_by_player_week(list(reversed(records))))

    assert first == second
    for key, bucket in first.items():
        assert reversed_input[key].total_distance == pytest.approx(bucket.total_distance)
        assert reversed_input[key].intensity_score == pytest.approx(bucket.intensity_score)


def test_empty_input_gives_no_buckets():
    assert group_by_player_week([], DEFAULT_SCALES) == []


def test_scales_are_configurable(make_record):
    scales = IntensityScales(acceleration=10, deceleration=10, high_speed_running=100)
    records = [make_record(acceleration_efforts=10, deceleration_efforts=20, high_speed_running_distance=300)]

    [bucket] = group_by_player_week(records, scales)

    assert bucket.vir_acceleration == pytest.approx(1.0)
    assert bucket.vir_deceleration == pytest.approx(2.0)
    assert bucket.vir_high_speed_running == pytest.approx(3.0)
    assert bucket.intensity_score == pytest.approx(2.0)


def test_notes_are_joined_once_each(make_record):
    records = [
        make_record(notes="Hamstring tightness"),
        make_record(day=date(2025, 3, 4), notes="Hamstring tightness"),
        make_record(day=date(2025, 3, 5), notes="  "),
        make_record(day=date(2025, 3, 6), notes="Back to full training"),
    ]

    [bucket] = group_by_player_week(records, DEFAULT_SCALES)

    assert bucket.notes == "Hamstring tightness; Back to full training"


def test_sort_buckets_by_earliest_date(make_record):
    records = [
        make_record("Levi", day=date(2025, 3, 12)),
        make_record("Cohen", day=date(2025, 3, 3)),
        make_record("Smith", day=date(2025, 3, 5)),
    ]

    ordered = sort_buckets(group_by_player_week(records, DEFAULT_SCALES))

    assert [b.player_name for b in ordered] == ["Cohen", "Smith", "Levi"]


@pytest.mark.parametrize(
    "actual, target, expected",
    [
        (0, 0, PerformanceClass.NONE),
        (500, 0, PerformanceClass.NONE),
        (500, -10, PerformanceClass.NONE),
        (500, None, PerformanceClass.NONE),
        (0, 100, PerformanceClass.CRITICAL),
        (19, 100, PerformanceClass.CRITICAL),
        (20, 100, PerformanceClass.BELOW),
        (99.999, 100, PerformanceClass.BELOW),
        (100, 100, PerformanceClass.EXCELLENT),
        (150, 100, PerformanceClass.EXCELLENT),
        (7000, 7000, PerformanceClass.EXCELLENT),
        (4.6, 23, PerformanceClass.BELOW),
        (16.4, 82, PerformanceClass.BELOW),
        (19.4, 97, PerformanceClass.BELOW),
    ],
)
def test_classify_performance(actual, target, expected):
    assert classify_performance(actual, target) is expected


@pytest.mark.parametrize("field", ["acceleration", "deceleration", "high_speed_running"])
def test_non_positive_scales_are_rejected(field):
    with pytest.raises(ValueError, match=field):
        IntensityScales(**{field: 0})
