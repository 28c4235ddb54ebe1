from datetime import date

from app.components.charts import plot_player_weekly_load, plot_team_weekly_distance
from app.components.weekly_table import build_weekly_table_html, count_by_class
from utils.weekly_analysis import build_weekly_report
from utils.weekly_metrics import IntensityScales, PerformanceClass

WEEK = date(2025, 3, 2)


def sample_report(make_record):
    return build_weekly_report([
        make_record("Smith", total_distance=7500, target_distance_km=7, target_intensity_pct=100),
        make_record("Levi", total_distance=500, notes="Returning <from> injury",
                    target_distance_km=7, target_intensity_pct=100),
        make_record("Cohen", day=date(2025, 3, 10), total_distance=3000),
    ], IntensityScales())


def test_table_lists_targets_players_and_escaped_notes(make_record):
    table = build_weekly_table_html(sample_report(make_record))

    assert "March 2, 2025 - March 8, 2025" in table
    assert "7 KM" in table
    assert "7500m" in table
    assert "Returning &lt;from&gt; injury" in table
    assert table.index("Cohen") < table.index("Levi") < table.index("Smith")


def test_count_by_class(make_record):
    counts = count_by_class(sample_report(make_record), WEEK)

    assert counts[PerformanceClass.EXCELLENT] == 1
    assert counts[PerformanceClass.CRITICAL] == 1
    assert counts[PerformanceClass.BELOW] == 0


def test_charts_have_one_point_per_week(make_record):
    report = sample_report(make_record)

    team = plot_team_weekly_distance(report)
    players = plot_player_weekly_load(report, ["Smith", "Cohen"], "total_distance")

    assert len(team.data[0].x) == 2
    assert len(players.data) == 2
