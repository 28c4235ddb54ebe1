"""CSV ingestion of training-load exports into load records."""

import math
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, List, Optional, Sequence, Union

import pandas as pd

from config.settings import settings
from models.records import LoadRecord
from utils.logger import get_logger

logger = get_logger(__name__)

# Widest export seen; shorter rows are padded, wider rows truncated
MAX_CSV_COLUMNS = 64

# Only whole-session rows and manual week notes are kept, drill splits are not
ACCEPTED_PERIODS = ("Session", "NOTE_ONLY")


class CsvFormatError(ValueError):
    """Raised when a file cannot be read as a CSV export."""


@dataclass(frozen=True)
class CsvColumn:
    """One positional column of the export and how to coerce it."""

    field: str
    coerce: Callable[[Any], Any]


def convert_day_first_date(value: Any) -> str:
    """
    Convert a ``DD/MM/YYYY`` date to ISO ``YYYY-MM-DD``.

    Day and month are zero padded. Anything that does not split into exactly
    three ``/`` separated parts gives an empty string.
    """
    if not value or not isinstance(value, str):
        return ""

    parts = value.strip().split("/")
    if len(parts) != 3:
        return ""

    day, month, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def to_text(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def to_float(value: Any) -> float:
    """Parse a decimal cell, 0.0 on failure."""
    try:
        number = float(to_text(value))
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(number) else number


def to_int(value: Any) -> int:
    """Parse an integer cell (decimals truncated), 0 on failure."""
    number = to_float(value)
    if math.isinf(number):
        return 0
    return int(number)


def to_iso_date(value: Any) -> str:
    return convert_day_first_date(to_text(value))


# Column order of the sensor platform's weekly export
LOAD_EXPORT_SCHEMA: List[CsvColumn] = [
    CsvColumn("player_name", to_text),
    CsvColumn("period_name", to_text),
    CsvColumn("period_number", to_int),
    CsvColumn("date", to_iso_date),
    CsvColumn("day_name", to_text),
    CsvColumn("activity_name", to_text),
    CsvColumn("total_duration", to_text),
    CsvColumn("total_distance", to_float),
    CsvColumn("maximum_velocity", to_float),
    CsvColumn("acceleration_efforts", to_int),
    CsvColumn("deceleration_efforts", to_int),
    CsvColumn("rhie_total_bouts", to_int),
    CsvColumn("meterage_per_minute", to_float),
    CsvColumn("high_speed_running_distance", to_float),
    CsvColumn("velocity_b4_plus_efforts", to_int),
    CsvColumn("sprint_distance", to_float),
    CsvColumn("running_imbalance", to_float),
    CsvColumn("hmld", to_float),
    CsvColumn("hmld_per_min", to_float),
    CsvColumn("target_distance_km", to_float),
    CsvColumn("target_intensity_pct", to_float),
    CsvColumn("notes", to_text),
]


def _row_to_fields(row: Sequence[Any]) -> dict:
    fields = {}
    for position, column in enumerate(LOAD_EXPORT_SCHEMA):
        raw = row[position] if position < len(row) else ""
        fields[column.field] = column.coerce(raw)
    return fields


def parse_rows(
    rows: Iterable[Sequence[Any]],
    header_rows: Optional[int] = None
) -> List[LoadRecord]:
    """
    Build load records from raw CSV rows.

    The first ``header_rows`` rows are metadata and skipped. Numeric cells that
    fail to parse become 0. Rows without a player name or a valid date, and
    rows that are not whole sessions or week notes, are dropped.

    Args:
        rows: Rows as ordered sequences of cell strings
        header_rows: Rows to skip, defaults to ``settings.CSV_HEADER_ROWS``

    Returns:
        List of load records
    """
    skip = settings.CSV_HEADER_ROWS if header_rows is None else header_rows
    records: List[LoadRecord] = []
    dropped = 0

    for row in list(rows)[skip:]:
        fields = _row_to_fields(row)

        if not fields["player_name"] or not fields["date"]:
            dropped += 1
            continue
        if fields["period_name"] not in ACCEPTED_PERIODS:
            dropped += 1
            continue

        try:
            fields["date"] = date.fromisoformat(fields["date"])
        except ValueError:
            logger.debug(f"Dropping row with invalid date for {fields['player_name']!r}")
            dropped += 1
            continue

        records.append(LoadRecord(**fields))

    logger.debug(f"Parsed {len(records)} records, dropped {dropped} rows")
    return records


def read_csv_rows(source: Union[str, Path, BinaryIO]) -> List[List[str]]:
    """
    Read a CSV export into rows of strings, empty cells as ``""``.

    Args:
        source: File path or file-like object (e.g. a Streamlit upload)

    Returns:
        Rows with trailing empty cells trimmed
    """
    try:
        df = pd.read_csv(
            source,
            header=None,
            names=list(range(MAX_CSV_COLUMNS)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8-sig",
            engine="python",
            on_bad_lines=lambda bad_line: bad_line[:MAX_CSV_COLUMNS],
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise CsvFormatError(f"Could not read CSV: {e}") from e

    df = df.fillna("")
    rows = []
    for values in df.itertuples(index=False, name=None):
        row = list(values)
        while row and row[-1] == "":
            row.pop()
        rows.append(row)
    return rows


def parse_csv_file(
    source: Union[str, Path, BinaryIO],
    header_rows: Optional[int] = None
) -> List[LoadRecord]:
    """Read and parse one CSV export."""
    return parse_rows(read_csv_rows(source), header_rows=header_rows)

