from datetime import date

from tests.test_csv_ingestion import METADATA_ROWS, export_row, to_csv_bytes
from utils.upload_manager import UploadManager


def write_export(path, *rows):
    path.write_bytes(to_csv_bytes(METADATA_ROWS + list(rows)))
    return path


def test_upload_stores_every_file(tmp_path, repository):
    first = write_export(tmp_path / "week10.csv", export_row(), export_row(player="Levi"))
    second = write_export(tmp_path / "week11.csv", export_row(day="10/03/2025"))
    progress = []

    result = UploadManager(repository).upload_files(
        [first, second],
        progress_callback=lambda status, current, total: progress.append((current, total))
    )

    assert result.is_success
    assert result.message == "Successfully uploaded 2 file(s)!"
    assert result.files_processed == 2
    assert result.records_uploaded == 3
    assert result.uploaded_files == ["week10.csv", "week11.csv"]
    assert progress == [(0, 2), (1, 2), (2, 2)]
    assert repository.date_range() == (date(2025, 3, 3), date(2025, 3, 10))


def test_non_csv_files_only(tmp_path, repository):
    notes = tmp_path / "notes.txt"
    notes.write_text("not an export")

    result = UploadManager(repository).upload_files([notes])

    assert not result.is_success
    assert "CSV files only" in result.message
    assert result.skipped_files == ["notes.txt"]
    assert repository.count() == 0


def test_non_csv_files_are_skipped(tmp_path, repository):
    export = write_export(tmp_path / "week10.csv", export_row())
    image = tmp_path / "chart.png"
    image.write_bytes(b"\x89PNG")

    result = UploadManager(repository).upload_files([image, export])

    assert result.is_success
    assert result.skipped_files == ["chart.png"]
    assert result.total_files == 1
    assert repository.count() == 1


def test_bad_file_stops_the_upload(tmp_path, repository):
    good = write_export(tmp_path / "week10.csv", export_row())
    bad = tmp_path / "broken.csv"
    bad.write_bytes(b"\xff\xfe\xfa,\x81\x82\n\xc3\x28,x\n")
    never_reached = write_export(tmp_path / "week12.csv", export_row(day="17/03/2025"))

    result = UploadManager(repository).upload_files([good, bad, never_reached])

    assert not result.is_success
    assert result.message == 'Error processing file "broken.csv". Please check the file format.'
    assert result.files_processed == 1
    assert result.uploaded_files == ["week10.csv"]
    assert repository.count() == 1
