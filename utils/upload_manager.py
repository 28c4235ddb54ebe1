"""Upload manager for CSV training-load exports."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from utils.csv_ingestion import CsvFormatError, parse_csv_file
from utils.load_repository import LoadRepository, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class UploadResult:
    """Outcome of a multi-file upload."""

    status: str = "success"  # success, error
    message: str = ""
    files_processed: int = 0
    total_files: int = 0
    records_uploaded: int = 0
    uploaded_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.status == "success"


def _file_name(source: Any) -> str:
    """Name of a path or of an uploaded file object."""
    if isinstance(source, (str, Path)):
        return Path(source).name
    return getattr(source, "name", "upload.csv")


class UploadManager:
    """
    Parses CSV exports and stores their records.

    Files are processed one after another. The first failing file stops the
    upload; files stored before it stay stored.
    """

    def __init__(self, repository: Optional[LoadRepository] = None):
        """
        Args:
            repository: Storage for parsed records, defaults to the configured database
        """
        self.repository = repository or LoadRepository()

    def upload_files(
        self,
        files: Sequence[Any],
        progress_callback: Optional[Callable[[str, int, int], None]] = None
    ) -> UploadResult:
        """
        Upload several CSV exports.

        Args:
            files: Paths or file-like objects with a ``name``
            progress_callback: Optional callback function(status, current, total)

        Returns:
            Upload result
        """
        csv_files = [f for f in files if _file_name(f).lower().endswith(".csv")]
        skipped = [_file_name(f) for f in files if f not in csv_files]

        if not csv_files:
            return UploadResult(
                status="error",
                message="Please upload CSV files only",
                skipped_files=skipped,
            )

        if skipped:
            logger.warning(f"Filtered out {len(skipped)} non-CSV files: {', '.join(skipped)}")

        result = UploadResult(total_files=len(csv_files), skipped_files=skipped)
        logger.info(f"Starting upload of {len(csv_files)} file(s)")

        for i, source in enumerate(csv_files):
            name = _file_name(source)

            if progress_callback:
                progress_callback(
                    f"Processing file {i + 1} of {len(csv_files)}: {name}",
                    i,
                    len(csv_files)
                )

            try:
                records = parse_csv_file(source)
                if records:
                    result.records_uploaded += self.repository.insert_records(records)
            except CsvFormatError as e:
                logger.error(f"Processing error for file {name}: {e}")
                result.status = "error"
                result.message = f'Error processing file "{name}". Please check the file format.'
                return result
            except StorageError as e:
                logger.error(f"Database error for file {name}: {e}")
                result.status = "error"
                result.message = f'Database error in file "{name}": {e}'
                return result

            result.files_processed += 1
            result.uploaded_files.append(name)
            logger.info(f"Uploaded {len(records)} records from {name}")

        if progress_callback:
            progress_callback("Upload completed", len(csv_files), len(csv_files))

        result.message = f"Successfully uploaded {len(csv_files)} file(s)!"
        logger.info(
            f"Upload completed: {result.records_uploaded} records from {result.files_processed} file(s)"
        )
        return result
