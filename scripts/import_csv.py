"""Import CSV exports from disk without going through the web upload."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from utils.upload_manager import UploadManager
from utils.logger import get_logger

logger = get_logger(__name__)


def collect_files(paths):
    """Expand directories into the CSV files they contain."""
    files = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(sorted(path.glob("*.csv")))
        else:
            files.append(path)
    return files


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Import training-load CSV exports")
    parser.add_argument("paths", nargs="+", help="CSV files or directories of CSV files")
    args = parser.parse_args(argv)

    files = collect_files(args.paths)
    if not files:
        logger.error("No files to import")
        return 1

    def progress(status: str, current: int, total: int):
        logger.info(f"[{current}/{total}] {status}")

    result = UploadManager().upload_files(files, progress_callback=progress)

    if not result.is_success:
        logger.error(result.message)
        return 1

    logger.info(f"{result.records_uploaded} records imported from {result.files_processed} file(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
