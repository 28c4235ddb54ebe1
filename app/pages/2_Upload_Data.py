"""Upload page for training-load CSV exports."""

import sys
from pathlib import Path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st
from app.components.sidebar import render_sidebar
from config.settings import settings
from utils.load_repository import StorageError
from utils.upload_manager import UploadManager
from utils.logger import get_logger, log_exception

logger = get_logger(__name__)

# Page config
st.set_page_config(
    page_title="Upload Data - Squad Load Analytics",
    page_icon="📤",
    layout="wide"
)

# Render sidebar
render_sidebar()


def main():
    """Main upload page logic."""
    st.title("📤 Upload Fitness Data")

    st.markdown(
        "Upload CSV exports with training-load data. The first "
        f"**{settings.CSV_HEADER_ROWS}** rows of each file are export metadata "
        f"and are skipped; data starts on row {settings.CSV_HEADER_ROWS + 1}."
    )

    uploaded_files = st.file_uploader(
        "Drop your CSV files here, or click to browse",
        type=None,
        accept_multiple_files=True,
        help="Supports multiple CSV files with fitness data"
    )

    if not uploaded_files:
        st.info("📁 No files selected")
        render_recent_upload()
        return

    st.caption(f"{len(uploaded_files)} file(s) selected")

    if st.button("📤 Upload", type="primary", use_container_width=True):
        perform_upload(uploaded_files)

    render_recent_upload()


def perform_upload(uploaded_files):
    """Upload files with progress indicator."""
    progress_bar = st.progress(0)
    status_text = st.empty()

    def progress_callback(status: str, current: int, total: int):
        """Update progress bar and status."""
        progress = current / total if total > 0 else 0
        progress_bar.progress(progress)
        status_text.text(status)

    try:
        result = UploadManager().upload_files(uploaded_files, progress_callback=progress_callback)
    except StorageError as e:
        log_exception(logger, e, "Preparing upload")
        st.error(f"❌ {e}")
        return
    finally:
        progress_bar.empty()
        status_text.empty()

    if result.skipped_files:
        st.warning(f"⚠️ Skipped non-CSV files: {', '.join(result.skipped_files)}")

    if result.is_success:
        st.success(
            f"✅ {result.message}\n\n"
            f"**{result.records_uploaded}** records from "
            f"**{result.files_processed}** file(s) uploaded"
        )
        st.session_state.recent_upload = result
        st.balloons()
    else:
        st.error(f"❌ {result.message}")
        if result.files_processed:
            st.caption(
                f"{result.files_processed} of {result.total_files} file(s) were stored "
                "before the error."
            )


def render_recent_upload():
    """Show the files of the last successful upload in this session."""
    recent = st.session_state.get("recent_upload")
    if not recent:
        return

    with st.expander("📜 Last upload"):
        for name in recent.uploaded_files:
            st.write(f"- {name}")
        st.caption(f"{recent.records_uploaded} records")


if __name__ == "__main__":
    main()
