"""Main Streamlit application entry point."""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st
from app.components.sidebar import render_sidebar
from app.components.metrics_cards import display_kpi_row
from config.settings import settings, validate_settings
from utils.load_repository import LoadRepository, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

# Page configuration
st.set_page_config(
    page_title=settings.APP_NAME,
    page_icon="⚽",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "About": f"# {settings.APP_NAME}\nWeekly training load for the fitness and performance staff"
    }
)

# Custom CSS
st.markdown("""
    <style>
    .main {
        padding-top: 1rem;
    }
    .stMetric {
        background-color: #f0f2f6;
        padding: 15px;
        border-radius: 5px;
    }
    .stButton>button {
        width: 100%;
    }
    </style>
    """, unsafe_allow_html=True)


def main():
    """Main application logic."""
    try:
        validate_settings()
    except ValueError as e:
        logger.error(str(e))
        st.error(f"### Configuration Error\n\n{e}")
        st.stop()

    render_sidebar()

    st.title(f"⚽ {settings.APP_NAME}")

    st.markdown("""
    ### Weekly training load for the performance staff

    - 📤 **Upload** CSV exports from the GPS sensor platform
    - 📅 **Analyse** each player's weekly distance and virtual intensity
    - 🎯 **Set** weekly distance and intensity targets
    - 📝 **Annotate** weeks with notes (injuries, national team duty, ...)
    """)

    st.markdown("---")
    show_overview()
    st.markdown("---")
    show_getting_started()


def show_overview():
    """Display record counts from the database."""
    st.markdown("### 📊 Overview")

    try:
        repository = LoadRepository()
        record_count = repository.count()
        player_count = repository.count_players()
        first_date, last_date = repository.date_range()
    except StorageError as e:
        logger.error(f"Error loading overview data: {e}")
        st.error("Error loading data. Check the database connection in your .env file.")
        return

    if record_count == 0:
        st.info("👈 No data yet. Open **Upload Data** in the sidebar to get started.")
        return

    display_kpi_row([
        {"label": "Records", "value": f"{record_count:,}"},
        {"label": "Players", "value": player_count},
        {"label": "First session", "value": f"{first_date:%d/%m/%Y}"},
        {"label": "Last session", "value": f"{last_date:%d/%m/%Y}"},
    ])


def show_getting_started():
    """Display the first steps guide."""
    st.markdown("### 🚀 Getting Started")

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("""
        **1. Upload your data**
        - Go to 📤 Upload Data
        - Drop one or more CSV exports
        - Rows without a player or date are skipped
        """)

    with col2:
        st.markdown("""
        **2. Review the week**
        - 📅 Weekly Analysis: table, trends and CSV export
        - Edit the weekly target below the table
        - ⚙️ Settings: intensity model and database
        """)


if __name__ == "__main__":
    main()
