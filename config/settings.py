"""Centralized configuration management using environment variables."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

# Load environment variables from .env file
load_dotenv()

# Project root directory
ROOT_DIR = Path(__file__).parent.parent


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        """Initialize settings from the environment."""
        # Database Configuration (SQLite locally, hosted PostgreSQL in production)
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            f"sqlite:///{ROOT_DIR}/data/squad_load.db"
        )

        # Ensure data directory exists for SQLite
        if self.DATABASE_URL.startswith("sqlite"):
            data_dir = ROOT_DIR / "data"
            data_dir.mkdir(exist_ok=True)

        # App Settings
        self.APP_NAME: str = os.getenv("APP_NAME", "Squad Load Analytics")
        self.DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # CSV export layout (metadata rows before the first data row)
        self.CSV_HEADER_ROWS: int = int(os.getenv("CSV_HEADER_ROWS", "10"))

        # Virtual intensity scales, set by the sports-science staff
        self.VIR_ACCELERATION_SCALE: float = float(os.getenv("VIR_ACCELERATION_SCALE", "30"))
        self.VIR_DECELERATION_SCALE: float = float(os.getenv("VIR_DECELERATION_SCALE", "35"))
        self.VIR_HSR_SCALE: float = float(os.getenv("VIR_HSR_SCALE", "600"))

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.DEBUG


# Global settings instance
settings = Settings()


# Database engine and session management
_engine: Optional[object] = None
_SessionLocal: Optional[sessionmaker] = None


def get_database_engine():
    """Get or create database engine singleton."""
    global _engine
    if _engine is None:
        connect_args = {}
        if settings.DATABASE_URL.startswith("sqlite"):
            # SQLite specific configuration
            connect_args = {"check_same_thread": False}

        _engine = create_engine(
            settings.DATABASE_URL,
            connect_args=connect_args,
            echo=settings.DEBUG,  # Log SQL queries in debug mode
            pool_pre_ping=True,  # Verify connections before using
        )
    return _engine


def get_session_maker() -> sessionmaker:
    """Get or create session maker."""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_database_engine()
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine
        )
    return _SessionLocal


def get_database_session() -> Session:
    """Get a new database session."""
    SessionLocal = get_session_maker()
    return SessionLocal()


def validate_settings():
    """Validate all settings are correctly configured."""
    errors = []

    # Check database URL
    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not configured")

    if settings.CSV_HEADER_ROWS < 0:
        errors.append("CSV_HEADER_ROWS must not be negative")

    for name in ("VIR_ACCELERATION_SCALE", "VIR_DECELERATION_SCALE", "VIR_HSR_SCALE"):
        if getattr(settings, name) <= 0:
            errors.append(f"{name} must be greater than zero")

    if errors:
        error_msg = "\n".join([f"  - {err}" for err in errors])
        raise ValueError(f"Configuration errors:\n{error_msg}\n\nPlease update your .env file.")

    return True
