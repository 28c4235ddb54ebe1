"""Configuration module for Squad Load Analytics."""

from config.settings import settings, get_database_engine, get_database_session

__all__ = ["settings", "get_database_engine", "get_database_session"]
