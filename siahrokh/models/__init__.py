"""Database models."""
from siahrokh.models.base import Base, init_db, make_engine, make_session_factory
from siahrokh.models.tournament import Tournament
from siahrokh.models.registration import Registration
from siahrokh.models.app_settings import SETTINGS_ROW_ID, AppSettings

__all__ = [
    "Base",
    "Tournament",
    "Registration",
    "AppSettings",
    "SETTINGS_ROW_ID",
    "init_db",
    "make_engine",
    "make_session_factory",
]
