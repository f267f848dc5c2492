"""Core app configuration, storage wiring and password hashing."""

from roster.core.config import get_settings, settings
from roster.core.database import create_session_factory

__all__ = ["get_settings", "settings", "create_session_factory"]
