"""Query layer for database operations using SQLAlchemy Core."""

from .settings import get_setting, set_setting

__all__ = [
    # Settings
    "get_setting",
    "set_setting",
]
