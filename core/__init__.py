"""
Core business logic - platform-agnostic.
Used by the web API entry point and the maintenance scripts.
"""

# Configuration
from .config import ConfigError, GameNightConfig

# Database (SQLAlchemy)
from .database import get_connection, get_transaction, get_engine, close_engine

# Persistent settings
from .settings_store import USER_LIMIT_KEY, DatabaseSettingsStore, SettingsStore

__all__ = [
    # Configuration
    'ConfigError', 'GameNightConfig',
    # Database (SQLAlchemy)
    'get_connection', 'get_transaction', 'get_engine', 'close_engine',
    # Settings
    'USER_LIMIT_KEY', 'DatabaseSettingsStore', 'SettingsStore',
]
