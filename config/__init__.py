"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    configure_logging: structlog setup for the host application
    get_supabase_client: Function to get Supabase client
"""

from config.settings import settings, get_settings, Settings
from config.logging import configure_logging
from config.database import (
    get_supabase_client,
    reset_connection,
    ConnectionError
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",
    
    # Logging
    "configure_logging",
    
    # Database
    "get_supabase_client",
    "reset_connection",
    "ConnectionError",
]
