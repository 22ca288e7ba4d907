"""
Database connection management.

Provides the Supabase client singleton used by the linkage gateway.
"""

from supabase import create_client, Client
from functools import lru_cache
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class ConnectionError(Exception):
    """Failed to connect to database."""
    pass


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance.
    
    Uses lru_cache to ensure only one client is created.
    Call get_supabase_client.cache_clear() to reconnect.
    
    Returns:
        Client: Supabase client
        
    Raises:
        ConnectionError: If credentials are missing or connection fails
    """
    if not settings.supabase_configured:
        logger.error("supabase_not_configured")
        raise ConnectionError("SUPABASE_URL and SUPABASE_KEY must be set")
    
    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )
        
        client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )
        
        logger.info(
            "supabase_connected",
            status="success"
        )
        
        return client
        
    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise ConnectionError(f"Failed to connect to Supabase: {e}") from e


def reset_connection():
    """
    Reset the cached database connection.
    
    Call this if connection becomes stale or after config changes.
    """
    get_supabase_client.cache_clear()
    logger.info("database_connection_reset")
