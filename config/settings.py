"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.
    
    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """
    
    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )
    
    # ===================
    # SUPABASE
    # ===================
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/public key"
    )
    
    # ===================
    # TABLES
    # ===================
    accounts_table: str = Field(
        default="accounts",
        description="Table holding accounts (id, name)"
    )
    products_table: str = Field(
        default="products",
        description="Table holding the product catalog (id, name, brand, active)"
    )
    mandatory_products_table: str = Field(
        default="mandatory_products",
        description="Table holding account/product mandatory links"
    )
    
    # ===================
    # LINKAGE SETTINGS
    # ===================
    default_product_status: str = Field(
        default="Mandatory",
        min_length=1,
        description="Status selected before the valid options are known"
    )
    product_status_options: list[str] = Field(
        default_factory=list,
        description="Valid mandatory product statuses (empty = no constraint)"
    )
    
    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    
    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"
    
    @property
    def supabase_configured(self) -> bool:
        """Check if Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.
    
    Returns:
        Settings: Application settings
        
    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
