"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    get_supabase_client: Cached Supabase client
    check_connection: Health check function
    FulfillmentConfig: Scoring/ranking tables injected into the core
    get_fulfillment_config: FulfillmentConfig built from settings
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    get_supabase_client,
    check_connection,
    reset_connection,
    DatabaseError,
    ConnectionError
)
from config.fulfillment import (
    FulfillmentConfig,
    ClassificationRule,
    WeightRule,
    DEFAULT_FULFILLMENT_CONFIG,
    get_fulfillment_config,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "get_supabase_client",
    "check_connection",
    "reset_connection",
    "DatabaseError",
    "ConnectionError",

    # Fulfillment
    "FulfillmentConfig",
    "ClassificationRule",
    "WeightRule",
    "DEFAULT_FULFILLMENT_CONFIG",
    "get_fulfillment_config",
]
