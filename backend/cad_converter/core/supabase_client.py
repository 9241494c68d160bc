"""
Supabase client initialization and configuration.

This module provides a singleton Supabase client instance built with the
service-role key, for database and storage operations throughout the
application.
"""

from typing import Optional
from supabase import create_client, Client
from cad_converter.core.config import Settings
from cad_converter.core.logger import logger


class SupabaseClient:
    """Singleton wrapper for Supabase client."""

    _instance: Optional[Client] = None

    @classmethod
    def get_client(cls, settings: Settings) -> Client:
        """
        Get or create the Supabase client instance.

        Args:
            settings: Validated application settings

        Returns:
            Supabase client instance

        Raises:
            ValueError: If the Supabase credentials are missing
        """
        if cls._instance is None:
            if not settings.supabase_url or not settings.supabase_service_role_key:
                raise ValueError(
                    "Missing Supabase credentials. Please set SUPABASE_URL and "
                    "SUPABASE_SERVICE_ROLE_KEY environment variables."
                )

            cls._instance = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
            logger.info("Supabase client initialized successfully")

        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the client instance (useful for testing)."""
        cls._instance = None


def get_supabase(settings: Settings) -> Client:
    """Get the Supabase client instance."""
    return SupabaseClient.get_client(settings)
