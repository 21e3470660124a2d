from supabase import create_client, Client
import logging

from helpdesk.utils.constants import Settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Client:
    """Create a Supabase client from settings; the application factory owns the result."""
    if not settings.SUPABASE_SECRET_KEY or not settings.SUPABASE_URL:
        raise ValueError("SUPABASE_SECRET_KEY and SUPABASE_URL must be set in environment variables")

    logger.info(f"Connecting to Supabase at {settings.SUPABASE_URL}")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SECRET_KEY)
