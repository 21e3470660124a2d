"""
Database module for the helpdesk API.

Provides the Supabase client factory and the store implementations the
services are built on.
"""

from helpdesk.database.memory_store import MemoryStore
from helpdesk.database.supabase_client import create_supabase_client
from helpdesk.database.supabase_store import SupabaseLabelStore, SupabaseProfileStore


__all__ = [
    'MemoryStore',
    'SupabaseLabelStore',
    'SupabaseProfileStore',
    'create_supabase_client',
]
