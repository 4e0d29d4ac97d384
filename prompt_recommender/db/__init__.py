"""
Database access layer for the Prompt Recommender backend.

All database operations MUST:
- Respect Row Level Security (RLS): user_id = auth.uid() for signed-in users
- Never bypass RLS

DO NOT define table schemas, migrations, or RLS policies here.

Includes:
- Supabase client initialization (per-user and publishable-key clients)
"""

from .client import get_public_supabase_client, get_supabase_client

__all__ = ["get_public_supabase_client", "get_supabase_client"]
