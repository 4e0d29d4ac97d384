"""
Supabase client factory.

Authenticated callers get a client carrying their JWT so that Row Level
Security scopes every query to user_id = auth.uid(). Anonymous callers get a
client with the publishable key only; the recommendations table must allow
anonymous inserts for user_id = 'anonymous'.

NEVER use the service_role key from this module.
"""

import logging

from prompt_recommender.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    Args:
        access_token: The user's JWT access token from Supabase Auth,
                     as verified in prompt_recommender/auth/dependencies.py.

    Returns:
        An authenticated Supabase client that enforces RLS.

    Example:
        >>> client = get_supabase_client(auth_user.access_token)
        >>> result = client.table("recommendations").select("*").execute()
    """
    client = get_public_supabase_client()

    # The token's 'sub' claim is what RLS policies see as auth.uid()
    client.auth.set_session(access_token, access_token)

    logger.debug(
        "Created authenticated Supabase client with user token "
        "(RLS enforced)"
    )

    return client


def get_public_supabase_client() -> Client:
    """
    Create a Supabase client with the publishable key and no user session.

    Used to save recommendations requested by anonymous callers.
    """
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )
